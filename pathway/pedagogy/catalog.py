"""
Content catalog - units, tasks and events as plain data.

The engine only ever sees ids and XP values from here; step content is read
by the unit state machine.
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field


class StepType(str, Enum):
    """Kinds of unit steps."""
    READ = "read"
    QUIZ = "quiz"
    CHECKLIST = "checklist"
    REFLECTION = "reflection"
    UPLOAD = "upload"


class QuizQuestion(BaseModel):
    """Multiple-choice question inside a quiz step."""

    prompt: str
    options: List[str]
    correct: int  # index into options
    explanation: str = ""


class UnitStep(BaseModel):
    """One step of a unit. Only the fields relevant to its type are set."""

    type: StepType
    title: str
    icon: str = ""
    body: Optional[str] = None                 # read
    questions: List[QuizQuestion] = []         # quiz
    items: List[str] = []                      # checklist
    prompt: Optional[str] = None               # reflection
    min_words: Optional[int] = None            # reflection; None uses the configured default
    instruction: Optional[str] = None          # upload
    accept: List[str] = []                     # upload, mime patterns


class UnitDefinition(BaseModel):
    """A learning unit: ordered steps and the XP granted on first completion."""

    id: str
    title: str
    xp: int = Field(ge=0)
    minutes: int = 0
    phase: str = "discovery"
    career_path: Optional[str] = None
    description: str = ""
    steps: List[UnitStep] = []


class TaskDefinition(BaseModel):
    id: str
    title: str
    xp: int = Field(ge=0)
    difficulty: str = "easy"  # easy, med, hard
    career_path: Optional[str] = None
    description: str = ""


class EventDefinition(BaseModel):
    id: str
    title: str
    xp: int = Field(ge=0)
    kind: str = "event"  # event, meeting, workshop


# Task XP values by difficulty
TASK_XP = {
    "easy": 50,
    "med": 100,
    "hard": 150,
}


class Catalog:
    """Read-only lookup over units, tasks and events."""

    def __init__(
        self,
        units: Iterable[UnitDefinition] = (),
        tasks: Iterable[TaskDefinition] = (),
        events: Iterable[EventDefinition] = (),
    ):
        self._units: Dict[str, UnitDefinition] = {u.id: u for u in units}
        self._tasks: Dict[str, TaskDefinition] = {t.id: t for t in tasks}
        self._events: Dict[str, EventDefinition] = {e.id: e for e in events}

    def get_unit(self, unit_id: str) -> Optional[UnitDefinition]:
        return self._units.get(unit_id)

    def get_task(self, task_id: str) -> Optional[TaskDefinition]:
        return self._tasks.get(task_id)

    def get_event(self, event_id: str) -> Optional[EventDefinition]:
        return self._events.get(event_id)

    @property
    def units(self) -> List[UnitDefinition]:
        return list(self._units.values())

    @property
    def tasks(self) -> List[TaskDefinition]:
        return list(self._tasks.values())

    @property
    def events(self) -> List[EventDefinition]:
        return list(self._events.values())

    def units_for_path(self, career_path: str) -> List[UnitDefinition]:
        return [u for u in self._units.values() if u.career_path == career_path]

    def tasks_for_path(self, career_path: str) -> List[TaskDefinition]:
        return [t for t in self._tasks.values() if t.career_path == career_path]


EVIDENCE_UNIT = UnitDefinition(
    id="ML-01",
    title="Evidence Chains and Portfolio Writing",
    xp=100,
    minutes=35,
    phase="discovery",
    career_path="data-analysis",
    description="What counts as evidence and how to collect it for your portfolio.",
    steps=[
        UnitStep(
            type=StepType.READ,
            title="What is evidence?",
            icon="menu_book",
            body=(
                "Evidence is a verifiable record of the work you did. Good evidence "
                "has a date, shows who did it, shows the result and explains the context.\n\n"
                "Kinds of evidence: screenshots, screen recordings, files, links.\n\n"
                "A task without evidence is a task not done."
            ),
        ),
        UnitStep(
            type=StepType.QUIZ,
            title="Mini quiz",
            icon="quiz",
            questions=[
                QuizQuestion(
                    prompt="Which property must good evidence have?",
                    options=["Very long", "Verifiable", "Colourful", "Hidden"],
                    correct=1,
                    explanation="Others must be able to check it.",
                ),
                QuizQuestion(
                    prompt="Which of these is NOT a kind of evidence?",
                    options=["Screenshot", "Screen recording", "A thought", "File"],
                    correct=2,
                    explanation="Thoughts are not evidence; concrete output is.",
                ),
            ],
        ),
        UnitStep(
            type=StepType.CHECKLIST,
            title="Checklist",
            icon="checklist",
            items=[
                "I know how to take a screenshot",
                "I know how to record my screen",
                "I understand how uploads work",
                "I understand how the portfolio works",
            ],
        ),
        UnitStep(
            type=StepType.REFLECTION,
            title="Think and write",
            icon="edit_note",
            prompt="What did you learn this week? How ready do you feel to produce evidence?",
        ),
        UnitStep(
            type=StepType.UPLOAD,
            title="Your first evidence",
            icon="cloud_upload",
            instruction="Upload any screenshot. It becomes your first piece of evidence.",
            accept=["image/*"],
        ),
    ],
)

DATA_BASICS_UNIT = UnitDefinition(
    id="ML-02",
    title="Data Basics",
    xp=150,
    minutes=25,
    phase="discovery",
    career_path="data-analysis",
    description="Rows, columns and data types.",
    steps=[
        UnitStep(type=StepType.READ, title="What is data?", icon="menu_book",
                 body="Data is a set of recorded observations."),
        UnitStep(
            type=StepType.QUIZ,
            title="Check",
            icon="quiz",
            questions=[
                QuizQuestion(
                    prompt="A spreadsheet column usually holds...",
                    options=["One variable", "One observation"],
                    correct=0,
                ),
            ],
        ),
    ],
)

DEFAULT_CATALOG = Catalog(
    units=[EVIDENCE_UNIT, DATA_BASICS_UNIT],
    tasks=[
        TaskDefinition(id="T-01", title="Complete your profile", xp=TASK_XP["easy"],
                       difficulty="easy", career_path="data-analysis"),
        TaskDefinition(id="T-02", title="Clean a real-world dataset", xp=TASK_XP["med"],
                       difficulty="med", career_path="data-analysis"),
        TaskDefinition(id="T-03", title="Build a calculator", xp=TASK_XP["med"],
                       difficulty="med", career_path="software"),
        TaskDefinition(id="T-CAPSTONE", title="Capstone project", xp=500,
                       difficulty="hard"),
    ],
    events=[
        EventDefinition(id="EV-WELCOME", title="Welcome meeting", xp=25, kind="meeting"),
        EventDefinition(id="EV-BOT-ARENA", title="Bot Arena", xp=200, kind="event"),
        EventDefinition(id="EV-HACKATHON", title="Hackathon", xp=300, kind="event"),
    ],
)
