"""Static learning content consumed as plain data."""

from pathway.pedagogy.catalog import (
    Catalog,
    DEFAULT_CATALOG,
    EventDefinition,
    QuizQuestion,
    StepType,
    TaskDefinition,
    UnitDefinition,
    UnitStep,
)

__all__ = [
    "Catalog",
    "DEFAULT_CATALOG",
    "EventDefinition",
    "QuizQuestion",
    "StepType",
    "TaskDefinition",
    "UnitDefinition",
    "UnitStep",
]
