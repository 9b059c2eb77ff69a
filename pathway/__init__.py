"""
Pathway - learner progression core.

XP, levels, journey phases, unit completion and level gates for a staged
curriculum, plus a thin HTTP surface over a single in-process engine.
"""

__version__ = "1.0.0"
