"""
Stable kernel layer: the learner record and the action vocabulary.

Invariants:
- The record is only mutated by ProgressionEngine.dispatch
- xp and level only move forward outside of debug/demo actions
"""
