"""Progression and gate engines."""
