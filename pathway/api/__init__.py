"""HTTP surface over the progression engine."""
