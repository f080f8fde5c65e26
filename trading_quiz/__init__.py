"""Trading Quiz backend: chart predictions scored with an Elo-style rating."""

__version__ = "0.3.0"
