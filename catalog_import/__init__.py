"""Menu catalog import and normalization engine."""

__version__ = "2.0.0"
