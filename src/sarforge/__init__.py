"""sarforge - security assessment report generation for control self-assessments."""

__version__ = "1.0.0"
