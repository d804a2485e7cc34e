"""Domain model and PostgreSQL storage for nutrition, workout and life-progress tracking."""

__version__ = "1.0.0"