"""Daily wellness check-in service for oncology exercise guidance."""

__version__ = "1.0.0"
