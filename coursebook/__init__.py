"""Course structure, schedules and exercise extraction for mdBook-style books."""

__version__ = "0.1.0"