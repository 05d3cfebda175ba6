"""tasktable - in-memory task table with filtering and inline editing."""

__version__ = "0.1.0"
