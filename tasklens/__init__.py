"""tasklens: personal task tracking with filtered, sorted task views."""

__version__ = "0.1.0"
