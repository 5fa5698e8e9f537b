"""datewise — UTC-first date and time toolkit."""

__version__ = "0.1.0"
