"""Weekly nutrition menu planner."""

__version__ = "0.1.0"
