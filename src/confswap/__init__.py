"""Save and switch between configuration profiles for AI coding tools."""

__version__ = "0.1.0"
