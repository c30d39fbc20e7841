"""Mirror Wise Old Man clan competitions into a local config store."""

__version__ = "0.1.0"
