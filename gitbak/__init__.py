"""Mirror remote source-code archives listed in a JSON manifest."""

__version__ = "0.1.0"
