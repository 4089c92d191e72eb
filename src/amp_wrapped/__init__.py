"""Amp year-in-review usage statistics."""

__version__ = "1.0.0"
