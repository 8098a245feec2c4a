"""Parametric pegboard enclosure generator."""

__version__ = "0.1.0"
