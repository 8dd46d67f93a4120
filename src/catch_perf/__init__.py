"""Catch Perf - difficulty and performance calculation for catch-the-fruit charts."""

__version__ = "0.1.0"
