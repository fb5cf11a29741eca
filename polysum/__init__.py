"""Multilingual text summarization over hosted inference endpoints."""

__version__ = "1.0.0"
