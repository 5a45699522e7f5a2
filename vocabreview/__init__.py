"""Vocabulary review sessions built from imported word lists."""

__version__ = "0.1.0"
