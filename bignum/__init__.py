"""Exact decimal arithmetic over Redis values."""
__version__ = "1.0.0"
