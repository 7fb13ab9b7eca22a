"""TDS protocol building blocks and interactive SQL terminal helpers."""

__version__ = "0.1.0"