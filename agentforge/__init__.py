"""Composable building blocks for LLM-powered applications."""

__version__ = "0.1.0"