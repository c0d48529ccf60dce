"""Registrar: conversational task orchestration for a university virtual assistant."""

__version__ = "0.1.0"
