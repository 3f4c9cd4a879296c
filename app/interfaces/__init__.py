"""Interfaces and protocols for SoulBuddy services."""

from app.interfaces.text_generation import TextGenerator

__all__ = [
    "TextGenerator",
]
