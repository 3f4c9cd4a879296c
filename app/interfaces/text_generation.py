"""
Text Generation Interface/Protocol

The reading generator only needs "prompt in, text out". Anything that
implements this protocol (the OpenAI-backed adapter, a test double) can be
handed to it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextGenerator(Protocol):
    """Protocol for a single-turn chat completion provider."""

    async def generate(self, prompt: str, system_instruction: str) -> str:
        """Return the provider's message content for one system + user exchange."""
        ...
