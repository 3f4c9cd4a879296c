"""
Reading generation.

Renders the reading prompt for a profile, asks the text generator for a
reading, and splits the answer into three sections. The provider is treated
as unreliable: any failure yields a static reading built from the profile's
own birth details, so ``ReadingGenerator.generate`` never raises.
"""
from __future__ import annotations

import re
from dataclasses import replace
from datetime import date
from typing import List, Protocol, Union

from app.interfaces.text_generation import TextGenerator
from app.logger import logger
from app.readings.prompts import READING_PROMPT, SYSTEM_INSTRUCTION
from app.schemas.reading import ReadingSections

SECTION_MARKER = re.compile(r"Section \d+:")


class BirthDetails(Protocol):
    name: str
    date_of_birth: Union[date, str]
    time_of_birth: str
    city: str
    state: str


def _format_date(value: Union[date, str]) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


def render_prompt(profile: BirthDetails) -> str:
    return READING_PROMPT.format(
        name=profile.name,
        date_of_birth=_format_date(profile.date_of_birth),
        time_of_birth=profile.time_of_birth,
        city=profile.city,
        state=profile.state,
    )


def split_sections(text: str) -> ReadingSections:
    """
    Split raw model output on ``Section <n>:`` markers.

    Fragments are stripped and empty ones dropped; the first three are
    assigned in order. Missing fragments come back as empty strings.
    """
    fragments: List[str] = [
        fragment.strip() for fragment in SECTION_MARKER.split(text) if fragment.strip()
    ]
    fragments += [""] * (3 - len(fragments))
    return ReadingSections(
        kundali_section=fragments[0],
        recommendations_section=fragments[1],
        practice_section=fragments[2],
    )


def build_fallback_sections(profile: BirthDetails) -> ReadingSections:
    """Static reading used whenever the provider cannot deliver one."""
    name = profile.name
    born = _format_date(profile.date_of_birth)
    time_of_birth = profile.time_of_birth
    place = f"{profile.city}, {profile.state}"

    return ReadingSections(
        kundali_section=(
            f"Dear {name}, your kundali is cast for {born} at {time_of_birth} in {place}. "
            "The planetary positions at the moment of your birth point to a thoughtful and "
            "resilient nature. Career matters benefit from steady, patient effort rather than "
            "sudden leaps, and relationships flourish when you communicate openly. Pay gentle "
            "attention to rest and digestion, and approach finances with a long-term view. "
            f"The energies of {profile.city} at your birth time favour learning, service and "
            "a gradual rise in responsibility over the coming years."
        ),
        recommendations_section=(
            f"For {name}, born on {born} at {time_of_birth} in {place}, simple and regular "
            "rituals bring the most benefit. Light a ghee lamp at sunrise on Sundays and offer "
            "water to the Sun to strengthen confidence. A Thursday prayer to Guru supports "
            "wisdom and good counsel. A yellow sapphire or citrine, worn only after consulting "
            "a trusted astrologer, may support clarity and prosperity. Donating food or grain "
            "on Saturdays helps ease delays and obstacles."
        ),
        practice_section=(
            f"{name}, begin each day with ten minutes of quiet breathing, the way the morning "
            f"began on {born} at {time_of_birth} in {place}. Follow it with eleven repetitions "
            "of the Gayatri mantra and a short intention for the day. In the evening, spend a "
            "few minutes in gratitude and reflection before sleep. Keep a consistent routine, "
            "eat mindfully, and take a walk in nature at least once a week to stay grounded."
        ),
    )


def complete_sections(sections: ReadingSections, fallback: ReadingSections) -> ReadingSections:
    """Fill any empty section from the fallback reading."""
    return replace(
        sections,
        kundali_section=sections.kundali_section or fallback.kundali_section,
        recommendations_section=sections.recommendations_section or fallback.recommendations_section,
        practice_section=sections.practice_section or fallback.practice_section,
    )


class ReadingGenerator:
    """Produces the three reading sections for a profile."""

    def __init__(self, text_generator: TextGenerator) -> None:
        self.text_generator = text_generator

    async def generate(self, profile: BirthDetails) -> ReadingSections:
        fallback = build_fallback_sections(profile)
        try:
            prompt = render_prompt(profile)
            text = await self.text_generator.generate(prompt, SYSTEM_INSTRUCTION)
            if not isinstance(text, str):
                raise TypeError(f"expected str from text generator, got {type(text).__name__}")
            sections = split_sections(text)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "reading_generation_fallback",
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return fallback

        if not sections.is_complete():
            logger.warning(
                "reading_generation_partial",
                kundali=bool(sections.kundali_section),
                recommendations=bool(sections.recommendations_section),
                practice=bool(sections.practice_section),
            )
            return complete_sections(sections, fallback)

        logger.info("reading_generated", source="provider")
        return sections
