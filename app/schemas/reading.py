"""
Reading section schema shared by the generator and the reading store.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReadingSections:
    kundali_section: str
    recommendations_section: str
    practice_section: str

    def is_complete(self) -> bool:
        return all(
            section.strip()
            for section in (self.kundali_section, self.recommendations_section, self.practice_section)
        )
