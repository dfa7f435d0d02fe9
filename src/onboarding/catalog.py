"""
Symptom Catalog.

Static, read-only lookup of the symptoms offered during onboarding.
Order of SYMPTOMS is the display order.
"""

from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Iterator


@dataclass(frozen=True)
class SymptomEntry:
    """One selectable symptom."""
    id: str
    label: str
    description: str

    def to_dict(self) -> dict:
        return asdict(self)


SYMPTOMS: tuple[SymptomEntry, ...] = (
    SymptomEntry(
        id="anxiety",
        label="Anxiety",
        description="Feeling worried, nervous, or uneasy",
    ),
    SymptomEntry(
        id="depression",
        label="Depression",
        description="Persistent feelings of sadness or loss of interest",
    ),
    SymptomEntry(
        id="ptsd",
        label="PTSD",
        description="Difficulty recovering from traumatic experiences",
    ),
    SymptomEntry(
        id="stress",
        label="Stress",
        description="Feeling overwhelmed or under pressure",
    ),
)


class SymptomCatalog:
    """Immutable registry of SymptomEntry keyed by id."""

    def __init__(self, entries: tuple[SymptomEntry, ...] = SYMPTOMS):
        by_id = {}
        for entry in entries:
            if entry.id in by_id:
                raise ValueError(f"Duplicate symptom id: {entry.id}")
            by_id[entry.id] = entry
        self._entries = tuple(entries)
        self._by_id = MappingProxyType(by_id)

    def __contains__(self, symptom_id: object) -> bool:
        return symptom_id in self._by_id

    def __iter__(self) -> Iterator[SymptomEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, symptom_id: str) -> SymptomEntry | None:
        return self._by_id.get(symptom_id)

    def ids(self) -> list[str]:
        """All ids in display order."""
        return [e.id for e in self._entries]

    def to_options(self) -> list[dict]:
        """Options for frontend rendering."""
        return [e.to_dict() for e in self._entries]


DEFAULT_CATALOG = SymptomCatalog()
