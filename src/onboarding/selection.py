"""
Symptom selection.

Membership-only set of symptom ids the user has toggled on.
Lives for one session; never persisted.
"""

import logging

from .catalog import DEFAULT_CATALOG, SymptomCatalog

logger = logging.getLogger(__name__)


class SelectionSet:
    """Toggle-only set of selected symptom ids, restricted to one catalog."""

    def __init__(self, catalog: SymptomCatalog = DEFAULT_CATALOG):
        self._catalog = catalog
        self._ids: set[str] = set()

    def toggle(self, symptom_id: str) -> bool:
        """
        Flip membership of `symptom_id`.

        Returns True if the id is selected afterwards. Ids outside the
        catalog are ignored (logged) and report False.
        """
        if symptom_id not in self._catalog:
            logger.warning(f"Ignoring toggle of unknown symptom: {symptom_id!r}")
            return False

        if symptom_id in self._ids:
            self._ids.remove(symptom_id)
            return False
        self._ids.add(symptom_id)
        return True

    def __contains__(self, symptom_id: object) -> bool:
        return symptom_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)

    @property
    def is_empty(self) -> bool:
        return not self._ids

    def snapshot(self) -> list[str]:
        """Selected ids in catalog display order."""
        return [sid for sid in self._catalog.ids() if sid in self._ids]
