"""
Snapshot of the styles available on disk.

The registry is built once at startup from the independent and dependent
style directories and never refreshed; a style added afterwards stays
invisible until restart. The only mutation after load is memoizing the
parent of a dependent style the first time it is resolved.
"""
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional

from common.logging import logger


class StyleKind(str, Enum):
    INDEPENDENT = "independent"
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class StyleEntry:
    """Registry state of a single short name"""
    kind: StyleKind
    parent: Optional[str] = None


INDEPENDENT = StyleEntry(StyleKind.INDEPENDENT)
UNRESOLVED = StyleEntry(StyleKind.UNRESOLVED)


class StyleRegistry:
    """Known independent styles plus a memo table of dependent-style parents."""

    def __init__(self, independent: Iterable[str], dependent: Iterable[str]):
        self._independent: FrozenSet[str] = frozenset(independent)
        self._lock = threading.Lock()

        dependent = frozenset(dependent)
        overlap = dependent & self._independent
        if overlap:
            # Independent wins; a name may only live in one table
            logger.warning(f"Ignoring dependent styles shadowed by independent ones: {sorted(overlap)}")
        self._dependent: Dict[str, StyleEntry] = {
            name: UNRESOLVED for name in dependent - overlap}

    @property
    def independent_names(self) -> FrozenSet[str]:
        return self._independent

    @property
    def dependent_names(self) -> FrozenSet[str]:
        return frozenset(self._dependent)

    def lookup(self, short_name: str) -> Optional[StyleEntry]:
        """Return the entry for ``short_name``, or None if the style is unknown."""
        if short_name in self._independent:
            return INDEPENDENT
        return self._dependent.get(short_name)

    def is_independent(self, short_name: str) -> bool:
        return short_name in self._independent

    def is_dependent(self, short_name: str) -> bool:
        return short_name in self._dependent

    def parent_of(self, short_name: str) -> Optional[str]:
        entry = self._dependent.get(short_name)
        return entry.parent if entry else None

    def record_parent(self, short_name: str, parent: str) -> StyleEntry:
        """
        Memoize the parent of a dependent style.

        The first write wins. Concurrent resolvers compute the same parent, so
        a repeated write with the same value is a no-op.

        Raises:
            KeyError: ``short_name`` is not a dependent style
        """
        with self._lock:
            entry = self._dependent[short_name]
            if entry.kind is StyleKind.RESOLVED:
                if entry.parent != parent:
                    logger.warning(
                        f"Style {short_name} already resolved to {entry.parent}, ignoring {parent}")
                return entry
            entry = StyleEntry(StyleKind.RESOLVED, parent)
            self._dependent[short_name] = entry
            return entry

    def stats(self) -> Dict[str, int]:
        resolved = sum(1 for e in self._dependent.values() if e.kind is StyleKind.RESOLVED)
        return {
            "independent": len(self._independent),
            "dependent": len(self._dependent),
            "resolved": resolved,
        }


def load_style_registry(store) -> StyleRegistry:
    """
    Build the registry from a StyleStore. Runs synchronously at startup.

    Raises:
        RegistryLoadError: either style directory cannot be enumerated
    """
    registry = StyleRegistry(store.list_independent(), store.list_dependent())
    logger.info(
        f"Loaded {len(registry.independent_names)} independent and "
        f"{len(registry.dependent_names)} dependent styles")
    return registry
