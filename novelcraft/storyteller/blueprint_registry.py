"""
Blueprint registry.

Holds one resolved Blueprint per legal trope x tension x ending x modifier
combination, keyed "trope|tension|ending|modifier". The registry is
populated once (explicitly via populate()/initialize_registry(), or on
first lookup) and is read-only afterwards.
"""

from enum import Enum
from threading import Lock
from typing import Dict, Iterator, List, Optional

from novelcraft.storyteller.blueprint_resolver import LEGAL_CONTEXTS, resolve_context
from novelcraft.storyteller.blueprint_types import Blueprint
from novelcraft.storyteller.cast_table import TROPES
from novelcraft.utils.logging import blueprint_logger as logger


def _token(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def blueprint_key(trope, tension, ending, modifier) -> str:
    """Key format: "trope|tension|ending|modifier" (modifier: both, love_triangle, secret, none)."""
    return "|".join(_token(v) for v in (trope, tension, ending, modifier))


class BlueprintRegistry:
    """
    Memoised blueprints for every legal combination.

    Lookups are exact: an unknown key returns None, never a nearest match.
    """

    def __init__(self):
        self._blueprints: Dict[str, Blueprint] = {}
        self._populated = False
        self._lock = Lock()

    def populate(self) -> "BlueprintRegistry":
        """Resolve and store every legal combination. Safe to call more than once."""
        if self._populated:
            return self
        with self._lock:
            if self._populated:
                return self
            blueprints = {}
            for trope in TROPES:
                for context in LEGAL_CONTEXTS:
                    blueprint = resolve_context(context, trope)
                    blueprints[blueprint.id] = blueprint
            self._blueprints = blueprints
            self._populated = True
        logger.info("Blueprint registry populated", count=len(self._blueprints))
        return self

    @property
    def populated(self) -> bool:
        return self._populated

    def get(self, trope, tension, ending, modifier) -> Optional[Blueprint]:
        self.populate()
        return self._blueprints.get(blueprint_key(trope, tension, ending, modifier))

    def has(self, trope, tension, ending, modifier) -> bool:
        return self.get(trope, tension, ending, modifier) is not None

    def keys(self) -> List[str]:
        self.populate()
        return list(self._blueprints)

    def __contains__(self, key: str) -> bool:
        self.populate()
        return key in self._blueprints

    def __iter__(self) -> Iterator[Blueprint]:
        self.populate()
        return iter(list(self._blueprints.values()))

    def __len__(self) -> int:
        self.populate()
        return len(self._blueprints)


# Process-wide registry
_registry: Optional[BlueprintRegistry] = None
_registry_lock = Lock()


def initialize_registry() -> BlueprintRegistry:
    """Build the process-wide registry. Call once from the host's startup sequence."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = BlueprintRegistry()
    return _registry.populate()


def get_registry() -> BlueprintRegistry:
    """Get the process-wide registry, initialising it on first use."""
    if _registry is None or not _registry.populated:
        return initialize_registry()
    return _registry


def get_blueprint(trope, tension, ending, modifier) -> Optional[Blueprint]:
    return get_registry().get(trope, tension, ending, modifier)


def has_blueprint(trope, tension, ending, modifier) -> bool:
    return get_registry().has(trope, tension, ending, modifier)
