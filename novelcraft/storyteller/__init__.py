"""
Story blueprints: the chapter tree, its static tables, the resolver and
the registry of resolved blueprints.
"""

from novelcraft.storyteller.blueprint_types import (
    Tension,
    Ending,
    Modifier,
    StoryContext,
    Condition,
    Blueprint,
    BlueprintPhase,
    ResolvedChapter,
    ResolvedEmploymentGroup,
)
from novelcraft.storyteller.blueprint_resolver import (
    DEFAULT_TROPE,
    LEGAL_CONTEXTS,
    resolve_blueprint,
    resolve_context,
)
from novelcraft.storyteller.blueprint_registry import (
    BlueprintRegistry,
    blueprint_key,
    initialize_registry,
    get_registry,
    get_blueprint,
    has_blueprint,
)

__all__ = [
    "Tension",
    "Ending",
    "Modifier",
    "StoryContext",
    "Condition",
    "Blueprint",
    "BlueprintPhase",
    "ResolvedChapter",
    "ResolvedEmploymentGroup",
    "DEFAULT_TROPE",
    "LEGAL_CONTEXTS",
    "resolve_blueprint",
    "resolve_context",
    "BlueprintRegistry",
    "blueprint_key",
    "initialize_registry",
    "get_registry",
    "get_blueprint",
    "has_blueprint",
]
