"""
Supporting cast archetypes and expected roles, keyed by tension.

The blueprint names functions, not people. Phase 2 (cast generation)
turns these into named characters for a specific story.
"""

from typing import Dict, Tuple

from novelcraft.storyteller.blueprint_types import CastMember, Tension


TROPES: Dict[str, str] = {
    "enemies_to_lovers": "Enemies to Lovers",
}


# Characters every blueprint of a tension expects (roles, not names)
EXPECTED_ROLES: Dict[Tension, Dict[str, str]] = {
    Tension.SAFETY: {
        "protagonist": "Female lead. Protecting something. Safety matters to her.",
        "primary": "Male love interest. Enters as hostile force. Dangerous but magnetic.",
    },
    Tension.IDENTITY: {
        "protagonist": "Female lead. Defined by a role she was raised to fill. Who she is matters to her.",
        "primary": "Male love interest. Stands for what her world rejects. Sees who she really is.",
    },
}

# Added only when the love triangle modifier is active
TRIANGLE_ROLES: Dict[str, str] = {
    "rival": "Safe option. Genuinely appealing at first. Becomes possessive, then villain.",
}


CAST: Dict[Tension, Tuple[CastMember, ...]] = {
    Tension.SAFETY: (
        CastMember(
            function="The dependant",
            description="Someone who relies on what she protects. Their need keeps the pressure real.",
            employment=(
                "A younger sibling",
                "An ageing parent",
                "Employees who would lose their livelihood",
                "A child in her care",
            ),
        ),
        CastMember(
            function="The ally",
            description="Her confidante inside her own world. Sees the primary more clearly than she does.",
            employment=(
                "A best friend who says what she won't",
                "A co-worker who has seen her at her worst",
                "An older mentor who has been afraid before",
            ),
        ),
        CastMember(
            function="His second",
            description="Someone from the primary's world who knows who he really is.",
            employment=(
                "A sibling who remembers him before the hardness",
                "A right hand who owes him everything",
                "An old friend who disapproves of his work",
            ),
        ),
        CastMember(
            function="The rival's eyes",
            description="Someone loyal to the rival who reports on her. The source of his leverage.",
            employment=(
                "An employee of hers he pays on the side",
                "A relative who wants the rival's money",
                "A friend of the rival's who is always around",
            ),
            requires_triangle=True,
        ),
        CastMember(
            function="The one who finally sees",
            description="Someone from her world who turns on the rival in the reversal.",
            employment=(
                "The person she protected, grown brave",
                "Her ally, once the evidence is undeniable",
                "Someone the rival underestimated",
            ),
            requires_triangle=True,
        ),
    ),
    Tension.IDENTITY: (
        CastMember(
            function="The family voice",
            description="The person who embodies the expectation she was raised with.",
            employment=(
                "A parent who sacrificed for the family name",
                "A grandparent who holds the purse strings",
                "An older sibling who already conformed",
            ),
        ),
        CastMember(
            function="The mirror",
            description="Someone who made the opposite choice, for better or worse.",
            employment=(
                "A cousin who left and was cut off",
                "A friend who stayed and is quietly miserable",
                "A former heir who walked away",
            ),
        ),
        CastMember(
            function="His bridge",
            description="Someone who moves between his world and hers and knows both.",
            employment=(
                "A friend of his who grew up in her world",
                "A go-between both families use",
                "A colleague who sees them both clearly",
            ),
        ),
    ),
}
