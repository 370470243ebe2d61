"""
Secret modifier guidance.

The concept provides the secret; the blueprint provides placement and
pacing. One bundle per tension, attached to a blueprint verbatim when
the secret modifier is active.
"""

from typing import Dict, Any

from novelcraft.storyteller.blueprint_types import Tension


_SHARED_RULES = [
    "Do not invent a secret. The concept provides it. Your job is placement and pacing.",
    "The secret can be held by one person or both. One secret held by one person is often stronger than two.",
    "A secret in romance is not a plot twist. It is information one character is hiding that, "
    "when revealed, changes how the other character sees the relationship.",
]


SECRET_GUIDANCE: Dict[Tension, Dict[str, Any]] = {
    Tension.SAFETY: {
        "description": (
            "The concept contains a secret. Plant it early, let it work underground, and surface "
            "it in the dark moment."
        ),
        "surfacing": (
            "Phase 3 (the dark moment) — the secret surfaces and changes how the other character "
            "sees the relationship."
        ),
        "guidance": {
            "qualities": [
                "The reader understands why it is being hidden — fear, shame, loyalty, love. The "
                "person keeping it is sympathetic, not villainous.",
                "The reveal recontextualises what came before. Every kind moment, every intimate "
                "conversation, every step closer now looks different.",
                "It connects to what the characters value most. The secret threatens the safety "
                "the story is about.",
            ],
            "common_forms": [
                "I am not who you think I am (a hidden connection, identity, or history)",
                "I did something that affects your world and you do not know it was me",
                "I know something about you that you have not chosen to share with me",
                "Someone I love hurt you and I am protecting them",
                "I am here under false pretences — our meeting was not what you think it was",
            ],
            "rules": list(_SHARED_RULES),
        },
    },
    Tension.IDENTITY: {
        "description": (
            "The concept contains a secret. For an identity story the secret is usually about "
            "who someone really is. Plant it early, let it press against the role, and surface it "
            "in the dark moment."
        ),
        "surfacing": (
            "Phase 3 (the dark moment) — the secret surfaces and forces the question of who she "
            "really is in front of both worlds."
        ),
        "guidance": {
            "qualities": [
                "The reader understands why it is being hidden — the role depends on it. The person "
                "keeping it is trapped, not deceitful.",
                "The reveal recontextualises what came before. Every time she played her part, she "
                "was hiding this underneath.",
                "It connects to the identity at stake. The secret is the self the role forbids.",
            ],
            "common_forms": [
                "The life I show my family is not the life I live",
                "I want something my world says I cannot be",
                "My family's position rests on something untrue",
                "I have already made the choice they forbid, in private",
            ],
            "rules": list(_SHARED_RULES) + [
                "In an identity story the secret should belong to her. His secret, if any, is smaller.",
            ],
        },
    },
}
