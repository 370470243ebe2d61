"""
Cross-chapter constraint rules.

Each rule links an employment option in one chapter to an option in a
later chapter: choosing the source either fixes or disables the target.
Rules are advisory. The resolver attaches them to the blueprint when both
options are present, and the prompt hands them to the model as authoring
guidance; nothing removes options at resolve time.
"""

from typing import Tuple

from novelcraft.storyteller.blueprint_types import ConstraintEffect, ConstraintRule, OptionRef


CONSTRAINT_RULES: Tuple[ConstraintRule, ...] = (
    ConstraintRule(
        id="offer_becomes_leverage",
        effect=ConstraintEffect.FIXES,
        source=OptionRef("pressure_point", "the_offer", "debt_payoff"),
        target=OptionRef("more_to_him", "rival_leverage", "leverage_debt"),
        note="If the rival pays off her debt, that debt is the leverage he holds over her.",
    ),
    ConstraintRule(
        id="planted_secret_is_discovered",
        effect=ConstraintEffect.FIXES,
        source=OptionRef("the_meet", "first_clash", "secret_brush"),
        target=OptionRef("dark_moment", "secret_surfaces", "discovered"),
        note="If he came close to her secret at their first meeting, he is the one who discovers it.",
    ),
    ConstraintRule(
        id="protective_withdrawal_is_not_cruel",
        effect=ConstraintEffect.DISABLES,
        source=OptionRef("withdrawal", "why_he_withdraws", "protecting_her"),
        target=OptionRef("dark_moment", "the_confrontation", "mutual_wound"),
        note=(
            "If he withdrew to protect her, he does not go for her deepest wound in the dark "
            "moment. He lets her believe the worst instead."
        ),
    ),
    ConstraintRule(
        id="manufactured_evidence_unravels",
        effect=ConstraintEffect.FIXES,
        source=OptionRef("withdrawal", "what_confirms_it", "manufactured_evidence"),
        target=OptionRef("discovers_truth", "how_truth_emerges", "evidence_trail"),
        note="The truth surfaces through the same evidence the rival manufactured.",
    ),
    ConstraintRule(
        id="manufactured_evidence_unravels_late",
        effect=ConstraintEffect.FIXES,
        source=OptionRef("withdrawal", "what_confirms_it", "manufactured_evidence"),
        target=OptionRef("truth_too_late", "how_truth_emerges", "evidence_trail"),
        note="The truth surfaces through the same evidence the rival manufactured.",
    ),
    ConstraintRule(
        id="public_clash_public_exposure",
        effect=ConstraintEffect.FIXES,
        source=OptionRef("the_meet", "first_clash", "public_clash"),
        target=OptionRef("the_reversal", "how_exposed", "public_exposure"),
        note="A story that opens with a public clash closes the rival's arc in public.",
    ),
    ConstraintRule(
        id="absent_rival_cannot_call_in_offer",
        effect=ConstraintEffect.DISABLES,
        source=OptionRef("maybe_wrong", "rival_fails", "absent"),
        target=OptionRef("keep_me_safe", "rival_confrontation", "jealous_scene"),
        note="A rival who was absent in her crisis cannot stage a jealous public scene; he works quietly.",
    ),
    ConstraintRule(
        id="arranged_match_is_broken",
        effect=ConstraintEffect.FIXES,
        source=OptionRef("pressure_point", "the_expectation", "arranged_match"),
        target=OptionRef("choosing_herself", "how_she_breaks", "breaks_engagement"),
        note="If a match was arranged for her, choosing herself means ending it.",
    ),
    ConstraintRule(
        id="succession_is_refused",
        effect=ConstraintEffect.FIXES,
        source=OptionRef("pressure_point", "the_expectation", "succession"),
        target=OptionRef("choosing_herself", "how_she_breaks", "refuses_succession"),
        note="If she was expected to take over, choosing herself means refusing it on their terms.",
    ),
)


# Always appended to the Phase 1 prompt, whatever the blueprint
CROSS_CHAPTER_REMINDERS: Tuple[str, ...] = (
    "Options chosen in early chapters bind later chapters. Honour every constraint note.",
    "Anything that surfaces in Phase 3 must have been planted in Phase 1.",
    "The rival's manipulation in later chapters must use tools established earlier.",
    "End states are where each chapter must leave the protagonist. Do not end a chapter elsewhere.",
    "Choose one option per employment group. Do not blend options.",
)
