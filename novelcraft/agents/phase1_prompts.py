"""
Phase 1 Blueprint Prompts

The system prompt for filling a blueprint with story-specific chapter
descriptions, and the user prompt that serialises a resolved Blueprint
plus the concept. Pure text assembly: every chapter in the blueprint is
rendered, nothing is added.
"""

from typing import List

from novelcraft.storyteller.blueprint_types import (
    Blueprint,
    BlueprintPhase,
    ResolvedChapter,
    ResolvedEmploymentGroup,
)
from novelcraft.storyteller.constraint_rules import CROSS_CHAPTER_REMINDERS


# =============================================================================
# System Prompt
# =============================================================================

PHASE_1_BLUEPRINT_SYSTEM_PROMPT = """You are a story architect. You receive a romance novel concept and a structural blueprint — a sequence of chapters with generic functions. Your job is to fill each chapter function with a story-specific description.

## WHAT YOU DO
For each chapter in the blueprint, write a 2-4 sentence description of what happens in THIS story. The description must:
- Fulfil the chapter's generic function exactly
- Leave the protagonist in the chapter's end state
- Use the specific characters, setting, and circumstances from the concept
- Be concrete enough that a reader could picture the scene
- Not introduce characters or events that contradict the concept

## EMPLOYMENT OPTIONS
Most chapters list one or more employment groups: a header and numbered options for how the chapter's function is carried out. For each group:
- Choose the ONE option that fits this concept best
- Build the description around the chosen option
- Respect every constraint note: an earlier choice can fix or rule out a later option
- Cascading notes tell you which later chapters your choice binds

## WHAT YOU DON'T DO
- Don't invent named supporting characters (Phase 2 does that)
- Don't break chapters into scenes (that happens later)
- Don't add chapters or remove chapters — the blueprint is fixed
- Don't write prose — write clear, direct descriptions of what happens
- Don't add backstory or world-building beyond what the concept provides

## ALTERNATES AND CONSEQUENCE VARIANTS
- An ALTERNATE chapter shares its number with the chapter before it. Write ONE description for that number, following either the chapter or its alternate, and keep the function of whichever you chose.
- Consequence variants are mutually exclusive ways the final chapter can land. Use exactly one.

## SECRET MODIFIER
If the blueprint has a secret structure, your job is placement and pacing — not invention. The concept provides the secret. You decide:
- When the reader learns it (plant it early so it works underground from the start)
- When the other character learns it (the designated surfacing chapter — usually the dark moment)
- What it destroys when it surfaces (it must change how the other character sees the relationship)

A good secret in romance is not a plot twist. It is information one character is hiding that, when revealed, changes how the other character sees the relationship. It has three qualities:
1. The reader understands why it is being hidden. Fear, shame, loyalty, love — the person keeping it has a reason that makes them sympathetic, not villainous.
2. The reveal recontextualises what came before. Every kind moment, every intimate conversation, every step closer now looks different because this was underneath the whole time.
3. It connects to what the characters value most. The secret threatens the thing the story is about — safety, identity, duty, whatever the tension is.

The secret can be held by one person or both. One secret held by one person is often stronger than two secrets splitting the reader's attention. The POV character holding the secret creates slow dread. The other character holding it creates sudden devastation. Either works.

Do not invent a secret. Do not force a bilateral pattern. Use what the concept gives you.

## LOVE TRIANGLE MODIFIER
If the blueprint has a rival role:
- The rival must be genuinely appealing in early chapters — not a villain from the start
- The rival's degradation must be gradual and motivated
- The rival's manipulation in later chapters must use tools established earlier

## OUTPUT FORMAT
Return a JSON object:
{
  "concept_summary": "One sentence summary of the concept as you understand it",
  "chapters": [
    {
      "chapter": 1,
      "phase": 1,
      "function": "Her world",
      "description": "Story-specific description of what happens in this chapter. 2-4 sentences. Concrete, not abstract."
    }
  ]
}

Every chapter number in the blueprint must appear in your output exactly once. Same chapter numbers, same functions. Only the description is yours."""


# =============================================================================
# User Prompt
# =============================================================================

def _format_group(group: ResolvedEmploymentGroup) -> List[str]:
    lines = [f"    {group.header}:"]
    for i, option in enumerate(group.options, 1):
        lines.append(f"      {i}. {option.text} [{option.id}]")
    for constraint in group.constraints:
        lines.append(
            f"      Constraint: {constraint.effect.value} [{constraint.option}] when "
            f"{constraint.when}. {constraint.note}"
        )
    if group.cascading_note:
        lines.append(f"      Cascades: {group.cascading_note}")
    return lines


def _format_chapter(chapter: ResolvedChapter) -> str:
    if chapter.is_alternate:
        heading = f'  Chapter {chapter.chapter} (ALTERNATE) — "{chapter.function}"'
    else:
        heading = f'  Chapter {chapter.chapter} — "{chapter.function}"'

    lines = [heading, f"    {chapter.description}", f"    End state: {chapter.end_state}"]
    for group in chapter.employment:
        lines.extend(_format_group(group))
    for note in chapter.notes:
        lines.append(f"    Note: {note}")

    if chapter.consequence_variants:
        lines.append("    Consequence variants (use exactly one):")
        for i, variant in enumerate(chapter.consequence_variants):
            letter = chr(ord("A") + i)
            lines.append(f"      {letter}. {variant.title} [{variant.id}] — {variant.description}")

    return "\n".join(lines)


def _format_phase(phase: BlueprintPhase) -> str:
    chapters_text = "\n\n".join(_format_chapter(ch) for ch in phase.chapters)
    return f"PHASE {phase.phase}: {phase.name}\n{phase.description}\n\n{chapters_text}"


def _format_secret_structure(blueprint: Blueprint) -> str:
    ss = blueprint.secret_structure
    if not ss:
        return ""
    guidance = ss["guidance"]
    qualities_text = "\n".join(f"{i}. {q}" for i, q in enumerate(guidance["qualities"], 1))
    forms_text = "\n".join(f"* {f}" for f in guidance["common_forms"])
    rules_text = "\n".join(f"- {r}" for r in guidance["rules"])
    return (
        f"\n\nSECRET STRUCTURE:\n{ss['description']}\nSurfaces: {ss['surfacing']}"
        f"\n\nQualities of a good secret:\n{qualities_text}"
        f"\n\nCommon forms secrets take in romance:\n{forms_text}"
        f"\n\nRules:\n{rules_text}"
    )


def _format_cast(blueprint: Blueprint) -> str:
    lines = []
    for member in blueprint.cast:
        # Triangle-only members never appear without a triangle
        if member.requires_triangle and not blueprint.has_triangle:
            continue
        lines.append(f"- {member.function}: {member.description}")
        lines.append(f"    Possible forms: {' / '.join(member.employment)}")
    if not lines:
        return ""
    return "\n\nSUPPORTING CAST (functions, not names — Phase 2 names them):\n" + "\n".join(lines)


def _format_constraints(blueprint: Blueprint) -> str:
    lines = [f"- [{rule.id}] {rule.note}" for rule in blueprint.constraints]
    lines.extend(f"- {reminder}" for reminder in CROSS_CHAPTER_REMINDERS)
    return "CROSS-CHAPTER CONSTRAINTS:\n" + "\n".join(lines)


def build_phase1_blueprint_prompt(concept: str, blueprint: Blueprint) -> str:
    """
    Build the Phase 1 user prompt for a concept and a resolved blueprint.

    Args:
        concept: The expanded concept text
        blueprint: Resolved blueprint from the registry

    Returns:
        Prompt text listing every chapter with its end state, employment
        options, constraints and notes
    """
    blueprint_text = "\n\n---\n\n".join(_format_phase(p) for p in blueprint.phases)

    roles_text = "\n".join(
        f"- {role}: {desc}" for role, desc in blueprint.expected_roles.items()
    )

    return (
        f"CONCEPT:\n{concept}"
        f"\n\nBLUEPRINT: {blueprint.name}\nTotal chapters: {blueprint.total_chapters}"
        f"\n\nEXPECTED ROLES:\n{roles_text}"
        f"{_format_secret_structure(blueprint)}"
        f"{_format_cast(blueprint)}"
        f"\n\nCHAPTER STRUCTURE:\n\n{blueprint_text}"
        f"\n\n{_format_constraints(blueprint)}"
        f"\n\nFill each chapter function with a story-specific description for this concept. "
        f"2-4 sentences per chapter. Concrete and specific to this story. "
        f"Return exactly {blueprint.total_chapters} chapters."
    )
