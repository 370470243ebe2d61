"""
Blueprint resolver.

Walks the chapter tree act by act for one story context and produces a
flat, numbered, fully populated Blueprint:

1. Normalise the context (identity stories are HEA without a triangle).
2. Pick the one applicable variant of every slot in acts 1-3 and in the
   Act 4 branch for the context's resolution path.
3. Resolve each chapter's end state and filter its employment groups.
4. Number chapters sequentially; alternates share their primary's number.
5. Attach the applicable cross-chapter constraint rules.
6. Add roles, cast and (for secret stories) the secret structure.

Resolution is pure and deterministic. Everything it reads is static data.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from novelcraft.errors import (
    AmbiguousChapterTreeError,
    InvalidCombinationError,
    UnresolvedEndStateError,
)
from novelcraft.storyteller.blueprint_types import (
    Act,
    Blueprint,
    BlueprintPhase,
    ChapterDefinition,
    ChapterSlot,
    ConstraintRule,
    EmploymentGroup,
    EmploymentOption,
    Ending,
    Modifier,
    ResolutionPath,
    ResolvedChapter,
    ResolvedConstraint,
    ResolvedEmploymentGroup,
    ResolvedOption,
    StoryContext,
    Tension,
    parse_enum,
    parse_flag,
)
from novelcraft.storyteller.cast_table import CAST, EXPECTED_ROLES, TRIANGLE_ROLES, TROPES
from novelcraft.storyteller.chapter_tree import ACTS, RESOLUTION_ACTS
from novelcraft.storyteller.constraint_rules import CONSTRAINT_RULES
from novelcraft.storyteller.secret_guidance import SECRET_GUIDANCE
from novelcraft.utils.logging import blueprint_logger as logger


DEFAULT_TROPE = "enemies_to_lovers"


def _build_legal_contexts() -> Tuple[StoryContext, ...]:
    contexts = []
    for ending in Ending:
        for secret in (False, True):
            for triangle in (False, True):
                contexts.append(StoryContext(Tension.SAFETY, ending, secret, triangle))
    # Identity: HEA only, never a triangle
    for secret in (False, True):
        contexts.append(StoryContext(Tension.IDENTITY, Ending.HEA, secret, False))
    return tuple(contexts)


LEGAL_CONTEXTS: Tuple[StoryContext, ...] = _build_legal_contexts()


def blueprint_name(trope: str, context: StoryContext) -> str:
    """e.g. 'Enemies to Lovers + Safety + HEA + Secret + Love Triangle'"""
    ending = "HEA" if context.ending == Ending.HEA else context.ending.value.capitalize()
    parts = [TROPES[trope], context.tension.value.capitalize(), ending]
    if context.secret:
        parts.append("Secret")
    if context.triangle:
        parts.append("Love Triangle")
    return " + ".join(parts)


def acts_for(context: StoryContext) -> Tuple[Act, ...]:
    """Acts 1-3 plus the Act 4 branch for the context's resolution path."""
    return ACTS + (RESOLUTION_ACTS[ResolutionPath.for_context(context)],)


def select_variant(slot: ChapterSlot, context: StoryContext) -> Optional[ChapterDefinition]:
    """Return the slot's chapter for this context, or None if the slot does not apply."""
    matches = [v for v in slot.variants if v.matches(context)]
    if len(matches) > 1:
        raise AmbiguousChapterTreeError(
            f"Slot '{slot.key}' has {len(matches)} variants matching {context}"
        )
    return matches[0].definition if matches else None


def resolve_end_state(definition: ChapterDefinition, context: StoryContext) -> str:
    if isinstance(definition.end_states, str):
        text = definition.end_states
    else:
        text = definition.end_states.resolve(context)
    if not text:
        raise UnresolvedEndStateError(
            f"Chapter '{definition.title}' ({definition.key}) has no end state for {context}"
        )
    return text


def _group_visible(group: EmploymentGroup, context: StoryContext) -> bool:
    if group.tension is not None and group.tension != context.tension:
        return False
    if group.show_when is not None and not group.show_when.holds(context):
        return False
    return True


def filter_employment(
    definition: ChapterDefinition,
    context: StoryContext
) -> List[Tuple[EmploymentGroup, Tuple[EmploymentOption, ...]]]:
    """Visible groups with their visible options; groups left empty are dropped."""
    visible = []
    for group in definition.employment:
        if not _group_visible(group, context):
            continue
        options = tuple(
            o for o in group.options
            if o.show_when is None or o.show_when.holds(context)
        )
        if options:
            visible.append((group, options))
    return visible


@dataclass
class _PlacedChapter:
    """A chapter that has a number but no constraints attached yet."""
    number: int
    slot: str
    definition: ChapterDefinition
    end_state: str
    groups: List[Tuple[EmploymentGroup, Tuple[EmploymentOption, ...]]]
    alternate_of: Optional[int] = None


@dataclass
class _OptionLocation:
    chapter: int
    function: str
    text: str


def _place(number: int, slot: str, definition: ChapterDefinition, context: StoryContext,
           alternate_of: Optional[int] = None) -> _PlacedChapter:
    return _PlacedChapter(
        number=number,
        slot=slot,
        definition=definition,
        end_state=resolve_end_state(definition, context),
        groups=filter_employment(definition, context),
        alternate_of=alternate_of,
    )


def _index_options(placed: List[_PlacedChapter]) -> Dict[Tuple[str, str, str], _OptionLocation]:
    index = {}
    for ch in placed:
        for group, options in ch.groups:
            for option in options:
                index[(ch.slot, group.key, option.id)] = _OptionLocation(
                    ch.number, ch.definition.title, option.text
                )
    return index


def _applicable_rules(index: Dict[Tuple[str, str, str], _OptionLocation]) -> Tuple[ConstraintRule, ...]:
    def present(ref):
        return (ref.slot, ref.group, ref.option) in index

    return tuple(r for r in CONSTRAINT_RULES if present(r.source) and present(r.target))


def _group_constraints(
    rules: Tuple[ConstraintRule, ...],
    index: Dict[Tuple[str, str, str], _OptionLocation]
) -> Dict[Tuple[str, str], List[ResolvedConstraint]]:
    by_group: Dict[Tuple[str, str], List[ResolvedConstraint]] = {}
    for rule in rules:
        source = index[(rule.source.slot, rule.source.group, rule.source.option)]
        by_group.setdefault((rule.target.slot, rule.target.group), []).append(
            ResolvedConstraint(
                rule_id=rule.id,
                effect=rule.effect,
                option=rule.target.option,
                when=f'Chapter {source.chapter} ("{source.function}") uses "{source.text}"',
                note=rule.note,
            )
        )
    return by_group


def _finish(ch: _PlacedChapter, constraints: Dict[Tuple[str, str], List[ResolvedConstraint]]) -> ResolvedChapter:
    employment = tuple(
        ResolvedEmploymentGroup(
            key=group.key,
            header=group.header,
            options=tuple(ResolvedOption(o.id, o.text) for o in options),
            constraints=tuple(constraints.get((ch.slot, group.key), ())),
            cascading_note=group.cascading_note,
        )
        for group, options in ch.groups
    )
    return ResolvedChapter(
        chapter=ch.number,
        function=ch.definition.title,
        description=ch.definition.description,
        end_state=ch.end_state,
        slot=ch.slot,
        employment=employment,
        notes=ch.definition.notes,
        consequence_variants=ch.definition.consequence_variants,
        alternate_of=ch.alternate_of,
    )


def resolve_context(context: StoryContext, trope: str = DEFAULT_TROPE) -> Blueprint:
    """
    Resolve an already-normalised context into a Blueprint.

    Raises:
        InvalidCombinationError: unknown trope, or a context outside the
            legal combination space (e.g. identity + tragic).
    """
    if trope not in TROPES:
        raise InvalidCombinationError(f"Unknown trope {trope!r}")
    if context not in LEGAL_CONTEXTS:
        raise InvalidCombinationError(
            f"{context.tension.value} | {context.ending.value} | secret={context.secret} | "
            f"triangle={context.triangle} is not a legal blueprint combination"
        )

    number = 0
    placed_by_act: List[Tuple[Act, List[_PlacedChapter]]] = []
    for act in acts_for(context):
        placed = []
        for slot in act.slots:
            definition = select_variant(slot, context)
            if definition is None:
                continue
            number += 1
            placed.append(_place(number, slot.key, definition, context))
            if definition.alternate is not None:
                placed.append(_place(number, slot.key, definition.alternate, context, alternate_of=number))
        placed_by_act.append((act, placed))

    all_placed = [ch for _, placed in placed_by_act for ch in placed]
    index = _index_options(all_placed)
    rules = _applicable_rules(index)
    constraints = _group_constraints(rules, index)

    phases = tuple(
        BlueprintPhase(
            phase=act.number,
            name=act.name,
            description=act.descriptions[context.tension],
            chapters=tuple(_finish(ch, constraints) for ch in placed),
        )
        for act, placed in placed_by_act
    )

    total_chapters = sum(1 for ch in all_placed if ch.alternate_of is None)

    expected_roles = dict(EXPECTED_ROLES[context.tension])
    if context.triangle:
        expected_roles.update(TRIANGLE_ROLES)

    modifier = Modifier.from_flags(context.secret, context.triangle)
    key = "|".join((trope, context.tension.value, context.ending.value, modifier.value))

    logger.debug(
        "Resolved blueprint",
        key=key,
        total_chapters=total_chapters,
        constraints=len(rules),
    )

    return Blueprint(
        id=key,
        name=blueprint_name(trope, context),
        trope=trope,
        tension=context.tension,
        ending=context.ending,
        modifier=modifier,
        total_chapters=total_chapters,
        expected_roles=expected_roles,
        secret_structure=SECRET_GUIDANCE[context.tension] if context.secret else None,
        cast=tuple(m for m in CAST[context.tension] if context.triangle or not m.requires_triangle),
        constraints=rules,
        phases=phases,
    )


def resolve_blueprint(
    tension,
    ending,
    secret: bool,
    triangle: bool,
    trope: str = DEFAULT_TROPE
) -> Blueprint:
    """
    Resolve a blueprint from the four narrative variables.

    Args:
        tension: "safety" / "identity" (or a Tension)
        ending: "HEA" / "bittersweet" / "tragic", case-insensitive (or an Ending)
        secret: whether the concept carries a secret
        triangle: whether the concept carries a love triangle
        trope: trope id (only enemies_to_lovers has a chapter tree)

    Identity stories are silently normalised to HEA without a triangle.
    secret and triangle must be bools; anything else raises InvalidCombinationError.
    """
    context = StoryContext(
        tension=parse_enum(Tension, tension, "tension"),
        ending=parse_enum(Ending, ending, "ending"),
        secret=parse_flag(secret, "secret"),
        triangle=parse_flag(triangle, "triangle"),
    )
    normalized = context.normalized()
    if normalized != context:
        logger.debug(
            "Identity tension forces HEA without a love triangle",
            requested_ending=context.ending.value,
            requested_triangle=context.triangle,
        )
    return resolve_context(normalized, trope)
