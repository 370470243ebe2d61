"""
Typed records for the chapter tree and for resolved blueprints.

The chapter tree is static data built from the tree records (Act,
ChapterSlot, SlotVariant, ChapterDefinition, EmploymentGroup...). The
resolver turns it into the Resolved* records and a Blueprint.
"""

from enum import Enum
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Any, Mapping, Optional, Tuple, Union

from novelcraft.errors import InvalidCombinationError


class Tension(str, Enum):
    """The emotional tension axis the romance is built around."""
    SAFETY = "safety"
    IDENTITY = "identity"


class Ending(str, Enum):
    HEA = "HEA"
    BITTERSWEET = "bittersweet"
    TRAGIC = "tragic"

    @classmethod
    def _missing_(cls, value):
        # "hea", "Bittersweet", "TRAGIC" all parse
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class Modifier(str, Enum):
    BOTH = "both"
    LOVE_TRIANGLE = "love_triangle"
    SECRET = "secret"
    NONE = "none"

    @classmethod
    def from_flags(cls, secret: bool, triangle: bool) -> "Modifier":
        if secret and triangle:
            return cls.BOTH
        if triangle:
            return cls.LOVE_TRIANGLE
        if secret:
            return cls.SECRET
        return cls.NONE

    @property
    def secret(self) -> bool:
        return self in (Modifier.BOTH, Modifier.SECRET)

    @property
    def triangle(self) -> bool:
        return self in (Modifier.BOTH, Modifier.LOVE_TRIANGLE)


def parse_enum(enum_cls, value, field_name: str):
    """Parse a string (or enum member) into enum_cls, raising InvalidCombinationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidCombinationError(
            f"Unknown {field_name} {value!r} (expected one of: {allowed})"
        ) from None


def parse_flag(value, field_name: str) -> bool:
    """Modifier flags must be real booleans; "false" is not False."""
    if not isinstance(value, bool):
        raise InvalidCombinationError(
            f"{field_name} must be a bool, got {value!r}"
        )
    return value


def freeze(value):
    """Read-only view of nested static data: dicts become mapping proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value):
    """Plain dict/list copy of frozen data, for serialisation."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class StoryContext:
    """The four narrative variables a blueprint is resolved for."""
    tension: Tension
    ending: Ending
    secret: bool
    triangle: bool

    def normalized(self) -> "StoryContext":
        """Identity stories are always HEA and never carry a love triangle."""
        if self.tension == Tension.IDENTITY:
            return replace(self, ending=Ending.HEA, triangle=False)
        return self

    @property
    def modifier(self) -> Modifier:
        return Modifier.from_flags(self.secret, self.triangle)


class Condition(str, Enum):
    """Closed set of visibility predicates for employment groups and options."""
    SECRET = "secret"
    NO_SECRET = "no_secret"
    TRIANGLE = "triangle"
    NO_TRIANGLE = "no_triangle"

    def holds(self, context: StoryContext) -> bool:
        if self is Condition.SECRET:
            return context.secret
        if self is Condition.NO_SECRET:
            return not context.secret
        if self is Condition.TRIANGLE:
            return context.triangle
        return not context.triangle


class ConstraintEffect(str, Enum):
    DISABLES = "disables"
    FIXES = "fixes"


# ===== CHAPTER TREE RECORDS =====

@dataclass(frozen=True)
class EmploymentOption:
    """One way a chapter function can be employed in a specific story."""
    id: str
    text: str
    show_when: Optional[Condition] = None


@dataclass(frozen=True)
class EmploymentGroup:
    """A header plus the options the LLM chooses between for one aspect of a chapter."""
    key: str
    header: str
    options: Tuple[EmploymentOption, ...]
    tension: Optional[Tension] = None
    show_when: Optional[Condition] = None
    cascading_note: str = ""


@dataclass(frozen=True)
class EndStates:
    """
    Conditional end-state text for a chapter.

    Resolution order: identity (identity stories), then triangle /
    no_triangle, then default.
    """
    default: Optional[str] = None
    identity: Optional[str] = None
    triangle: Optional[str] = None
    no_triangle: Optional[str] = None

    def resolve(self, context: StoryContext) -> Optional[str]:
        if context.tension == Tension.IDENTITY and self.identity:
            return self.identity
        if context.triangle and self.triangle:
            return self.triangle
        if not context.triangle and self.no_triangle:
            return self.no_triangle
        return self.default


@dataclass(frozen=True)
class ConsequenceVariant:
    """A mutually exclusive way the tragedy lands, attached to the final chapter."""
    id: str
    title: str
    description: str


@dataclass(frozen=True)
class ChapterDefinition:
    key: str
    title: str
    description: str
    end_states: Union[str, EndStates]
    employment: Tuple[EmploymentGroup, ...] = ()
    notes: Tuple[str, ...] = ()
    consequence_variants: Tuple[ConsequenceVariant, ...] = ()
    # Alternate version of this chapter that shares its number
    alternate: Optional["ChapterDefinition"] = None


@dataclass(frozen=True)
class SlotVariant:
    """A chapter definition tagged with the context it applies to (None matches anything)."""
    definition: ChapterDefinition
    tension: Optional[Tension] = None
    triangle: Optional[bool] = None
    ending: Optional[Ending] = None

    def matches(self, context: StoryContext) -> bool:
        if self.tension is not None and self.tension != context.tension:
            return False
        if self.triangle is not None and self.triangle != context.triangle:
            return False
        if self.ending is not None and self.ending != context.ending:
            return False
        return True


@dataclass(frozen=True)
class ChapterSlot:
    """A position in an act; at most one of its variants applies to a context."""
    key: str
    variants: Tuple[SlotVariant, ...]


@dataclass(frozen=True)
class Act:
    number: int
    name: str
    descriptions: Dict[Tension, str]
    slots: Tuple[ChapterSlot, ...]


class ResolutionPath(str, Enum):
    """The three ways Act 4 can branch."""
    TRAGEDY = "tragedy"
    IDENTITY_HEA = "identity_hea"
    SAFETY_RESOLUTION = "safety_resolution"

    @classmethod
    def for_context(cls, context: StoryContext) -> "ResolutionPath":
        if context.tension == Tension.IDENTITY:
            return cls.IDENTITY_HEA
        if context.ending == Ending.TRAGIC:
            return cls.TRAGEDY
        return cls.SAFETY_RESOLUTION


@dataclass(frozen=True)
class OptionRef:
    """Points at one employment option in the chapter tree."""
    slot: str
    group: str
    option: str


@dataclass(frozen=True)
class ConstraintRule:
    """A named cross-chapter dependency between two employment options."""
    id: str
    effect: ConstraintEffect
    source: OptionRef
    target: OptionRef
    note: str


@dataclass(frozen=True)
class CastMember:
    function: str
    description: str
    employment: Tuple[str, ...]
    requires_triangle: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "function": self.function,
            "description": self.description,
            "employment": list(self.employment),
            "requires_triangle": self.requires_triangle
        }


# ===== RESOLVED BLUEPRINT RECORDS =====

@dataclass(frozen=True)
class ResolvedOption:
    id: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text}


@dataclass(frozen=True)
class ResolvedConstraint:
    """An advisory note attached to an employment group."""
    rule_id: str
    effect: ConstraintEffect
    option: str
    when: str
    note: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            self.effect.value: self.option,
            "when": self.when,
            "note": self.note
        }


@dataclass(frozen=True)
class ResolvedEmploymentGroup:
    key: str
    header: str
    options: Tuple[ResolvedOption, ...]
    constraints: Tuple[ResolvedConstraint, ...] = ()
    cascading_note: str = ""

    def option_ids(self) -> Tuple[str, ...]:
        return tuple(o.id for o in self.options)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "header": self.header,
            "options": [o.to_dict() for o in self.options],
            "constraints": [c.to_dict() for c in self.constraints],
            "cascading_note": self.cascading_note
        }


@dataclass(frozen=True)
class ResolvedChapter:
    chapter: int
    function: str
    description: str
    end_state: str
    slot: str
    employment: Tuple[ResolvedEmploymentGroup, ...] = ()
    notes: Tuple[str, ...] = ()
    consequence_variants: Tuple[ConsequenceVariant, ...] = ()
    alternate_of: Optional[int] = None

    @property
    def is_alternate(self) -> bool:
        return self.alternate_of is not None

    def group(self, key: str) -> Optional[ResolvedEmploymentGroup]:
        for g in self.employment:
            if g.key == key:
                return g
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "chapter": self.chapter,
            "function": self.function,
            "description": self.description,
            "end_state": self.end_state,
            "employment": [g.to_dict() for g in self.employment],
            "notes": list(self.notes)
        }
        if self.consequence_variants:
            data["consequence_variants"] = [
                {"id": v.id, "title": v.title, "description": v.description}
                for v in self.consequence_variants
            ]
        if self.alternate_of is not None:
            data["alternate_of"] = self.alternate_of
        return data


@dataclass(frozen=True)
class BlueprintPhase:
    phase: int
    name: str
    description: str
    chapters: Tuple[ResolvedChapter, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase,
            "name": self.name,
            "description": self.description,
            "chapters": [c.to_dict() for c in self.chapters]
        }


@dataclass(frozen=True)
class Blueprint:
    """A fully resolved chapter blueprint for one trope/tension/ending/modifier."""
    id: str
    name: str
    trope: str
    tension: Tension
    ending: Ending
    modifier: Modifier
    total_chapters: int
    expected_roles: Mapping[str, str]
    secret_structure: Optional[Mapping[str, Any]]
    cast: Tuple[CastMember, ...]
    constraints: Tuple[ConstraintRule, ...]
    phases: Tuple[BlueprintPhase, ...]

    def __post_init__(self):
        # Registry entries are shared; nested tables must not be editable
        object.__setattr__(self, "expected_roles", freeze(self.expected_roles))
        if self.secret_structure is not None:
            object.__setattr__(self, "secret_structure", freeze(self.secret_structure))

    @property
    def has_triangle(self) -> bool:
        return self.modifier.triangle

    def all_chapters(self) -> Tuple[ResolvedChapter, ...]:
        """Every chapter across phases, alternates included, in emission order."""
        return tuple(ch for phase in self.phases for ch in phase.chapters)

    def main_chapters(self) -> Tuple[ResolvedChapter, ...]:
        return tuple(ch for ch in self.all_chapters() if not ch.is_alternate)

    def chapter(self, number: int) -> Optional[ResolvedChapter]:
        for ch in self.main_chapters():
            if ch.chapter == number:
                return ch
        return None

    def summary_dict(self) -> Dict[str, Any]:
        """The trimmed reference handed to downstream phases."""
        return {
            "id": self.id,
            "name": self.name,
            "trope": self.trope,
            "tension": self.tension.value,
            "ending": self.ending.value,
            "modifier": self.modifier.value,
            "total_chapters": self.total_chapters,
            "expected_roles": thaw(self.expected_roles),
            "secret_structure": thaw(self.secret_structure),
            "phases": [p.to_dict() for p in self.phases]
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.summary_dict()
        data["cast"] = [m.to_dict() for m in self.cast]
        data["constraints"] = [
            {
                "id": rule.id,
                "effect": rule.effect.value,
                "source": {"slot": rule.source.slot, "group": rule.source.group, "option": rule.source.option},
                "target": {"slot": rule.target.slot, "group": rule.target.group, "option": rule.target.option},
                "note": rule.note
            }
            for rule in self.constraints
        ]
        return data
