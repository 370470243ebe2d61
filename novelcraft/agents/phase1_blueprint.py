"""
Phase 1: Blueprint-driven chapter generation.

Looks up the blueprint for a trope/tension/ending/modifier combination,
asks the model to fill every chapter function with a story-specific
description, and validates the answer against the blueprint:

    lookup -> prompt -> invoke -> parse -> structural check -> per-chapter check -> assemble

Any failure is raised; there are no retries and no partial output.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from novelcraft.agents.collaborators import JSONParser, LLMCaller, LLMOptions
from novelcraft.agents.phase1_prompts import (
    PHASE_1_BLUEPRINT_SYSTEM_PROMPT,
    build_phase1_blueprint_prompt,
)
from novelcraft.errors import (
    BlueprintNotFoundError,
    ChapterCountMismatchError,
    ChapterDescriptionTooShortError,
    DuplicateChapterNumberError,
    JSONParseError,
    MissingChaptersArrayError,
    UnexpectedChapterNumberError,
)
from novelcraft.storyteller.blueprint_registry import BlueprintRegistry, get_registry
from novelcraft.storyteller.blueprint_types import Blueprint
from novelcraft.utils.logging import phase1_logger as logger


MIN_DESCRIPTION_LENGTH = 20
LOG_PREVIEW_LENGTH = 80


@dataclass
class Phase1Chapter:
    """One validated chapter from the model."""
    chapter: int
    function: str
    description: str
    phase: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "chapter": self.chapter,
            "function": self.function,
            "description": self.description
        }
        if self.phase is not None:
            data["phase"] = self.phase
        return data


@dataclass
class Phase1Output:
    """Result of Phase 1: blueprint reference, filled chapters, concept summary."""
    blueprint: Dict[str, Any]
    chapters: List[Phase1Chapter] = field(default_factory=list)
    concept_summary: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blueprint": self.blueprint,
            "chapters": [c.to_dict() for c in self.chapters],
            "concept_summary": self.concept_summary
        }


@dataclass
class AvailabilityCheck:
    """Answer from the pre-generation guard."""
    allowed: bool
    reason: Optional[str] = None
    blueprint_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"allowed": self.allowed}
        if self.reason is not None:
            data["reason"] = self.reason
        if self.blueprint_name is not None:
            data["blueprint_name"] = self.blueprint_name
        return data


def check_blueprint_available(
    trope_id: str,
    tension_id: str,
    ending_id: str,
    modifier_id: str,
    registry: Optional[BlueprintRegistry] = None
) -> AvailabilityCheck:
    """
    Check whether generation can run for a combination.

    Meant to run right after concept/variable selection so callers can
    stop with a user-facing message before spending an LLM call.
    """
    registry = registry or get_registry()
    blueprint = registry.get(trope_id, tension_id, ending_id, modifier_id)
    if blueprint is None:
        return AvailabilityCheck(
            allowed=False,
            reason=(
                f"No blueprint for: {trope_id} | {tension_id} | {ending_id} | {modifier_id}. "
                "Build this blueprint before generation can proceed."
            )
        )
    return AvailabilityCheck(allowed=True, blueprint_name=blueprint.name)


def _validate_structure(data: Any, blueprint: Blueprint) -> List[Any]:
    chapters = data.get("chapters") if isinstance(data, dict) else None
    if not isinstance(chapters, list):
        raise MissingChaptersArrayError()
    if len(chapters) != blueprint.total_chapters:
        raise ChapterCountMismatchError(blueprint.total_chapters, len(chapters))
    return chapters


def _validate_chapters(raw_chapters: List[Any], blueprint: Blueprint) -> List[Phase1Chapter]:
    primaries = {}
    alternates = {}
    phase_of = {}
    for phase in blueprint.phases:
        for ch in phase.chapters:
            if ch.is_alternate:
                alternates[ch.alternate_of] = ch
            else:
                primaries[ch.chapter] = ch
                phase_of[ch.chapter] = phase.phase

    seen = set()
    validated = []
    for item in raw_chapters:
        number = item.get("chapter") if isinstance(item, dict) else None
        # Some models emit 3.0 for 3
        if isinstance(number, float) and number.is_integer():
            number = int(number)
        # bool is an int subclass; True must not pass for chapter 1
        if not isinstance(number, int) or isinstance(number, bool) or number not in primaries:
            raise UnexpectedChapterNumberError(number)
        if number in seen:
            raise DuplicateChapterNumberError(number)
        seen.add(number)

        description = item.get("description")
        length = len(description.strip()) if isinstance(description, str) else 0
        if length < MIN_DESCRIPTION_LENGTH:
            raise ChapterDescriptionTooShortError(number, length, MIN_DESCRIPTION_LENGTH)

        expected = primaries[number]
        function = item.get("function")
        alternate = alternates.get(number)
        if function != expected.function and not (alternate and function == alternate.function):
            logger.warning(
                "Chapter function mismatch, using blueprint function",
                chapter=number,
                expected=expected.function,
                received=function,
            )
            function = expected.function

        validated.append(Phase1Chapter(
            chapter=number,
            function=function,
            description=description.strip(),
            phase=phase_of[number]
        ))

    return validated


def _preview(text: str) -> str:
    if len(text) <= LOG_PREVIEW_LENGTH:
        return text
    return text[:LOG_PREVIEW_LENGTH] + "..."


async def execute_phase1_blueprint(
    concept: str,
    trope_id: str,
    tension_id: str,
    ending_id: str,
    modifier_id: str,
    llm: LLMCaller,
    json_parser: JSONParser,
    registry: Optional[BlueprintRegistry] = None,
    options: Optional[LLMOptions] = None
) -> Phase1Output:
    """
    Run Phase 1 for a concept.

    Args:
        concept: Expanded concept text
        trope_id / tension_id / ending_id / modifier_id: Registry key parts
        llm: LLMCaller used for the single model call
        json_parser: JSONParser applied to the raw response
        registry: Blueprint registry (process-wide registry by default)
        options: Model settings (from configuration by default)

    Returns:
        Phase1Output with the trimmed blueprint and one validated chapter
        per blueprint chapter

    Raises:
        BlueprintNotFoundError: no blueprint for the combination
        Phase1ValidationError: the response failed parsing or validation
        LLMInvocationError: raised by the caller, propagated as is
    """
    registry = registry or get_registry()
    blueprint = registry.get(trope_id, tension_id, ending_id, modifier_id)
    if blueprint is None:
        raise BlueprintNotFoundError(trope_id, tension_id, ending_id, modifier_id)

    logger.info(
        "Phase 1 started",
        blueprint=blueprint.name,
        total_chapters=blueprint.total_chapters,
    )

    user_prompt = build_phase1_blueprint_prompt(concept, blueprint)
    options = options or LLMOptions.from_config()
    raw = await llm.complete(PHASE_1_BLUEPRINT_SYSTEM_PROMPT, user_prompt, options)

    parsed = json_parser.parse(raw)
    if not parsed.success:
        logger.error("Phase 1 response could not be parsed", error=parsed.error, raw=parsed.raw)
        raise JSONParseError(parsed.error)

    raw_chapters = _validate_structure(parsed.data, blueprint)
    chapters = _validate_chapters(raw_chapters, blueprint)

    concept_summary = parsed.data.get("concept_summary")
    if not isinstance(concept_summary, str) or not concept_summary.strip():
        concept_summary = concept

    output = Phase1Output(
        blueprint=blueprint.summary_dict(),
        chapters=chapters,
        concept_summary=concept_summary
    )

    lines = [f"Concept: {concept_summary}"]
    lines.extend(
        f"  Ch {ch.chapter}: {ch.function} - {_preview(ch.description)}"
        for ch in chapters
    )
    logger.info("Phase 1 complete\n" + "\n".join(lines), blueprint=blueprint.id)

    return output
