"""
Unit tests for Phase 1 execution and the availability guard.

Tests cover:
- Successful generation and output assembly
- Structural and per-chapter validation failures
- Function self-healing (with a logged warning)
- Blueprint lookup failures and LLM errors
- check_blueprint_available
"""

import pytest

from conftest import StubLLM, build_chapters, build_response
from novelcraft.agents.collaborators import LLMOptions
from novelcraft.agents.phase1_blueprint import (
    AvailabilityCheck,
    check_blueprint_available,
    execute_phase1_blueprint,
)
from novelcraft.agents.phase1_prompts import PHASE_1_BLUEPRINT_SYSTEM_PROMPT
from novelcraft.config import config
from novelcraft.errors import (
    BlueprintNotFoundError,
    ChapterCountMismatchError,
    ChapterDescriptionTooShortError,
    DuplicateChapterNumberError,
    JSONParseError,
    LLMInvocationError,
    MissingChaptersArrayError,
    Phase1ValidationError,
    UnexpectedChapterNumberError,
)
from novelcraft.utils.logging import get_log_buffer


CONCEPT = "Mara runs a failing harbour warehouse. Cole is the fixer sent to close it."
SAFETY_NONE = ("enemies_to_lovers", "safety", "HEA", "none")


async def _run(llm, json_parser, registry, combo=SAFETY_NONE, concept=CONCEPT):
    return await execute_phase1_blueprint(concept, *combo, llm=llm, json_parser=json_parser, registry=registry)


class TestExecutePhase1:

    @pytest.mark.asyncio
    async def test_success(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        llm = StubLLM(build_response(blueprint))

        output = await _run(llm, json_parser, registry)

        assert len(output.chapters) == 11
        assert [c.chapter for c in output.chapters] == list(range(1, 12))
        assert output.chapters[0].function == "Her world"
        assert output.chapters[0].phase == 1
        assert output.concept_summary == "A harbour owner falls for the man sent to close her down."
        assert output.blueprint == blueprint.summary_dict()
        assert "cast" not in output.blueprint

    @pytest.mark.asyncio
    async def test_single_llm_call_with_configured_options(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        llm = StubLLM(build_response(blueprint))

        await _run(llm, json_parser, registry)

        llm.complete.assert_awaited_once()
        system_prompt, user_prompt, options = llm.complete.await_args.args
        assert system_prompt == PHASE_1_BLUEPRINT_SYSTEM_PROMPT
        assert CONCEPT in user_prompt
        assert options == LLMOptions.from_config()
        assert options.model == config.PHASE1_MODEL

    @pytest.mark.asyncio
    async def test_fenced_response_is_accepted(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        llm = StubLLM(f"Here it is:\n```json\n{build_response(blueprint)}\n```")

        output = await _run(llm, json_parser, registry)

        assert len(output.chapters) == blueprint.total_chapters

    @pytest.mark.asyncio
    async def test_concept_summary_falls_back_to_concept(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        llm = StubLLM(build_response(blueprint, concept_summary=None))

        output = await _run(llm, json_parser, registry)

        assert output.concept_summary == CONCEPT

    @pytest.mark.asyncio
    async def test_to_dict(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        llm = StubLLM(build_response(blueprint))

        data = (await _run(llm, json_parser, registry)).to_dict()

        assert set(data) == {"blueprint", "chapters", "concept_summary"}
        assert data["chapters"][2]["function"] == "The pressure tightens"


class TestFunctionSelfHeal:

    @pytest.mark.asyncio
    async def test_mismatched_function_is_overwritten(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        chapters = build_chapters(blueprint)
        chapters[2]["function"] = "The safe option presents itself"
        llm = StubLLM(build_response(blueprint, chapters=chapters))

        output = await _run(llm, json_parser, registry)

        assert output.chapters[2].function == "The pressure tightens"
        warnings = get_log_buffer().get_warnings(source="phase1")
        assert len(warnings) == 1
        assert warnings[0]["metadata"]["chapter"] == 3
        assert warnings[0]["metadata"]["received"] == "The safe option presents itself"

    @pytest.mark.asyncio
    async def test_alternate_function_is_kept(self, registry, json_parser):
        combo = ("enemies_to_lovers", "safety", "tragic", "none")
        blueprint = registry.get(*combo)
        chapters = build_chapters(blueprint)
        chapters[8]["function"] = "The last reach"
        llm = StubLLM(build_response(blueprint, chapters=chapters))

        output = await _run(llm, json_parser, registry, combo=combo)

        assert output.chapters[8].chapter == 9
        assert output.chapters[8].function == "The last reach"
        assert get_log_buffer().get_warnings(source="phase1") == []


class TestValidationFailures:

    @pytest.mark.asyncio
    async def test_short_description(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        chapters = build_chapters(blueprint)
        chapters[2]["description"] = "   Too short.   "
        llm = StubLLM(build_response(blueprint, chapters=chapters))

        with pytest.raises(ChapterDescriptionTooShortError) as exc_info:
            await _run(llm, json_parser, registry)

        assert exc_info.value.chapter == 3
        assert exc_info.value.length == len("Too short.")
        assert "3" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_description(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        chapters = build_chapters(blueprint)
        del chapters[0]["description"]
        llm = StubLLM(build_response(blueprint, chapters=chapters))

        with pytest.raises(ChapterDescriptionTooShortError):
            await _run(llm, json_parser, registry)

    @pytest.mark.asyncio
    async def test_count_mismatch(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        llm = StubLLM(build_response(blueprint, chapters=build_chapters(blueprint)[:-1]))

        with pytest.raises(ChapterCountMismatchError) as exc_info:
            await _run(llm, json_parser, registry)

        assert exc_info.value.expected == 11
        assert exc_info.value.actual == 10

    @pytest.mark.asyncio
    async def test_missing_chapters_array(self, registry, json_parser):
        llm = StubLLM('{"concept_summary": "No chapters here"}')

        with pytest.raises(MissingChaptersArrayError):
            await _run(llm, json_parser, registry)

    @pytest.mark.asyncio
    async def test_unparseable_response(self, registry, json_parser):
        llm = StubLLM("I'm sorry, I can't produce that outline.")

        with pytest.raises(JSONParseError) as exc_info:
            await _run(llm, json_parser, registry)

        assert isinstance(exc_info.value, Phase1ValidationError)
        assert "JSON parse failed" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unexpected_chapter_number(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        chapters = build_chapters(blueprint)
        chapters[-1]["chapter"] = 99
        llm = StubLLM(build_response(blueprint, chapters=chapters))

        with pytest.raises(UnexpectedChapterNumberError) as exc_info:
            await _run(llm, json_parser, registry)

        assert exc_info.value.chapter == 99

    @pytest.mark.asyncio
    async def test_integral_float_chapter_numbers_accepted(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        chapters = build_chapters(blueprint)
        for ch in chapters:
            ch["chapter"] = float(ch["chapter"])
        llm = StubLLM(build_response(blueprint, chapters=chapters))

        output = await _run(llm, json_parser, registry)

        assert [c.chapter for c in output.chapters] == list(range(1, 12))
        assert all(type(c.chapter) is int for c in output.chapters)

    @pytest.mark.asyncio
    async def test_fractional_chapter_number_rejected(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        chapters = build_chapters(blueprint)
        chapters[2]["chapter"] = 2.5
        llm = StubLLM(build_response(blueprint, chapters=chapters))

        with pytest.raises(UnexpectedChapterNumberError):
            await _run(llm, json_parser, registry)

    @pytest.mark.asyncio
    async def test_duplicate_chapter_number(self, registry, json_parser):
        blueprint = registry.get(*SAFETY_NONE)
        chapters = build_chapters(blueprint)
        chapters[1]["chapter"] = 1
        llm = StubLLM(build_response(blueprint, chapters=chapters))

        with pytest.raises(DuplicateChapterNumberError) as exc_info:
            await _run(llm, json_parser, registry)

        assert exc_info.value.chapter == 1


class TestLookupAndLLMFailures:

    @pytest.mark.asyncio
    async def test_blueprint_not_found(self, registry, json_parser):
        llm = StubLLM()
        combo = ("enemies_to_lovers", "identity", "tragic", "none")

        with pytest.raises(BlueprintNotFoundError) as exc_info:
            await _run(llm, json_parser, registry, combo=combo)

        for part in combo:
            assert part in str(exc_info.value)
        llm.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_llm_error_propagates(self, registry, json_parser):
        llm = StubLLM()
        llm.complete.side_effect = LLMInvocationError("upstream timeout")

        with pytest.raises(LLMInvocationError, match="upstream timeout"):
            await _run(llm, json_parser, registry)


class TestCheckBlueprintAvailable:

    def test_allowed(self, registry):
        check = check_blueprint_available("enemies_to_lovers", "safety", "HEA", "none", registry=registry)

        assert check.allowed is True
        assert check.blueprint_name
        assert check.reason is None

    def test_denied_reason_names_combination(self, registry):
        check = check_blueprint_available("enemies_to_lovers", "identity", "tragic", "none", registry=registry)

        assert check.allowed is False
        assert check.blueprint_name is None
        for part in ("enemies_to_lovers", "identity", "tragic", "none"):
            assert part in check.reason

    def test_uses_process_registry_by_default(self):
        assert check_blueprint_available("enemies_to_lovers", "identity", "HEA", "secret").allowed

    def test_to_dict(self):
        assert AvailabilityCheck(allowed=True, blueprint_name="X").to_dict() == {
            "allowed": True,
            "blueprint_name": "X",
        }
