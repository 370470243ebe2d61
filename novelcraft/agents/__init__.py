"""
Phase 1 generation for novelcraft.

Flow:
  Concept + (trope, tension, ending, modifier)
    → check_blueprint_available (guard, no LLM call)
    → execute_phase1_blueprint: registry lookup → prompt → LLMCaller → JSONParser → validation

Collaborators:
- AnthropicLLMCaller: Claude via LangChain (model/temperature/max tokens from config)
- LenientJSONParser: direct parse, fenced block, then first JSON value in the text
"""

from novelcraft.agents.collaborators import (
    LLMOptions,
    ParseResult,
    LLMCaller,
    JSONParser,
    AnthropicLLMCaller,
    LenientJSONParser,
)
from novelcraft.agents.phase1_prompts import (
    PHASE_1_BLUEPRINT_SYSTEM_PROMPT,
    build_phase1_blueprint_prompt,
)
from novelcraft.agents.phase1_blueprint import (
    MIN_DESCRIPTION_LENGTH,
    Phase1Chapter,
    Phase1Output,
    AvailabilityCheck,
    execute_phase1_blueprint,
    check_blueprint_available,
)

__all__ = [
    # Collaborators
    "LLMOptions",
    "ParseResult",
    "LLMCaller",
    "JSONParser",
    "AnthropicLLMCaller",
    "LenientJSONParser",
    # Prompts
    "PHASE_1_BLUEPRINT_SYSTEM_PROMPT",
    "build_phase1_blueprint_prompt",
    # Phase 1
    "MIN_DESCRIPTION_LENGTH",
    "Phase1Chapter",
    "Phase1Output",
    "AvailabilityCheck",
    "execute_phase1_blueprint",
    "check_blueprint_available",
]
