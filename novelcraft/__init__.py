"""
novelcraft: story blueprint resolution and Phase 1 chapter generation.

- storyteller: the chapter tree, static tables, resolver and registry
- agents: the Phase 1 prompt, LLM/JSON collaborators, execution and guard
- errors: exception taxonomy
- config: settings loaded from the environment
"""

__version__ = "0.1.0"
