"""
Pytest configuration and fixtures for novelcraft tests.

This module provides:
- Network blocking fixture to prevent accidental Anthropic API calls
- A stub LLM caller and a registry fixture
- A helper that builds a valid Phase 1 response for a blueprint
"""

import json
import socket
import pytest
from unittest.mock import AsyncMock, patch

from novelcraft.agents.collaborators import LenientJSONParser
from novelcraft.storyteller.blueprint_registry import BlueprintRegistry
from novelcraft.utils.logging import get_log_buffer


class NetworkBlockedError(Exception):
    """Raised when a test attempts to make a network connection."""
    pass


def _block_socket_connect(*args, **kwargs):
    """Block all socket connections to prevent accidental API calls."""
    raise NetworkBlockedError(
        "Network access is blocked in unit tests. "
        "Use a stub LLM caller instead of a real client."
    )


@pytest.fixture(autouse=True)
def block_network():
    """Automatically block all network connections in tests."""
    with patch.object(socket.socket, 'connect', _block_socket_connect):
        with patch.object(socket, 'create_connection', _block_socket_connect):
            yield


@pytest.fixture(autouse=True)
def clear_log_buffer():
    """Each test starts with an empty in-memory log buffer."""
    get_log_buffer().clear()
    yield
    get_log_buffer().clear()


class StubLLM:
    """LLMCaller that returns a canned response and records the call."""

    def __init__(self, response=""):
        self.complete = AsyncMock(return_value=response)


@pytest.fixture
def registry():
    """A populated registry independent of the process-wide one."""
    return BlueprintRegistry().populate()


@pytest.fixture
def json_parser():
    return LenientJSONParser()


def build_chapters(blueprint):
    """One valid chapter entry per numbered blueprint chapter."""
    phase_of = {}
    for phase in blueprint.phases:
        for ch in phase.chapters:
            phase_of.setdefault(ch.chapter, phase.phase)
    return [
        {
            "chapter": ch.chapter,
            "phase": phase_of[ch.chapter],
            "function": ch.function,
            "description": (
                f"In chapter {ch.chapter}, Mara and Cole are pulled into {ch.function.lower()} "
                "at the harbour warehouse she is trying to save."
            ),
        }
        for ch in blueprint.main_chapters()
    ]


def build_response(blueprint, concept_summary="A harbour owner falls for the man sent to close her down.", chapters=None):
    payload = {"chapters": chapters if chapters is not None else build_chapters(blueprint)}
    if concept_summary is not None:
        payload["concept_summary"] = concept_summary
    return json.dumps(payload)
