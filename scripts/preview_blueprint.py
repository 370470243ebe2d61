#!/usr/bin/env python3
"""
Blueprint preview helper for novelcraft.

Lists the registered blueprint keys, or prints the Phase 1 prompt a
combination would send to the model. Makes no LLM call.

Usage:
    python scripts/preview_blueprint.py --list
    python scripts/preview_blueprint.py enemies_to_lovers safety HEA both --concept "..."
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from novelcraft.agents.phase1_blueprint import check_blueprint_available
from novelcraft.agents.phase1_prompts import build_phase1_blueprint_prompt
from novelcraft.storyteller.blueprint_registry import get_blueprint, get_registry
from novelcraft.utils.logging import configure_logging


def list_blueprints():
    registry = get_registry()
    print("=" * 60)
    print(f"Registered blueprints ({len(registry)})")
    print("=" * 60)
    for blueprint in registry:
        print(f"  {blueprint.id:<50} {blueprint.total_chapters:>2} chapters")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Preview story blueprints and Phase 1 prompts")
    parser.add_argument("--list", action="store_true", help="List registered blueprint keys")
    parser.add_argument("trope", nargs="?", default="enemies_to_lovers")
    parser.add_argument("tension", nargs="?")
    parser.add_argument("ending", nargs="?")
    parser.add_argument("modifier", nargs="?", default="none")
    parser.add_argument("--concept", default="(concept goes here)", help="Concept text for the prompt")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if args.list:
        list_blueprints()
        return 0

    if not args.tension or not args.ending:
        parser.error("tension and ending are required unless --list is given")

    check = check_blueprint_available(args.trope, args.tension, args.ending, args.modifier)
    if not check.allowed:
        print(f"❌ {check.reason}")
        return 1

    blueprint = get_blueprint(args.trope, args.tension, args.ending, args.modifier)
    print(f"✅ {check.blueprint_name} ({blueprint.total_chapters} chapters)")
    print("=" * 60)
    print(build_phase1_blueprint_prompt(args.concept, blueprint))
    return 0


if __name__ == "__main__":
    sys.exit(main())
