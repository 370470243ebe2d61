"""
Unit tests for the blueprint resolver.

Tests cover:
- Determinism and chapter counts per combination
- Identity normalisation
- Employment filtering by triangle and secret
- Alternates, consequence variants and advisory constraints
- Roles, cast and secret structure
- Exhaustiveness of the chapter tree over every legal context
"""

import pytest

from novelcraft.errors import InvalidCombinationError
from novelcraft.storyteller.blueprint_resolver import (
    LEGAL_CONTEXTS,
    acts_for,
    resolve_blueprint,
    resolve_context,
    resolve_end_state,
    select_variant,
)
from novelcraft.storyteller.blueprint_types import Ending, Modifier, StoryContext, Tension


def _chapter(blueprint, function):
    for ch in blueprint.main_chapters():
        if ch.function == function:
            return ch
    raise AssertionError(f"No chapter {function!r} in {blueprint.id}")


class TestChapterCounts:
    """Chapter counts per combination."""

    @pytest.mark.parametrize("ending", ["HEA", "bittersweet"])
    @pytest.mark.parametrize("secret", [False, True])
    def test_safety_without_triangle_has_11(self, ending, secret):
        blueprint = resolve_blueprint("safety", ending, secret, False)
        assert blueprint.total_chapters == 11

    @pytest.mark.parametrize("ending", ["HEA", "bittersweet"])
    @pytest.mark.parametrize("secret", [False, True])
    def test_safety_with_triangle_has_14(self, ending, secret):
        blueprint = resolve_blueprint("safety", ending, secret, True)
        assert blueprint.total_chapters == 14

    @pytest.mark.parametrize("secret", [False, True])
    def test_identity_has_9(self, secret):
        blueprint = resolve_blueprint("identity", "HEA", secret, False)
        assert blueprint.total_chapters == 9

    def test_tragic_counts(self):
        assert resolve_blueprint("safety", "tragic", False, False).total_chapters == 11
        assert resolve_blueprint("safety", "tragic", False, True).total_chapters == 13

    def test_numbers_are_sequential(self):
        for context in LEGAL_CONTEXTS:
            blueprint = resolve_context(context)
            numbers = [ch.chapter for ch in blueprint.main_chapters()]
            assert numbers == list(range(1, blueprint.total_chapters + 1))

    def test_four_phases(self):
        blueprint = resolve_blueprint("safety", "HEA", False, False)
        assert [p.phase for p in blueprint.phases] == [1, 2, 3, 4]
        assert [p.name for p in blueprint.phases] == ["Setup", "Falling", "Retreat", "Resolution"]


class TestDeterminism:

    def test_same_inputs_same_blueprint(self):
        first = resolve_blueprint("safety", "HEA", True, True)
        second = resolve_blueprint("safety", "HEA", True, True)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_ending_is_case_insensitive(self):
        assert resolve_blueprint("safety", "hea", False, False) == resolve_blueprint("safety", "HEA", False, False)


class TestIdentityNormalisation:

    def test_identity_tragic_triangle_becomes_hea_without_triangle(self):
        normalised = resolve_blueprint("identity", "tragic", False, True)
        expected = resolve_blueprint("identity", "HEA", False, False)
        assert normalised == expected
        assert normalised.ending == Ending.HEA
        assert normalised.modifier == Modifier.NONE

    def test_identity_keeps_secret(self):
        blueprint = resolve_blueprint("identity", "bittersweet", True, True)
        assert blueprint.modifier == Modifier.SECRET
        assert blueprint.id == "enemies_to_lovers|identity|HEA|secret"

    def test_resolve_context_rejects_unnormalised_identity(self):
        with pytest.raises(InvalidCombinationError):
            resolve_context(StoryContext(Tension.IDENTITY, Ending.TRAGIC, False, False))


class TestInvalidInputs:

    def test_unknown_tension(self):
        with pytest.raises(InvalidCombinationError, match="tension"):
            resolve_blueprint("duty", "HEA", False, False)

    def test_unknown_ending(self):
        with pytest.raises(InvalidCombinationError, match="ending"):
            resolve_blueprint("safety", "ambiguous", False, False)

    def test_unknown_trope(self):
        with pytest.raises(InvalidCombinationError, match="trope"):
            resolve_blueprint("safety", "HEA", False, False, trope="fake_dating")


class TestEmploymentFiltering:

    def test_rival_group_only_with_triangle(self):
        with_triangle = _chapter(resolve_blueprint("safety", "HEA", False, True), "Maybe I was wrong")
        without = _chapter(resolve_blueprint("safety", "HEA", False, False), "Maybe I was wrong")

        assert with_triangle.group("rival_fails") is not None
        assert without.group("rival_fails") is None

    def test_tension_scoped_groups(self):
        safety = _chapter(resolve_blueprint("safety", "HEA", False, False), "Maybe I was wrong")
        identity = _chapter(resolve_blueprint("identity", "HEA", False, False), "Maybe I was wrong")

        assert [g.key for g in safety.employment] == ["the_trouble", "his_act"]
        assert [g.key for g in identity.employment] == ["the_exposure", "his_act"]

    def test_secret_options(self):
        plain = resolve_blueprint("safety", "HEA", False, False).chapter(1)
        secret = resolve_blueprint("safety", "HEA", True, False).chapter(1)

        assert "secret_cost" not in plain.group("the_pressure").option_ids()
        assert "secret_cost" in secret.group("the_pressure").option_ids()

    def test_secret_surfaces_options_follow_triangle(self):
        both = _chapter(resolve_blueprint("safety", "HEA", True, True), "The dark moment")
        secret_only = _chapter(resolve_blueprint("safety", "HEA", True, False), "The dark moment")
        plain = _chapter(resolve_blueprint("safety", "HEA", False, False), "The dark moment")

        assert "rival_weaponises" in both.group("secret_surfaces").option_ids()
        assert "rival_weaponises" not in secret_only.group("secret_surfaces").option_ids()
        assert plain.group("secret_surfaces") is None

    def test_withdrawal_confirmation_groups(self):
        tri = _chapter(resolve_blueprint("safety", "HEA", False, True), "The withdrawal and retreat")
        solo = _chapter(resolve_blueprint("safety", "HEA", False, False), "The withdrawal and retreat")

        assert tri.group("what_confirms_it") is not None
        assert tri.group("what_confirms_it_alone") is None
        assert solo.group("what_confirms_it") is None
        assert solo.group("what_confirms_it_alone") is not None

    def test_no_empty_groups(self):
        for context in LEGAL_CONTEXTS:
            for ch in resolve_context(context).all_chapters():
                for group in ch.employment:
                    assert group.options, f"{ch.function} / {group.key} is empty for {context}"


class TestChapterSelection:

    def test_chapter_three_depends_on_triangle(self):
        assert resolve_blueprint("safety", "HEA", False, False).chapter(3).function == "The pressure tightens"
        assert resolve_blueprint("safety", "HEA", False, True).chapter(3).function == "The safe option presents itself"
        assert resolve_blueprint("identity", "HEA", False, False).chapter(3).function == "The expectation"

    def test_final_chapter_follows_ending(self):
        hea = resolve_blueprint("safety", "HEA", False, False)
        bittersweet = resolve_blueprint("safety", "bittersweet", False, False)
        tragic = resolve_blueprint("safety", "tragic", False, False)

        assert hea.chapter(11).function == "HEA"
        assert bittersweet.chapter(11).function == "The price of together"
        assert tragic.chapter(11).function == "What remains"

    def test_end_states_follow_triangle(self):
        tri = _chapter(resolve_blueprint("safety", "HEA", False, True), "Forced proximity that reinforces first impression")
        solo = _chapter(resolve_blueprint("safety", "HEA", False, False), "Forced proximity that reinforces first impression")

        assert tri.end_state == "She commits to the safe path. He is exactly what she feared."
        assert solo.end_state == "She resolves to keep him at arm's length. He is exactly what she feared."

    def test_every_chapter_has_end_state(self):
        for context in LEGAL_CONTEXTS:
            for ch in resolve_context(context).all_chapters():
                assert ch.end_state


class TestTragedy:

    def test_alternate_shares_number(self):
        blueprint = resolve_blueprint("safety", "tragic", False, False)
        chapters = blueprint.all_chapters()
        alternates = [ch for ch in chapters if ch.is_alternate]

        assert len(alternates) == 1
        alternate = alternates[0]
        assert alternate.function == "The last reach"
        assert alternate.alternate_of == 9
        assert alternate.chapter == 9

        primary_index = chapters.index(blueprint.chapter(9))
        assert chapters[primary_index + 1] is alternate

    def test_alternate_not_counted(self):
        blueprint = resolve_blueprint("safety", "tragic", True, True)
        assert len(blueprint.all_chapters()) == blueprint.total_chapters + 1

    def test_consequence_variants_on_final_chapter(self):
        blueprint = resolve_blueprint("safety", "tragic", False, True)
        final = blueprint.chapter(blueprint.total_chapters)

        assert final.function == "What remains"
        assert [v.id for v in final.consequence_variants] == ["loss_death", "loss_apart", "loss_self"]


class TestConstraints:

    def test_only_applicable_rules_attached(self):
        plain = resolve_blueprint("safety", "HEA", False, False)
        identity = resolve_blueprint("identity", "HEA", False, False)

        assert [r.id for r in plain.constraints] == ["protective_withdrawal_is_not_cruel"]
        assert {r.id for r in identity.constraints} == {"arranged_match_is_broken", "succession_is_refused"}

    def test_triangle_secret_rules(self):
        ids = {r.id for r in resolve_blueprint("safety", "HEA", True, True).constraints}

        assert "offer_becomes_leverage" in ids
        assert "planted_secret_is_discovered" in ids
        assert "manufactured_evidence_unravels" in ids
        assert "manufactured_evidence_unravels_late" not in ids

    def test_constraint_attached_to_target_group(self):
        blueprint = resolve_blueprint("safety", "HEA", False, False)
        dark_moment = _chapter(blueprint, "The dark moment")
        constraints = dark_moment.group("the_confrontation").constraints

        assert len(constraints) == 1
        constraint = constraints[0]
        assert constraint.option == "mutual_wound"
        assert constraint.effect.value == "disables"
        assert constraint.when == 'Chapter 7 ("The withdrawal and retreat") uses "To protect her from his world"'

    def test_constraints_do_not_remove_options(self):
        dark_moment = _chapter(resolve_blueprint("safety", "HEA", False, False), "The dark moment")
        assert "mutual_wound" in dark_moment.group("the_confrontation").option_ids()


class TestRolesAndCast:

    def test_rival_role_only_with_triangle(self):
        assert "rival" in resolve_blueprint("safety", "HEA", False, True).expected_roles
        assert set(resolve_blueprint("safety", "HEA", False, False).expected_roles) == {"protagonist", "primary"}

    def test_triangle_cast_members_filtered(self):
        with_triangle = resolve_blueprint("safety", "HEA", False, True)
        without = resolve_blueprint("safety", "HEA", False, False)

        assert len(with_triangle.cast) == 5
        assert len(without.cast) == 3
        assert not any(m.requires_triangle for m in without.cast)

    def test_secret_structure_only_with_secret(self):
        secret = resolve_blueprint("safety", "HEA", True, False)
        plain = resolve_blueprint("safety", "HEA", False, False)

        assert plain.secret_structure is None
        assert set(secret.secret_structure) == {"description", "surfacing", "guidance"}

    def test_name(self):
        blueprint = resolve_blueprint("safety", "HEA", True, True)
        assert blueprint.name == "Enemies to Lovers + Safety + HEA + Secret + Love Triangle"


class TestTreeExhaustiveness:

    def test_no_slot_is_ambiguous(self):
        for context in LEGAL_CONTEXTS:
            for act in acts_for(context):
                for slot in act.slots:
                    definition = select_variant(slot, context)
                    if definition is not None:
                        assert resolve_end_state(definition, context)

    def test_legal_contexts(self):
        assert len(LEGAL_CONTEXTS) == 14
        assert all(c == c.normalized() for c in LEGAL_CONTEXTS)


class TestModifierFlags:

    @pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
    def test_non_bool_secret_rejected(self, value):
        with pytest.raises(InvalidCombinationError, match="secret"):
            resolve_blueprint("safety", "HEA", value, False)

    @pytest.mark.parametrize("value", ["false", 1])
    def test_non_bool_triangle_rejected(self, value):
        with pytest.raises(InvalidCombinationError, match="triangle"):
            resolve_blueprint("safety", "HEA", False, value)
