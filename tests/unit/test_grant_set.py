"""Tests for Grant and GrantSet."""

import pytest

from permatrix.domain.value_objects import Grant, GrantSet

from tests.conftest import grants


def test_grant_rejects_empty_actions() -> None:
    with pytest.raises(ValueError):
        Grant(module_id=10, action_ids=frozenset())


def test_grant_set_rejects_duplicate_modules() -> None:
    with pytest.raises(ValueError):
        GrantSet((Grant(10, frozenset({1})), Grant(10, frozenset({2}))))


def test_from_pairs_merges_duplicates_in_first_seen_position() -> None:
    result = GrantSet.from_pairs([(11, [1]), (10, [2]), (11, [3])])
    assert result.module_ids == (11, 10)
    assert result.actions_for(11) == frozenset({1, 3})


def test_from_pairs_drops_empty_entries() -> None:
    result = GrantSet.from_pairs([(10, []), (11, [1])])
    assert result.module_ids == (11,)
    assert 10 not in result


def test_equality_ignores_entry_order() -> None:
    assert grants({10: [1], 11: [2]}) == grants({11: [2], 10: [1]})
    assert hash(grants({10: [1], 11: [2]})) == hash(grants({11: [2], 10: [1]}))
    assert grants({10: [1]}) != grants({10: [1, 2]})


def test_with_actions_keeps_position_of_existing_entry() -> None:
    result = grants({10: [1], 11: [2]}).with_actions(10, [1, 3])
    assert result.module_ids == (10, 11)
    assert result.actions_for(10) == frozenset({1, 3})


def test_with_actions_appends_new_module() -> None:
    result = grants({10: [1]}).with_actions(12, [2])
    assert result.module_ids == (10, 12)


def test_with_empty_actions_removes_entry() -> None:
    result = grants({10: [1], 11: [2]}).with_actions(10, [])
    assert result.module_ids == (11,)


def test_operations_do_not_mutate_original() -> None:
    original = grants({10: [1]})
    original.with_actions(10, [2])
    original.without_module(10)
    assert original.as_dict() == {10: frozenset({1})}


def test_actions_for_missing_module_is_empty() -> None:
    assert grants().actions_for(99) == frozenset()
    assert len(grants()) == 0
    assert not grants()
