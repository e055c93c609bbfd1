"""Tests for role visibility filtering."""

from permatrix.domain.entities import Role
from permatrix.domain.services.role_visibility import UnavailableReason, visible_roles
from permatrix.domain.value_objects import EntityStatus

from tests.conftest import sample_roles


def test_scenario_hierarchy_filter() -> None:
    """Level-2 admin sees Manager and Clerk only."""
    roles = [
        Role(id=1, name="Super Admin", level=1),
        Role(id=2, name="Manager", level=2),
        Role(id=3, name="Clerk", level=3),
        Role(id=4, name="Retired", level=3, status=EntityStatus.INACTIVE),
    ]
    result = visible_roles(roles, acting_admin_level=2)
    assert [(o.id, o.label) for o in result.options] == [(2, "Manager"), (3, "Clerk")]
    assert result.current_role is None


def test_no_option_above_authority_or_inactive() -> None:
    for level in (1, 2, 3, 4):
        result = visible_roles(sample_roles(), level)
        by_id = {r.id: r for r in sample_roles()}
        for option in result.options:
            assert by_id[option.id].level >= level
            assert by_id[option.id].status is EntityStatus.ACTIVE


def test_current_role_above_authority_is_flagged_not_offered() -> None:
    result = visible_roles(sample_roles(), 2, editing_user_current_role_id=1)
    assert 1 not in [o.id for o in result.options]
    assert result.current_role is not None
    assert result.current_role.label == "Super Admin"
    assert result.current_role.reason is UnavailableReason.ABOVE_AUTHORITY


def test_current_inactive_role_is_flagged() -> None:
    result = visible_roles(sample_roles(), 1, editing_user_current_role_id=4)
    assert result.current_role.reason is UnavailableReason.INACTIVE


def test_current_unknown_role_has_no_label() -> None:
    result = visible_roles(sample_roles(), 1, editing_user_current_role_id=99)
    assert result.current_role.label is None
    assert result.current_role.reason is UnavailableReason.UNKNOWN


def test_current_assignable_role_has_no_notice() -> None:
    result = visible_roles(sample_roles(), 1, editing_user_current_role_id=3)
    assert result.current_role is None


def test_preset_listing_narrows_options() -> None:
    result = visible_roles(
        sample_roles(), 1, editing_user_current_role_id=2, preset_role_ids={1, 3}
    )
    assert [o.id for o in result.options] == [1, 3]
    assert result.current_role.reason is UnavailableReason.NO_ACTIVE_PRESET


def test_duplicate_roles_are_offered_once() -> None:
    roles = sample_roles() + [Role(id=3, name="Clerk", level=3)]
    result = visible_roles(roles, 1)
    assert [o.id for o in result.options] == [1, 2, 3]
