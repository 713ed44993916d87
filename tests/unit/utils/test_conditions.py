from enum import Enum

import pytest

from querycoder.utils.conditions import (
    condition_leaf_paths,
    condition_scopes,
    get_path,
    matches_condition,
    set_path,
)


class _Game(Enum):
    WOW = "Wow"


@pytest.mark.unit
def test_condition_leaf_paths_flattens_nested_conditions() -> None:
    assert condition_leaf_paths({"game": "Wow", "meta": {"season": 3, "region": "eu"}}) == [
        ("game",),
        ("meta", "season"),
        ("meta", "region"),
    ]


@pytest.mark.unit
def test_condition_scopes_go_from_parent_to_root() -> None:
    assert condition_scopes(("filters", "wow", "dungeon")) == [("filters", "wow"), ("filters",), ()]
    assert condition_scopes(("game",)) == [()]


@pytest.mark.unit
def test_matches_condition_is_deep_subset() -> None:
    target = {"game": "Wow", "meta": {"season": 3, "region": "eu"}}

    assert matches_condition(target, {"game": "Wow"})
    assert matches_condition(target, {"meta": {"season": 3}})
    assert not matches_condition(target, {"meta": {"season": 4}})
    assert not matches_condition(target, {"missing": None})
    assert not matches_condition("Wow", {"game": "Wow"})


@pytest.mark.unit
def test_matches_condition_compares_enum_values() -> None:
    assert matches_condition({"game": _Game.WOW}, {"game": "Wow"})
    assert matches_condition({"game": "Wow"}, {"game": _Game.WOW})
    assert not matches_condition({"game": _Game.WOW}, {"game": "LostArk"})


@pytest.mark.unit
def test_set_path_creates_intermediate_dicts() -> None:
    data: dict = {"filters": {"wow": {"rating": 1}}}

    set_path(data, ("filters", "wow", "dungeon"), "X")
    set_path(data, ("filters", "lost_ark", "classes"), ["Bard"])

    assert data == {"filters": {"wow": {"rating": 1, "dungeon": "X"}, "lost_ark": {"classes": ["Bard"]}}}


@pytest.mark.unit
def test_get_path_reads_nested_values() -> None:
    data = {"filters": {"wow": {"dungeon": None}}}

    assert get_path(data, ("filters", "wow")) == {"dungeon": None}
    assert get_path(data, ("filters", "wow", "dungeon")) is None
    assert get_path(data, ()) is data


@pytest.mark.unit
def test_missing_path_never_matches_a_condition() -> None:
    data = {"filters": {"wow": {"dungeon": "X"}}}

    assert not matches_condition(get_path(data, ("filters", "lost_ark")), {"dungeon": "X"})
    assert not matches_condition(get_path(data, ("filters", "wow", "dungeon", "deeper")), {})
