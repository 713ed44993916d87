# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境隔离与通用 schema fixtures。
"""

from enum import Enum

import pytest

from querycoder import QueryCoder, QueryHandler, ValueType
from querycoder.settings import get_settings


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - 避免开发者本机环境变量影响测试稳定性
    - 每个用例重新读取 Settings
    """
    monkeypatch.setenv("QUERYCODER_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("QUERYCODER_LOG_FORMAT", "console")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class Faction(Enum):
    ALLIANCE = "Alliance"
    HORDE = "Horde"


@pytest.fixture
def faction():
    return Faction


@pytest.fixture
def game_schema():
    """两款游戏共用 ``dungeon`` query key 的 schema.

    ``filters`` 写在 ``game`` 之前, 使索引顺序中 dungeon 先于判别字段 game.
    """
    dungeon = QueryHandler(query="dungeon")
    return {
        "filters": {
            "wow": {
                "dungeon": dungeon.clone({"game": "Wow"}),
                "rating": QueryHandler(query="rating", decode_type=ValueType.NUMBER),
                "faction": QueryHandler(
                    query="faction",
                    aliases={Faction.ALLIANCE: "a", Faction.HORDE: "h"},
                ),
            },
            "lost_ark": {
                "dungeon": dungeon.clone({"game": "LostArk"}),
                "classes": QueryHandler(query="classes", decode_type=ValueType.ARRAY),
            },
        },
        "game": QueryHandler(query="game"),
        "game_mode": QueryHandler(query="mode", aliases={"WowMythicPlus": "mplus", "WowRaid": "raid"}),
        "voice_chat": QueryHandler(query="voice", decode_type=ValueType.BOOLEAN, accept_empty_value=True),
        "internal_note": QueryHandler(query="note", encodable=False),
    }


@pytest.fixture
def game_coder(game_schema):
    return QueryCoder(game_schema)
