"""Tests for the JSON settings store."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from headnum.numbering.config_model import LevelConfig, NumberingConfig
from headnum.numbering.number_styles import NumberStyle
from headnum.settings_store import SettingsStore


def _custom_config() -> NumberingConfig:
    return NumberingConfig(
        start_level=2,
        depth=2,
        auto_generate_on_change=True,
        level_configs=[
            LevelConfig(style=NumberStyle.chinese_upper, display_format="{}、", separator=""),
            LevelConfig(style=NumberStyle.arabic, separator="."),
        ],
    )


def test_load_missing_file(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")
    assert asyncio.run(store.load()) is None


def test_load_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("  \n")
    assert asyncio.run(SettingsStore(path).load()) is None


def test_save_and_load(tmp_path: Path) -> None:
    path = tmp_path / "plugin" / "settings.json"
    store = SettingsStore(path)
    config = _custom_config()
    asyncio.run(store.save(config))

    assert path.is_file()
    text = path.read_text(encoding="utf-8")
    assert '"一"' in text
    assert json.loads(text)["startLevel"] == 2
    assert asyncio.run(store.load()) == config


def test_save_keeps_previous(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")
    first = NumberingConfig()
    second = _custom_config()

    async def scenario() -> None:
        await store.save(first)
        assert store.previous is None
        await store.save(second)

    asyncio.run(scenario())
    assert store.previous == first
    assert asyncio.run(store.load()) == second


def test_load_merges_over_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"depth": 2, "removeExistingOnGenerate": false}')
    config = asyncio.run(SettingsStore(path).load())
    assert config is not None
    assert config.depth == 2
    assert config.remove_existing is False
    assert config.start_level == 1
    assert len(config.level_configs) == 8


def test_load_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError, match="JSON object"):
        asyncio.run(SettingsStore(path).load())


def test_save_over_corrupt_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    store = SettingsStore(path)
    config = _custom_config()

    asyncio.run(store.save(config))

    assert store.previous == NumberingConfig()
    assert json.loads(path.read_text(encoding="utf-8")) == config.to_dict()
    assert asyncio.run(store.load()) == config
    assert "Could not read previous settings" in caplog.text
