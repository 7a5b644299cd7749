"""Tests for the numbering configuration model."""

import pytest

from headnum.numbering.config_model import (
    MAX_LEVEL,
    MISSING_LEVEL_CONFIG,
    LevelConfig,
    NumberingConfig,
)
from headnum.numbering.number_styles import NumberStyle


class TestNumberingConfigDefaults:
    def test_defaults(self) -> None:
        config = NumberingConfig()
        assert config.start_level == 1
        assert config.depth == MAX_LEVEL
        assert config.prepend_parent_number is True
        assert config.remove_existing is True
        assert config.auto_generate_on_change is False
        assert [lc.style.code for lc in config.level_configs] == [
            "1", "a", "i", "A", "I", "一", "1", "a"
        ]  # fmt: skip

    def test_defaults_are_independent(self) -> None:
        first = NumberingConfig()
        first.level_configs[0].separator = "."
        assert NumberingConfig().level_configs[0].separator == ""

    def test_range(self) -> None:
        config = NumberingConfig(start_level=2, depth=3)
        assert config.end_level == 4
        assert not config.in_range(1)
        assert config.in_range(2)
        assert config.in_range(4)
        assert not config.in_range(5)

    def test_level_config_missing_entry(self) -> None:
        config = NumberingConfig(level_configs=[LevelConfig(separator="-")])
        assert config.level_config(0).separator == "-"
        assert config.level_config(1) is MISSING_LEVEL_CONFIG
        assert config.level_config(1).separator == "."


class TestSetters:
    def test_set_depth_pads_level_configs(self) -> None:
        config = NumberingConfig(depth=1, level_configs=[LevelConfig(style=NumberStyle.circled)])
        config.set_depth(3)
        assert config.depth == 3
        assert len(config.level_configs) == 3
        assert config.level_configs[0].style == NumberStyle.circled
        assert config.level_configs[2] == LevelConfig()

    def test_set_depth_never_shrinks(self) -> None:
        config = NumberingConfig()
        config.set_depth(2)
        assert config.depth == 2
        assert len(config.level_configs) == MAX_LEVEL

    @pytest.mark.parametrize("value", [0, 9, -1])
    def test_out_of_range(self, value: int) -> None:
        config = NumberingConfig()
        with pytest.raises(ValueError, match="between 1 and 8"):
            config.set_depth(value)
        with pytest.raises(ValueError, match="start_level"):
            config.set_start_level(value)
        assert config.depth == MAX_LEVEL
        assert config.start_level == 1

    def test_snapshot_is_deep(self) -> None:
        config = NumberingConfig()
        snap = config.snapshot()
        config.level_configs[0].display_format = "({})"
        config.set_depth(3)
        assert snap.level_configs[0].display_format == "{}"
        assert snap.depth == MAX_LEVEL


class TestSerialization:
    def test_to_dict(self) -> None:
        config = NumberingConfig(
            depth=2,
            level_configs=[
                LevelConfig(style=NumberStyle.roman_upper, display_format="{}", separator="."),
                LevelConfig(style=NumberStyle.chinese_upper, separator=None),
            ],
        )
        assert config.to_dict() == {
            "startLevel": 1,
            "depth": 2,
            "removeExisting": True,
            "prependParentNumber": True,
            "autoGenerateOnChange": False,
            "levelConfigs": [
                {"style": "I", "displayFormat": "{}", "separator": "."},
                {"style": "一", "displayFormat": "{}"},
            ],
        }

    def test_round_trip(self) -> None:
        config = NumberingConfig(
            start_level=2,
            depth=3,
            prepend_parent_number=False,
            auto_generate_on_change=True,
            level_configs=[
                LevelConfig(style=NumberStyle.circled, display_format="【{}】", separator="-"),
                LevelConfig(style=NumberStyle.alpha_lower, separator=None),
                LevelConfig(),
            ],
        )
        assert NumberingConfig.from_dict(config.to_dict()) == config

    def test_from_dict_merges_over_defaults(self) -> None:
        config = NumberingConfig.from_dict({"depth": 3})
        assert config.depth == 3
        assert config.start_level == 1
        assert len(config.level_configs) == MAX_LEVEL

    def test_from_dict_pads_short_level_list(self) -> None:
        config = NumberingConfig.from_dict({"depth": 3, "levelConfigs": [{"style": "A"}]})
        assert len(config.level_configs) == 3
        assert config.level_configs[0].style == NumberStyle.alpha_upper
        # A stored entry without a separator is unset.
        assert config.level_configs[0].separator is None
        assert config.level_configs[1] == LevelConfig()

    def test_from_dict_kebab_and_aliases(self) -> None:
        config = NumberingConfig.from_dict(
            {
                "start-level": 2,
                "remove-existing-on-generate": False,
                "levels": [{"style": "roman-lower", "format": "({})", "separator": ""}],
            }
        )
        assert config.start_level == 2
        assert config.remove_existing is False
        assert config.level_configs[0] == LevelConfig(
            style=NumberStyle.roman_lower, display_format="({})", separator=""
        )

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = NumberingConfig.from_dict({"theme": "dark", "depth": 1})
        assert config.depth == 1

    def test_from_dict_invalid_values(self) -> None:
        with pytest.raises(ValueError, match="Unknown numeral style"):
            NumberingConfig.from_dict({"levelConfigs": [{"style": "greek"}]})
        with pytest.raises(ValueError):
            NumberingConfig.from_dict({"startLevel": 12})

    def test_empty_display_format_becomes_placeholder(self) -> None:
        assert LevelConfig.from_dict({"style": "1", "displayFormat": ""}).display_format == "{}"
