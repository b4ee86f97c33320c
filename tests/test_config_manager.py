import json

from config_manager import ConfigManager
from models import LegendPosition, PatternConfig


def test_missing_file_gives_defaults(tmp_path):
    config = ConfigManager(tmp_path / "none.json").load()
    assert config == PatternConfig()


def test_save_then_load(tmp_path):
    path = tmp_path / "config.json"
    manager = ConfigManager(path)
    config = PatternConfig(
        grid_size=32,
        max_colors=8,
        show_names=False,
        legend_position=LegendPosition.BOTTOM,
        gap_x_ratio=0.25,
        palette_source="grayscale",
    )

    ok, error = manager.save(config)

    assert ok and error is None
    assert json.loads(path.read_text())["legend_position"] == "bottom"
    assert manager.load() == config


def test_partial_file_fills_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"grid_size": 12}))

    config = ConfigManager(path).load()

    assert config.grid_size == 12
    assert config.max_colors == PatternConfig().max_colors
    assert config.legend_position == LegendPosition.RIGHT


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops")
    assert ConfigManager(path).load() == PatternConfig()


def test_unknown_legend_position_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"grid_size": 12, "legend_position": "left"}))
    assert ConfigManager(path).load() == PatternConfig()


def test_save_to_unwritable_location(tmp_path):
    ok, error = ConfigManager(tmp_path / "missing" / "config.json").save(PatternConfig())
    assert not ok
    assert error
