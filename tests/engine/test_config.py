from __future__ import annotations

from pageeditor.engine.config import DEFAULTS, load_config


def test_defaults_are_loaded_without_a_file():
    config = load_config(None)

    assert config.get("max_depth") == 10
    assert config.tag_priority("h1") == 100
    assert config.tag_priority("label") == 5
    assert config.boost("long_text") == -5
    assert config.penalty("seo", "weak_title") == 20
    assert config.color("editing") == "#10b981"


def test_missing_file_falls_back_to_defaults(tmp_path):
    config = load_config(tmp_path / "missing.yaml")

    assert config.raw == load_config(None).raw


def test_yaml_overrides_are_merged(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text(
        "max_depth: 4\n"
        "tag_priorities:\n"
        "  label: 33\n"
        "penalties:\n"
        "  seo:\n"
        "    weak_title: 5\n"
        "highlight_colors:\n"
        "  hover: '#ff0000'\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.get("max_depth") == 4
    assert config.tag_priority("label") == 33
    assert config.tag_priority("h1") == 100
    assert config.penalty("seo", "weak_title") == 5
    assert config.penalty("seo", "no_description") == 15
    assert config.color("hover") == "#ff0000"
    assert config.color("selected") == "#3b82f6"


def test_loading_does_not_mutate_defaults(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("tag_priorities:\n  p: 1\npenalties:\n  content:\n    missing_h1: 0\n", encoding="utf-8")

    load_config(path)

    assert DEFAULTS["tag_priorities"]["p"] == 40
    assert DEFAULTS["penalties"]["content"]["missing_h1"] == 15


def test_empty_yaml_file(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path).get("base_z_index") == 1000
