import pytest

from analysis_pipeline.config import DEFAULT_PATTERN_COLORS, build_palette, get_nested, load_config


def test_load_config_and_nested_lookup(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("clustering:\n  seed: 7\n  k_range: [2, 3]\n", encoding="utf-8")
    cfg = load_config(path)
    assert get_nested(cfg, ["clustering", "seed"], 42) == 7
    assert get_nested(cfg, ["clustering", "k_range"], None) == [2, 3]
    assert get_nested(cfg, ["route_matching", "min_matches"], 2) == 2


def test_empty_config_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


def test_palette_from_config():
    cfg = {"palette": {"clusters": ["#111", "#222"], "noise": "#000"}}
    palette = build_palette(cfg, "clusters")
    assert palette.colors == ("#111", "#222")
    assert palette.color_for(3) == "#222"
    assert palette.color_for(-1) == "#000"


def test_palette_defaults():
    palette = build_palette({}, "patterns")
    assert palette.colors == tuple(DEFAULT_PATTERN_COLORS)


def test_unknown_palette_kind():
    with pytest.raises(ValueError):
        build_palette({}, "heatmap")


def test_null_section_falls_back_to_default(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("route_matching:\n  min_matches:\n", encoding="utf-8")
    cfg = load_config(path)
    assert get_nested(cfg, ["route_matching", "min_matches"], 2) == 2


def test_non_mapping_config_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)
