import dataclasses
from pathlib import Path

import pytest

from matimg import InvalidScalingFactorError, RenderConfig
from matimg.configs.loader import (
    apply_overrides,
    deep_merge,
    load_config_tree,
    load_render_config,
    read_yaml,
)

DEFAULTS_YAML = Path(__file__).resolve().parents[1] / "configs" / "defaults.yaml"


def test_config_is_frozen():
    cfg = RenderConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.scaling_factor = 3  # type: ignore[misc]


def test_config_validation():
    with pytest.raises(InvalidScalingFactorError):
        RenderConfig(scaling_factor=0)
    with pytest.raises(ValueError):
        RenderConfig(verbosity=-1)


def test_replace_revalidates():
    cfg = RenderConfig(scaling_factor=4)
    assert cfg.replace(with_color=False).scaling_factor == 4
    with pytest.raises(InvalidScalingFactorError):
        cfg.replace(scaling_factor=0)


def test_from_mapping_ignores_unknown_keys():
    cfg = RenderConfig.from_mapping({"renderer": "rgba", "scaling_factor": 7, "with_color": 0})
    assert cfg.scaling_factor == 7
    assert cfg.with_color is False
    assert RenderConfig.from_mapping(None) == RenderConfig()


def test_load_repo_defaults():
    cfg = load_render_config(DEFAULTS_YAML)
    assert cfg == RenderConfig(
        verbosity=0,
        with_color=True,
        annotate_image=True,
        draw_diagonal=True,
        draw_boundaries=True,
        scaling_factor=10,
    )


def test_load_with_overrides():
    cfg = load_render_config(
        DEFAULTS_YAML,
        ["render.scaling_factor=25", "render.with_color=false", "render.verbosity=2"],
    )
    assert (cfg.scaling_factor, cfg.with_color, cfg.verbosity) == (25, False, 2)

    with pytest.raises(InvalidScalingFactorError):
        load_render_config(DEFAULTS_YAML, ["render.scaling_factor=0"])


def test_config_tree_and_overrides(tmp_path):
    p = tmp_path / "c.yaml"
    p.write_text("defaults:\n  - _self_\nio:\n  out_dir: out\n", encoding="utf-8")

    tree = load_config_tree(p, ["io.input=null", "io.extra.depth=1.5", "io.name=abc"])
    assert "defaults" not in tree
    assert tree["io"] == {"out_dir": "out", "input": None, "extra": {"depth": 1.5}, "name": "abc"}

    with pytest.raises(ValueError):
        apply_overrides({}, ["no_equals_sign"])


def test_read_yaml_and_merge(tmp_path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert read_yaml(empty) == {}

    base = {"render": {"scaling_factor": 1, "with_color": True}}
    merged = deep_merge(base, {"render": {"scaling_factor": 5}})
    assert merged == {"render": {"scaling_factor": 5, "with_color": True}}
    assert base["render"]["scaling_factor"] == 1


def test_read_yaml_rejects_non_mapping(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- render\n- io\n", encoding="utf-8")
    with pytest.raises(TypeError):
        read_yaml(p)

    nested = {"io": {"extra": {"depth": 1}}}
    merged = deep_merge(nested, {"io": {"extra": {"width": 2}}})
    assert merged["io"]["extra"] == {"depth": 1, "width": 2}
    merged["io"]["extra"]["depth"] = 9
    assert nested["io"]["extra"]["depth"] == 1
