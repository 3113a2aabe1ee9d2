# src/matimg/configs/loader.py
# -*- coding: utf-8 -*-
"""
配置加载（不经过 Hydra 的编程入口）：
- 从 YAML 文件读取 dict；
- 递归深度合并，后者覆盖前者；
- 用扁平 key=val 覆盖（例如 render.scaling_factor=20）；
- 取出 render.* 构造 RenderConfig。

用法（示例）
-----------
cfg = load_render_config("configs/defaults.yaml", ["render.with_color=false"])
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Iterable

import yaml

from ..imaging.base import RenderConfig


def read_yaml(path: str | Path) -> Dict[str, Any]:
    """读取一份配置 YAML（如 configs/defaults.yaml）；文件为空时视作没有任何配置项。"""
    text = Path(path).read_text(encoding="utf-8")
    tree = yaml.safe_load(text)
    if tree is None:
        return {}
    if not isinstance(tree, dict):
        raise TypeError(f"{path}：配置文件顶层必须是映射（render:/io: 等），实际为 {type(tree).__name__}")
    return tree


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """把 override 叠加到 base 上（例如 render: 段只改 scaling_factor），不修改任一输入。"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        current = merged.get(key)
        merged[key] = (
            deep_merge(current, value)
            if isinstance(current, dict) and isinstance(value, dict)
            else copy.deepcopy(value)
        )
    return merged


def _parse_scalar(s: str) -> Any:
    """"true"/"false" -> bool，"null"/"none" -> None，数字 -> int/float，其余原样。"""
    text = s.strip()
    low = text.lower()
    if low in ("true", "false"):
        return low == "true"
    if low in ("null", "none", "~"):
        return None
    for conv in (int, float):
        try:
            return conv(text)
        except ValueError:
            continue
    return text


def apply_overrides(cfg: Dict[str, Any], overrides: Iterable[str]) -> Dict[str, Any]:
    """应用覆盖项（形如 "a.b.c=value"），返回新 dict；中间层不存在时自动创建。"""
    out = copy.deepcopy(cfg)
    for item in overrides:
        if "=" not in item:
            raise ValueError(f"覆盖项应形如 key=value：{item!r}")
        key, raw = item.split("=", 1)
        parts = key.strip().split(".")
        cur = out
        for p in parts[:-1]:
            if not isinstance(cur.get(p), dict):
                cur[p] = {}
            cur = cur[p]
        cur[parts[-1]] = _parse_scalar(raw)
    return out


def load_config_tree(entry_yaml: str | Path, overrides: Iterable[str] = ()) -> Dict[str, Any]:
    """读取入口 YAML 并应用覆盖；顶层 `defaults` 列表（Hydra 专用）被忽略。"""
    cfg = read_yaml(entry_yaml)
    cfg.pop("defaults", None)
    return apply_overrides(cfg, overrides)


def load_render_config(entry_yaml: str | Path, overrides: Iterable[str] = ()) -> RenderConfig:
    """从 YAML 的 render.* 构造 RenderConfig。"""
    cfg = load_config_tree(entry_yaml, overrides)
    section = cfg.get("render") or {}
    if not isinstance(section, dict):
        raise TypeError(f"render 段应为 mapping，当前 {type(section)}")
    return RenderConfig.from_mapping(section)
