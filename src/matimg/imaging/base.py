# src/matimg/imaging/base.py
# -*- coding: utf-8 -*-
"""将 2D 数值矩阵渲染为 RGBA 图像的公共部件：渲染配置、固定调色板、诊断输出与渲染器注册表。"""

from __future__ import annotations

import inspect
import numbers
import sys
from dataclasses import dataclass, fields, replace as _dc_replace
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from ..errors import InvalidScalingFactorError

RGBA = Tuple[int, int, int, int]


# -------------------------
# 固定调色板
# -------------------------

@dataclass(frozen=True)
class Palette:
    """进程级固定调色板（只读）。"""
    red: RGBA = (255, 0, 0, 125)        # 对角线高亮
    blue: RGBA = (0, 0, 255, 255)       # 行/列分隔线
    white: RGBA = (255, 255, 255, 255)  # 缺失 / 零
    black: RGBA = (0, 0, 0, 255)        # flat 模式下的非零值；shaded 模式下负值的底色
    green: RGBA = (0, 255, 0, 255)
    shade_positive: Tuple[int, int, int] = (255, 0, 0)
    shade_negative: Tuple[int, int, int] = (0, 0, 0)


PALETTE = Palette()


# -------------------------
# 渲染配置
# -------------------------

@dataclass(frozen=True)
class RenderConfig:
    """
    渲染选项（构造后只读）：
    - verbosity: 诊断输出级别，只影响 stderr 输出，不影响结果
    - with_color: True 为 shaded 模式（符号决定色相，幅值决定 alpha）；False 为 flat 黑白模式
    - annotate_image: 标注总开关（对角线 / 分隔线）
    - draw_diagonal / draw_boundaries: 具体标注项
    - scaling_factor: 最近邻放大倍数（>=1 的整数）
    """
    verbosity: int = 0
    with_color: bool = True
    annotate_image: bool = True
    draw_diagonal: bool = True
    draw_boundaries: bool = True
    scaling_factor: int = 1

    def __post_init__(self) -> None:
        validate_scaling_factor(self.scaling_factor)
        if int(self.verbosity) < 0:
            raise ValueError(f"verbosity 必须 >= 0，当前 {self.verbosity!r}")
        # frozen dataclass：用 object.__setattr__ 做类型归一
        object.__setattr__(self, "scaling_factor", int(self.scaling_factor))
        object.__setattr__(self, "verbosity", int(self.verbosity))
        for flag in ("with_color", "annotate_image", "draw_diagonal", "draw_boundaries"):
            object.__setattr__(self, flag, bool(getattr(self, flag)))

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "RenderConfig":
        """从 dict / DictConfig 构造；未知键（如 renderer）被忽略。"""
        if not mapping:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {k: mapping[k] for k in mapping.keys() if k in known}
        return cls(**kwargs)

    def replace(self, **changes: Any) -> "RenderConfig":
        """返回修改了部分字段的新配置。"""
        return _dc_replace(self, **changes)


def validate_scaling_factor(value: Any) -> int:
    """scaling_factor 必须是 >= 1 的整数（bool 不算）；否则抛 InvalidScalingFactorError。"""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidScalingFactorError(
            f"scaling_factor 必须为正整数，当前 {value!r} ({type(value).__name__})"
        )
    if int(value) < 1:
        raise InvalidScalingFactorError(f"scaling_factor 必须 >= 1，当前 {value!r}")
    return int(value)


# -------------------------
# 诊断输出
# -------------------------

def trace(config: Any, level: int, message: str) -> None:
    """verbosity > level 时向 stderr 打印一行诊断；写失败时静默（诊断输出不影响主流程）。"""
    if int(getattr(config, "verbosity", 0)) <= level:
        return
    try:
        print(message, file=sys.stderr)
    except OSError:
        pass


# -------------------------
# 渲染器抽象与注册表
# -------------------------

class ImageRenderer:
    """渲染器接口：接收已放大的 PlotMatrix 与可选极值，产出 RGBA 图像。"""
    name: str = "base"

    def render(self, matrix, *, extrema=None):
        """返回 (cols+1) × (rows+1) 的 RGBA PIL 图像。"""
        raise NotImplementedError


_RENDERERS: Dict[str, Type[ImageRenderer]] = {}


def _renderer_key(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"渲染器名称必须是非空字符串，当前 {name!r}")
    return name.strip().lower()


def register_renderer(cls: Type[ImageRenderer]) -> Type[ImageRenderer]:
    """类装饰器：以 cls.name（小写）登记渲染器，供 render.renderer 配置项选用。"""
    key = _renderer_key(getattr(cls, "name", None))
    if key in _RENDERERS:
        raise ValueError(f"渲染器名称重复：{key}")
    _RENDERERS[key] = cls
    return cls


def get_renderer(name: str) -> Type[ImageRenderer]:
    """render.renderer 的取值 -> 渲染器类；名称不区分大小写。"""
    try:
        return _RENDERERS[_renderer_key(name)]
    except KeyError:
        known = sorted(_RENDERERS) or ["(none)"]
        raise KeyError(f"未知渲染器 {name!r}，可选：{', '.join(known)}") from None


def create_renderer(name: str, **kwargs) -> ImageRenderer:
    """实例化渲染器；CLI 传入的公共参数（如 config）只转交给构造函数声明过的那些。"""
    cls = get_renderer(name)
    params = inspect.signature(cls.__init__).parameters
    usable = {
        k: v for k, v in kwargs.items()
        if k in params and params[k].kind in (params[k].POSITIONAL_OR_KEYWORD, params[k].KEYWORD_ONLY)
    }
    return cls(**usable)
