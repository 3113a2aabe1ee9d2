# src/matimg/imaging/__init__.py
# -*- coding: utf-8 -*-
"""Imaging 模块初始化：导出基础接口并自动注册内置渲染器。"""

from __future__ import annotations

from .base import (
    PALETTE,
    Palette,
    RenderConfig,
    ImageRenderer,
    register_renderer,
    get_renderer,
    create_renderer,
    validate_scaling_factor,
)
from .matrix import CellKind, PlotMatrix, DenseMatrix, OptionalMatrix
from .scaling import scale_matrix
from .extrema import Extrema, compute_extrema

# 加载内置渲染器（触发 @register_renderer）
from .renderers.rgba import RgbaMatrixRenderer, render_buffer

from .plot import plot_matrix
