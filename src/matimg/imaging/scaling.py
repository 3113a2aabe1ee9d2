# src/matimg/imaging/scaling.py
# -*- coding: utf-8 -*-
"""最近邻整数倍放大：目标单元 (i, j) 取源单元 (i // k, j // k)，不插值、不平均。"""

from __future__ import annotations

from .base import RenderConfig, trace, validate_scaling_factor
from .matrix import PlotMatrix


def scale_matrix(matrix: PlotMatrix, config: RenderConfig) -> PlotMatrix:
    """
    按 config.scaling_factor 放大矩阵，返回同类型的新矩阵（形状 rows*k × cols*k）。
    - k == 1：返回按值相等的副本；
    - k 非法（0 / 负数 / 非整数）：在分配任何内存前抛 InvalidScalingFactorError。
    """
    k = validate_scaling_factor(getattr(config, "scaling_factor", None))
    trace(config, 2, "[matimg::scale_matrix]")

    if not isinstance(matrix, PlotMatrix):
        raise TypeError(f"scale_matrix 需要 PlotMatrix，当前 {type(matrix).__name__}")

    if k == 1:
        return matrix.copy()

    scaled = matrix.scaled(k)
    trace(config, 1, f"scaled {matrix.rows}x{matrix.cols} -> {scaled.rows}x{scaled.cols}")
    return scaled
