# src/matimg/imaging/extrema.py
# -*- coding: utf-8 -*-
"""
极值 (min, max)：用于把幅值归一化为 alpha 通道。

两种矩阵语义不同（刻意保留）：
- OptionalMatrix：只看存在的单元；一个都没有时返回 (0, 0)；
- DenseMatrix：min/max 都从 0 起算，再与所有单元比较，因此结果总是包住 0。
"""

from __future__ import annotations

from typing import Any, NamedTuple

import numpy as np

from .matrix import PlotMatrix


class Extrema(NamedTuple):
    min: Any
    max: Any


def compute_extrema(matrix: PlotMatrix) -> Extrema:
    """计算渲染所需的 (min, max)，返回 Python 标量（整数矩阵保持 int）。"""
    zero = matrix.dtype.type(0)
    present = matrix.present_mask()
    vals = matrix.values()[present]

    if vals.size == 0:
        return Extrema(zero.item(), zero.item())

    lo = vals.min()
    hi = vals.max()
    if matrix.includes_zero_baseline:
        lo = min(lo, zero)
        hi = max(hi, zero)
    return Extrema(np.asarray(lo).item(), np.asarray(hi).item())
