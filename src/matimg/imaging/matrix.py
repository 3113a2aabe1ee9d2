# src/matimg/imaging/matrix.py
# -*- coding: utf-8 -*-
"""
矩阵模型：稠密矩阵（0 即缺失）与可选矩阵（显式缺失标记）共享同一个分类接口。

约定
----
- 底层存储为 (values, mask) 两个同形 2D 数组：values 为数值，mask 为“存在”掩码；
- classify / classify_all 把每个单元分为 ABSENT / ZERO / POSITIVE / NEGATIVE；
- 浮点 NaN 一律视为缺失；
- 两种变体在极值计算上语义不同，由类属性 includes_zero_baseline 区分（见 extrema.py）。
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Tuple

import numpy as np

from ..errors import InvalidDimensionsError


class CellKind(enum.IntEnum):
    ABSENT = 0
    ZERO = 1
    POSITIVE = 2
    NEGATIVE = 3


# -------------------------
# 内部工具
# -------------------------

def _check_2d(arr: np.ndarray) -> np.ndarray:
    if arr.ndim != 2:
        raise InvalidDimensionsError(f"Expected a 2D matrix, got shape {arr.shape}")
    if arr.shape[0] < 1 or arr.shape[1] < 1:
        raise InvalidDimensionsError(f"矩阵行列数必须 >= 1，当前 {arr.shape}")
    return arr


def _numeric_2d(data: Any, dtype: Optional[Any] = None) -> np.ndarray:
    """转为数值 2D 数组（复制）；不规则嵌套列表视为维度错误。"""
    try:
        arr = np.array(data, dtype=dtype)
    except ValueError as e:
        raise InvalidDimensionsError(f"矩阵必须是规则的 2D 数据：{e}") from e
    _check_2d(arr)
    if arr.dtype == np.bool_:
        arr = arr.astype(np.uint8)
    if not np.issubdtype(arr.dtype, np.number):
        raise TypeError(f"矩阵元素必须为数值，当前 dtype={arr.dtype}")
    return arr


def _is_present(v: Any) -> bool:
    if v is None:
        return False
    return not (isinstance(v, float) and v != v)


_is_present_vec = np.frompyfunc(_is_present, 1, 1)


def _fits_storage(value: Any, dtype: np.dtype) -> bool:
    """value 能否原样写入 dtype 的数组（只对整数存储做检查）。"""
    if not np.issubdtype(dtype, np.integer):
        return True
    v = value.item() if isinstance(value, np.generic) else value
    if isinstance(v, float):
        if not v.is_integer():
            return False
        v = int(v)
    if not isinstance(v, int):
        return True
    info = np.iinfo(dtype)
    return info.min <= v <= info.max


def _nan_mask(values: np.ndarray) -> np.ndarray:
    if np.issubdtype(values.dtype, np.floating):
        return np.isnan(values)
    return np.zeros(values.shape, dtype=bool)


# -------------------------
# 分类接口
# -------------------------

class PlotMatrix:
    """可渲染矩阵的公共接口；子类只决定“缺失”的表示方式与极值语义。"""

    includes_zero_baseline: bool = False

    def __init__(self, values: np.ndarray, mask: np.ndarray) -> None:
        self._values = values
        self._mask = mask

    @classmethod
    def _from_arrays(cls, values: np.ndarray, mask: np.ndarray):
        obj = cls.__new__(cls)
        PlotMatrix.__init__(obj, values, mask)
        return obj

    # ---- 形状 ----
    @property
    def shape(self) -> Tuple[int, int]:
        return tuple(self._values.shape)  # type: ignore[return-value]

    @property
    def rows(self) -> int:
        return int(self._values.shape[0])

    @property
    def cols(self) -> int:
        return int(self._values.shape[1])

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    # ---- 取值 ----
    def values(self) -> np.ndarray:
        """数值视图的副本，缺失位置填 0。"""
        return np.where(self._mask, self._values, self._values.dtype.type(0))

    def present_mask(self) -> np.ndarray:
        return self._mask.copy()

    def classify(self, row: int, col: int) -> Tuple[CellKind, Any]:
        """单元分类；返回 (kind, 值)，缺失时值为 None。"""
        if not self._mask[row, col]:
            return CellKind.ABSENT, None
        v = self._values[row, col].item()
        if v > 0:
            return CellKind.POSITIVE, v
        if v < 0:
            return CellKind.NEGATIVE, v
        return CellKind.ZERO, v

    def classify_all(self) -> np.ndarray:
        """整张矩阵的分类码（int8，取值见 CellKind）。"""
        vals = self._values
        kinds = np.full(vals.shape, int(CellKind.ZERO), dtype=np.int8)
        with np.errstate(invalid="ignore"):
            kinds[vals > 0] = int(CellKind.POSITIVE)
            kinds[vals < 0] = int(CellKind.NEGATIVE)
        kinds[~self._mask] = int(CellKind.ABSENT)
        return kinds

    # ---- 变换 ----
    def scaled(self, factor: int):
        """最近邻放大：每个单元复制为 factor×factor 的块（按值复制，返回新对象）。"""
        f = int(factor)
        values = np.repeat(np.repeat(self._values, f, axis=0), f, axis=1)
        mask = np.repeat(np.repeat(self._mask, f, axis=0), f, axis=1)
        return type(self)._from_arrays(values, mask)

    def copy(self):
        return type(self)._from_arrays(self._values.copy(), self._mask.copy())

    # ---- 比较 ----
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlotMatrix) or type(other) is not type(self):
            return NotImplemented
        if self.shape != other.shape:
            return False
        if not np.array_equal(self._mask, other._mask):
            return False
        return bool(np.array_equal(self._values[self._mask], other._values[other._mask]))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        present = int(self._mask.sum())
        return f"{type(self).__name__}(shape={self.shape}, dtype={self.dtype}, present={present})"


class DenseMatrix(PlotMatrix):
    """稠密矩阵：0 表示“无数据”；极值以 0 为基线（见 extrema.py）。"""

    includes_zero_baseline = True

    def __init__(self, data: Any, dtype: Optional[Any] = None) -> None:
        values = _numeric_2d(data, dtype=dtype)
        super().__init__(values, ~_nan_mask(values))


class OptionalMatrix(PlotMatrix):
    """
    可选矩阵：缺失用显式标记表示，与 0 区分。

    构造方式：
    - 含 None 的嵌套列表：None（或 NaN）为缺失；
    - 数值数组 + 布尔 mask（True=存在）；
    - 浮点数组且不传 mask：NaN 为缺失。
    """

    def __init__(self, values: Any, mask: Optional[Any] = None, dtype: Optional[Any] = None) -> None:
        if mask is None and not (isinstance(values, np.ndarray) and values.dtype != object):
            raw = np.array(values, dtype=object)
            _check_2d(raw)
            present = _is_present_vec(raw).astype(bool)
            filled = np.where(present, raw, 0)
            arr = _numeric_2d(filled.tolist(), dtype=dtype)
        else:
            arr = _numeric_2d(values, dtype=dtype)
            if mask is None:
                present = np.ones(arr.shape, dtype=bool)
            else:
                present = np.array(mask, dtype=bool)
                if present.shape != arr.shape:
                    raise InvalidDimensionsError(
                        f"mask 形状 {present.shape} 与数值形状 {arr.shape} 不一致"
                    )
        present = present & ~_nan_mask(arr)
        super().__init__(arr, present)

    @classmethod
    def empty(cls, rows: int, cols: int, dtype: Any = np.int64) -> "OptionalMatrix":
        """全缺失矩阵。"""
        rows, cols = int(rows), int(cols)
        if rows < 1 or cols < 1:
            raise InvalidDimensionsError(f"矩阵行列数必须 >= 1，当前 ({rows}, {cols})")
        return cls._from_arrays(
            np.zeros((rows, cols), dtype=dtype),
            np.zeros((rows, cols), dtype=bool),
        )

    def set(self, row: int, col: int, value: Any) -> None:
        """在 (row, col) 放置一个值；value 为 None 表示置为缺失。"""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"({row}, {col}) 超出矩阵范围 {self.shape}")
        if not _is_present(value):
            self._mask[row, col] = False
            return
        if not _fits_storage(value, self._values.dtype):
            # 整数存储放不下的值：整体提升为 float64，不截断
            self._values = self._values.astype(np.float64)
        self._values[row, col] = value
        self._mask[row, col] = True

    def to_list(self) -> list:
        """转为含 None 的嵌套列表。"""
        out = []
        for r in range(self.rows):
            out.append([
                self._values[r, c].item() if self._mask[r, c] else None
                for c in range(self.cols)
            ])
        return out
