# src/matimg/data/ingest.py
# -*- coding: utf-8 -*-
"""
数据接入：把外部数据转换为可渲染矩阵。

- cell 记录：(x, y, value, color) 序列 + 声明的 (nrow, ncol) -> OptionalMatrix；
  x 为列号、y 为行号，未出现的位置为缺失；同一位置后到的记录覆盖先到的。
  color 只随记录携带，渲染时不使用（调色板固定）。
- 文件：.npy -> DenseMatrix；.json（cell 文档）-> OptionalMatrix。

JSON cell 文档格式
------------------
{"nrow": 10, "ncol": 10,
 "cells": [{"x": 2, "y": 1, "value": 1, "color": [0, 0, 0, 0]}, ...]}
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from ..errors import CellPositionError, IngestError, InvalidDimensionsError
from ..imaging.matrix import DenseMatrix, OptionalMatrix, PlotMatrix
from ..utils.io import load_json


@dataclass(frozen=True)
class CellRecord:
    """一条 cell 记录。"""
    x: int
    y: int
    value: Any
    color: Tuple[int, int, int, int] = (0, 0, 0, 0)

    @classmethod
    def from_mapping(cls, item: Mapping[str, Any]) -> "CellRecord":
        try:
            x, y, value = item["x"], item["y"], item["value"]
        except KeyError as e:
            raise IngestError(f"cell 记录缺少字段 {e.args[0]!r}：{dict(item)!r}") from e
        color = item.get("color", (0, 0, 0, 0))
        if not isinstance(color, (list, tuple)):
            raise IngestError(f"color 应为列表或元组，当前 {color!r}")
        return cls(x=x, y=y, value=value, color=tuple(color))


def _check_dim(name: str, v: Any) -> int:
    if isinstance(v, bool) or not isinstance(v, numbers.Integral):
        raise InvalidDimensionsError(f"{name} 必须为整数，当前 {v!r}")
    if int(v) < 1:
        raise InvalidDimensionsError(f"{name} 必须 >= 1，当前 {v!r}")
    return int(v)


def _check_color(color: Tuple[Any, ...]) -> None:
    if len(color) != 4:
        raise IngestError(f"color 应为 (r, g, b, a) 四元组，当前 {color!r}")
    for c in color:
        if isinstance(c, bool) or not isinstance(c, numbers.Integral) or not 0 <= int(c) <= 255:
            raise IngestError(f"color 分量必须为 0..255 的整数，当前 {color!r}")


def _check_value(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise IngestError(f"cell 值必须为数值，当前 {value!r}")


def matrix_from_cells(
    cells: Iterable[CellRecord | Mapping[str, Any]],
    nrow: int,
    ncol: int,
    dtype: Optional[Any] = None,
) -> OptionalMatrix:
    """
    按记录构造 OptionalMatrix（形状 nrow × ncol）。
    - nrow / ncol 必须 >= 1，否则 InvalidDimensionsError；
    - 位置越界抛 CellPositionError；
    - dtype 缺省时：任一值为浮点则 float64，否则 int64。
    """
    nrow = _check_dim("nrow", nrow)
    ncol = _check_dim("ncol", ncol)

    records: List[CellRecord] = [
        c if isinstance(c, CellRecord) else CellRecord.from_mapping(c) for c in cells
    ]
    for rec in records:
        for name, pos, limit in (("x", rec.x, ncol), ("y", rec.y, nrow)):
            if isinstance(pos, bool) or not isinstance(pos, numbers.Integral):
                raise CellPositionError(f"{name} 必须为整数，当前 {pos!r}")
            if not 0 <= int(pos) < limit:
                raise CellPositionError(
                    f"cell ({rec.x}, {rec.y}) 超出声明范围 nrow={nrow}, ncol={ncol}"
                )
        _check_value(rec.value)
        _check_color(rec.color)

    if dtype is None:
        is_float = any(isinstance(r.value, (float, np.floating)) for r in records)
        dtype = np.float64 if is_float else np.int64

    matrix = OptionalMatrix.empty(nrow, ncol, dtype=dtype)
    for rec in records:
        matrix.set(int(rec.y), int(rec.x), rec.value)
    return matrix


# -------------------------
# 文件读取
# -------------------------

def load_cells_json(path: Path | str) -> OptionalMatrix:
    """读取 JSON cell 文档。"""
    doc = load_json(path)
    if not isinstance(doc, dict):
        raise IngestError(f"JSON 顶层应为对象，但 {path} 得到 {type(doc).__name__}")
    for key in ("nrow", "ncol", "cells"):
        if key not in doc:
            raise IngestError(f"{path} 缺少字段 {key!r}")
    if not isinstance(doc["cells"], list):
        raise IngestError(f"{path} 的 cells 应为列表")
    return matrix_from_cells(doc["cells"], doc["nrow"], doc["ncol"])


def load_dense_npy(path: Path | str) -> DenseMatrix:
    """读取 .npy 为稠密矩阵（0 视为缺失）。"""
    arr = np.load(Path(path), allow_pickle=False)
    return DenseMatrix(arr)


def load_matrix(path: Path | str) -> PlotMatrix:
    """按后缀分派：.npy -> DenseMatrix；.json -> OptionalMatrix。"""
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".npy":
        return load_dense_npy(p)
    if suffix == ".json":
        return load_cells_json(p)
    raise IngestError(f"不支持的输入格式：{p}（支持 .npy / .json）")
