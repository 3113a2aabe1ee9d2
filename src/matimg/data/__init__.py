# src/matimg/data/__init__.py
# -*- coding: utf-8 -*-
"""数据接入：cell 记录 / 文件 -> 矩阵。"""

from .ingest import (
    CellRecord,
    matrix_from_cells,
    load_cells_json,
    load_dense_npy,
    load_matrix,
)

__all__ = [
    "CellRecord",
    "matrix_from_cells",
    "load_cells_json",
    "load_dense_npy",
    "load_matrix",
]
