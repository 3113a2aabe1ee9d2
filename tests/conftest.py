# tests/conftest.py
# 共享 fixture：稀疏样例矩阵与常用配置。

from __future__ import annotations

import numpy as np
import pytest

from matimg import DenseMatrix, OptionalMatrix, RenderConfig

# (row, col) -> value
SPARSE_CELLS = {
    (1, 2): 1,
    (2, 5): 7,
    (4, 5): 10,
    (5, 5): 5,
    (5, 4): -15,
    (8, 9): -190,
}


@pytest.fixture
def sparse_optional():
    m = OptionalMatrix.empty(10, 10, dtype=np.int32)
    for (r, c), v in SPARSE_CELLS.items():
        m.set(r, c, v)
    return m


@pytest.fixture
def sparse_dense():
    arr = np.zeros((10, 10), dtype=np.int32)
    for (r, c), v in SPARSE_CELLS.items():
        arr[r, c] = v
    return DenseMatrix(arr)


@pytest.fixture
def full_config():
    return RenderConfig(
        verbosity=0,
        with_color=True,
        annotate_image=True,
        draw_diagonal=True,
        draw_boundaries=True,
        scaling_factor=10,
    )


@pytest.fixture
def plain_config():
    """无标注、不放大。"""
    return RenderConfig(annotate_image=False, scaling_factor=1)
