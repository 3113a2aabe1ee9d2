# src/matimg/__init__.py
# -*- coding: utf-8 -*-
"""
matimg: 把 2D 数值矩阵（稠密 / 稀疏、有符号 / 无符号）渲染为 RGBA 图像，便于肉眼检查稀疏结构。

定位
----
最近邻整数倍放大 + 按符号与幅值着色（alpha 相对极值归一化）+ 可选标注（对角线、行列分隔线）。

快速上手
--------
>>> import matimg as M
>>> m = M.OptionalMatrix([[None, 1], [-3, None]])
>>> cfg = M.RenderConfig(scaling_factor=10)
>>> M.plot_matrix(m, cfg, "outputs/m.png")
"""

from __future__ import annotations

__version__ = "0.1.0"

# -------------------------
# errors：异常体系
# -------------------------
from .errors import (
    MatimgError,
    InvalidDimensionsError,
    InvalidScalingFactorError,
    NormalizationError,
    ImageWriteError,
    IngestError,
    CellPositionError,
)

# -------------------------
# imaging：配置 / 矩阵 / 放大 / 极值 / 渲染
# -------------------------
from .imaging import (
    PALETTE,
    Palette,
    RenderConfig,
    ImageRenderer,
    register_renderer,
    get_renderer,
    create_renderer,
    CellKind,
    PlotMatrix,
    DenseMatrix,
    OptionalMatrix,
    scale_matrix,
    Extrema,
    compute_extrema,
    RgbaMatrixRenderer,
    render_buffer,
    plot_matrix,
)

# -------------------------
# data：外部数据接入
# -------------------------
from .data import (
    CellRecord,
    matrix_from_cells,
    load_cells_json,
    load_dense_npy,
    load_matrix,
)

# -------------------------
# utils：I/O
# -------------------------
from .utils.io import save_image, save_json, load_json

__all__ = [
    "__version__",
    # errors
    "MatimgError", "InvalidDimensionsError", "InvalidScalingFactorError",
    "NormalizationError", "ImageWriteError", "IngestError", "CellPositionError",
    # imaging
    "PALETTE", "Palette", "RenderConfig",
    "ImageRenderer", "register_renderer", "get_renderer", "create_renderer",
    "CellKind", "PlotMatrix", "DenseMatrix", "OptionalMatrix",
    "scale_matrix", "Extrema", "compute_extrema",
    "RgbaMatrixRenderer", "render_buffer", "plot_matrix",
    # data
    "CellRecord", "matrix_from_cells", "load_cells_json", "load_dense_npy", "load_matrix",
    # utils
    "save_image", "save_json", "load_json",
]
