# src/matimg/imaging/plot.py
# -*- coding: utf-8 -*-
"""一站式入口：放大 -> 极值 -> 渲染 -> 写出。"""

from __future__ import annotations

from pathlib import Path

from .base import RenderConfig, create_renderer, trace
from .matrix import PlotMatrix
from .scaling import scale_matrix
from ..utils.io import save_image


def plot_matrix(
    matrix: PlotMatrix,
    config: RenderConfig,
    out_path: Path | str,
    *,
    renderer: str = "rgba",
) -> Path:
    """渲染矩阵并写出图像，返回实际写出的路径；图像尺寸为 (cols*k+1, rows*k+1)。"""
    trace(config, 2, "[matimg::plot_matrix]")
    trace(config, 0, f"Generating image {out_path}")

    scaled = scale_matrix(matrix, config)
    img = create_renderer(renderer, config=config).render(scaled)
    return save_image(img, out_path)
