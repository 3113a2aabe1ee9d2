# src/matimg/imaging/renderers/rgba.py
# -*- coding: utf-8 -*-
"""
RGBA 矩阵渲染器：把 (rows, cols) 矩阵渲染为 (cols+1) × (rows+1) 的 RGBA 图像。

像素 (x, y) 的决策顺序（像素之间互不影响）：
1. annotate_image 打开时：
   a. draw_diagonal 且 x == y                         -> RED
   b. (draw_boundaries 且 x % k == 0) 或 y % k == 0   -> BLUE
2. 最后一行/列（x == cols 或 y == rows）只承载标注，未被标注占用则保持透明；
3. 其余像素按矩阵单元 [y][x] 的分类着色：
   - 缺失 / 0                 -> WHITE
   - flat 模式（with_color=False）非零 -> BLACK
   - shaded 模式：正值 RED，alpha = ceil(v / max * 255)；负值 BLACK，alpha = ceil(|v| / |min| * 255)
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from PIL import Image

from ..base import (
    PALETTE,
    ImageRenderer,
    RenderConfig,
    register_renderer,
    trace,
    validate_scaling_factor,
)
from ..extrema import Extrema, compute_extrema
from ..matrix import CellKind, PlotMatrix
from ...errors import NormalizationError


def _alpha(magnitude: np.ndarray, reference: float) -> np.ndarray:
    """幅值 -> alpha：float64 除法后向上取整，裁剪到 [0, 255]。"""
    a = np.ceil((magnitude / float(reference)) * 255.0)
    return np.clip(a, 0, 255).astype(np.uint8)


def render_buffer(
    matrix: PlotMatrix,
    config: RenderConfig,
    extrema: Optional[Extrema] = None,
) -> np.ndarray:
    """填充像素缓冲，返回 uint8 数组 (rows+1, cols+1, 4)；未写入的像素为 (0, 0, 0, 0)。"""
    if not isinstance(matrix, PlotMatrix):
        raise TypeError(f"render_buffer 需要 PlotMatrix，当前 {type(matrix).__name__}")
    k = validate_scaling_factor(config.scaling_factor)

    trace(config, 2, "[matimg::render_buffer]")
    trace(config, 1, f"scaling factor: {k}")

    rows, cols = matrix.rows, matrix.cols
    if extrema is None:
        extrema = compute_extrema(matrix)
    lo, hi = extrema

    buf = np.zeros((rows + 1, cols + 1, 4), dtype=np.uint8)
    ys, xs = np.mgrid[0 : rows + 1, 0 : cols + 1]
    done = np.zeros((rows + 1, cols + 1), dtype=bool)

    # ---- 标注 ----
    if config.annotate_image:
        if config.draw_diagonal:
            diag = xs == ys
            buf[diag] = PALETTE.red
            done |= diag

        # 分隔线条件按 `(draw_boundaries && x%k==0) || y%k==0` 求值：
        # draw_boundaries 只约束竖线，横线在 annotate_image 打开时总会画出。
        boundary = ys % k == 0
        if config.draw_boundaries:
            boundary = boundary | (xs % k == 0)
        boundary &= ~done
        buf[boundary] = PALETTE.blue
        done |= boundary

    # 边框行/列没有对应的矩阵单元
    done |= (xs == cols) | (ys == rows)
    cell = ~done

    # ---- 数值着色 ----
    kinds = np.full((rows + 1, cols + 1), int(CellKind.ABSENT), dtype=np.int8)
    kinds[:rows, :cols] = matrix.classify_all()
    vals = np.zeros((rows + 1, cols + 1), dtype=np.float64)
    vals[:rows, :cols] = matrix.values().astype(np.float64)

    blank = cell & ((kinds == CellKind.ABSENT) | (kinds == CellKind.ZERO))
    pos = cell & (kinds == CellKind.POSITIVE)
    neg = cell & (kinds == CellKind.NEGATIVE)

    buf[blank] = PALETTE.white

    if not config.with_color:
        buf[pos | neg] = PALETTE.black
        return buf

    if not (np.isfinite(vals[pos | neg]).all() and np.isfinite([hi, lo]).all()):
        raise NormalizationError(f"存在非有限值（min={lo!r}, max={hi!r}），无法归一化 alpha")

    if pos.any():
        if not hi > 0:
            raise NormalizationError(f"存在正值但 max={hi!r}，无法归一化 alpha")
        buf[pos, :3] = PALETTE.shade_positive
        buf[pos, 3] = _alpha(vals[pos], hi)

    if neg.any():
        if not lo < 0:
            raise NormalizationError(f"存在负值但 min={lo!r}，无法归一化 alpha")
        buf[neg, :3] = PALETTE.shade_negative
        buf[neg, 3] = _alpha(np.abs(vals[neg]), abs(lo))

    return buf


@register_renderer
class RgbaMatrixRenderer(ImageRenderer):
    """
    默认渲染器（name="rgba"）。

    参数：
    - config: RenderConfig；为 None 时使用默认配置
    - 其余关键字参数（verbosity / with_color / ...）非 None 时覆盖 config 中的同名字段
    """
    name: str = "rgba"

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        *,
        verbosity: Optional[int] = None,
        with_color: Optional[bool] = None,
        annotate_image: Optional[bool] = None,
        draw_diagonal: Optional[bool] = None,
        draw_boundaries: Optional[bool] = None,
        scaling_factor: Optional[int] = None,
    ) -> None:
        base = config if config is not None else RenderConfig()
        changes = {
            k: v
            for k, v in dict(
                verbosity=verbosity,
                with_color=with_color,
                annotate_image=annotate_image,
                draw_diagonal=draw_diagonal,
                draw_boundaries=draw_boundaries,
                scaling_factor=scaling_factor,
            ).items()
            if v is not None
        }
        self.config = base.replace(**changes) if changes else base

    def render(self, matrix: PlotMatrix, *, extrema: Optional[Extrema] = None) -> Image.Image:
        """渲染为 RGBA 图像，尺寸 (cols+1, rows+1)。"""
        buf = render_buffer(matrix, self.config, extrema)
        return Image.fromarray(buf)
