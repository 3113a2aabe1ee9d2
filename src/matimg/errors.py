# src/matimg/errors.py
# -*- coding: utf-8 -*-
"""
异常体系：所有错误都以异常抛给调用方，不在库内吞掉。

- MatimgError：根异常，便于调用方统一捕获；
- 同时继承对应的内建异常（ValueError / ZeroDivisionError / OSError / IndexError），
  以便只认识内建异常的上层代码也能正确处理。
"""

from __future__ import annotations


class MatimgError(Exception):
    """matimg 所有异常的基类。"""


class InvalidDimensionsError(MatimgError, ValueError):
    """矩阵不是 2D、不规则（各行长度不一致）或存在 0 维度。"""


class InvalidScalingFactorError(MatimgError, ValueError):
    """scaling_factor 不是 >= 1 的整数。"""


class NormalizationError(MatimgError, ZeroDivisionError):
    """需要按极值归一化 alpha，但对应极值为 0（或符号不符）。"""


class ImageWriteError(MatimgError, OSError):
    """像素缓冲写入图像文件失败（权限、路径、格式等）。"""


class IngestError(MatimgError, ValueError):
    """外部数据（cell 记录 / 文件）无法转换为矩阵。"""


class CellPositionError(IngestError, IndexError):
    """cell 记录的位置超出声明的矩阵范围。"""


__all__ = [
    "MatimgError",
    "InvalidDimensionsError",
    "InvalidScalingFactorError",
    "NormalizationError",
    "ImageWriteError",
    "IngestError",
    "CellPositionError",
]
