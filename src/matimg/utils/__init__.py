# src/matimg/utils/__init__.py
# -*- coding: utf-8 -*-
"""工具模块：目录、图像与 JSON I/O。"""

from .io import (
    ensure_dir,
    save_image,
    save_json,
    load_json,
)

__all__ = [
    "ensure_dir",
    "save_image",
    "save_json",
    "load_json",
]
