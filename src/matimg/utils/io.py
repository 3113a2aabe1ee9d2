# src/matimg/utils/io.py
# -*- coding: utf-8 -*-
"""
I/O 与路径工具（仅做文件与目录层面的职责）：
- 目录创建
- 图像写出（PNG 等无损格式），失败统一转为 ImageWriteError
- 元数据 JSON（*.meta.json）与 cell 文档的读写
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from PIL import Image

from ..errors import ImageWriteError

DEFAULT_IMAGE_SUFFIX = ".png"


# -------------------------
# 基础工具
# -------------------------

def ensure_dir(p: Path) -> Path:
    """创建输出目录（含父目录）；已存在不报错。"""
    p.mkdir(parents=True, exist_ok=True)
    return p


# -------------------------
# 图像写出
# -------------------------

def save_image(image: Image.Image, out_path: Path | str) -> Path:
    """
    保存 PIL 图像；无后缀时补 .png。
    任何写出失败（权限、路径、格式不支持）都抛 ImageWriteError，不做重试。
    """
    out_path = Path(out_path)
    if not out_path.suffix:
        out_path = out_path.with_suffix(DEFAULT_IMAGE_SUFFIX)
    try:
        ensure_dir(out_path.parent)
        image.save(out_path)
    except (OSError, ValueError, KeyError) as e:
        raise ImageWriteError(f"无法写出图像 {out_path}：{e}") from e
    return out_path


# -------------------------
# JSON 读写
# -------------------------

def save_json(obj: Any, out_path: Path | str, indent: int = 2) -> Path:
    """写出渲染元数据等 JSON 文档；UTF-8，中文不转义。"""
    out_path = Path(out_path)
    ensure_dir(out_path.parent)
    out_path.write_text(json.dumps(obj, ensure_ascii=False, indent=indent) + "\n", encoding="utf-8")
    return out_path


def load_json(path: str | Path) -> Any:
    """读取 cell 文档等 JSON 文件；解析失败时抛 json.JSONDecodeError。"""
    return json.loads(Path(path).read_text(encoding="utf-8"))
