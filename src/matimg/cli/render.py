# src/matimg/cli/render.py
# -*- coding: utf-8 -*-
"""
渲染入口（Hydra 版）

功能
----
- 从根目录 configs/ 读取 render.* 与 io.* 配置（可用 Hydra CLI 覆盖）；
- 若提供 io.input，则渲染单个矩阵文件（.npy 稠密 / .json cell 文档）；
- 否则若提供 io.inputs_glob，则批量渲染到 <out_dir>/<renderer>/<stem>.png；
- io.write_meta=true 时在图像旁写 <stem>.meta.json（形状、极值、配置）；
- 批量输入中同名不同后缀（a.npy / a.json）时输出改为 <stem>_<后缀>.png。

用法示例
--------
# 单次导出
python -m matimg.cli.render io.input=data/A.npy io.output=images/A.png \
                            render.scaling_factor=20

# 批量导出，flat 黑白模式、不画标注
python -m matimg.cli.render io.inputs_glob='data/*.json' \
                            render.with_color=false render.annotate_image=false
"""

from __future__ import annotations

import glob
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

import hydra
from hydra import utils as hyutils
from omegaconf import DictConfig
from tqdm import tqdm

from ..data.ingest import load_matrix
from ..imaging.base import RenderConfig, create_renderer, trace
from ..imaging.extrema import compute_extrema
from ..imaging.scaling import scale_matrix
from ..utils.io import save_image, save_json


# ---------------- 单个矩阵 ----------------
def meta_path_for(image_path: Path) -> Path:
    """图像旁的元数据文件：<stem>.meta.json。"""
    image_path = Path(image_path)
    return image_path.with_name(f"{image_path.stem}.meta.json")


def _same_file(a: Path, b: Path) -> bool:
    return Path(a).resolve() == Path(b).resolve()


def render_one(
    in_path: Path,
    out_path: Path,
    config: RenderConfig,
    renderer: str = "rgba",
    write_meta: bool = True,
) -> Path:
    """读取 -> 放大 -> 极值 -> 渲染 -> 写出；返回图像路径。"""
    if _same_file(out_path, in_path):
        raise ValueError(f"输出路径与输入文件相同：{out_path}")
    trace(config, 0, f"Generating image {out_path}")
    matrix = load_matrix(in_path)
    scaled = scale_matrix(matrix, config)
    extrema = compute_extrema(scaled)

    img = create_renderer(renderer, config=config).render(scaled, extrema=extrema)
    saved = save_image(img, out_path)

    if write_meta:
        meta_path = meta_path_for(saved)
        if _same_file(meta_path, in_path):
            raise ValueError(f"元数据路径与输入文件相同：{meta_path}")
        save_json(
            {
                "input": str(in_path),
                "renderer": renderer,
                "shape": list(matrix.shape),
                "scaled_shape": list(scaled.shape),
                "image_size": list(img.size),
                "extrema": {"min": extrema.min, "max": extrema.max},
                "config": asdict(config),
            },
            meta_path,
        )
    return saved


# ---------------- 批量 ----------------
def _collect_inputs(pattern: str) -> List[Path]:
    return sorted(Path(p) for p in glob.glob(pattern) if Path(p).is_file())


def _output_names(inputs: List[Path]) -> List[str]:
    """输出文件名：默认 <stem>.png；stem 重复时加上后缀，<stem>_<ext>.png。"""
    counts: Dict[str, int] = {}
    for p in inputs:
        counts[p.stem] = counts.get(p.stem, 0) + 1

    names = []
    for p in inputs:
        if counts[p.stem] > 1:
            names.append(f"{p.stem}_{p.suffix.lstrip('.').lower()}.png")
        else:
            names.append(f"{p.stem}.png")

    dup = sorted(n for n in set(names) if names.count(n) > 1)
    if dup:
        raise ValueError(f"批量输入产生重名输出：{dup}")
    return names


def run_batch(
    inputs: List[Path],
    out_dir_root: Path,
    config: RenderConfig,
    renderer: str = "rgba",
    force_regenerate: bool = False,
    write_meta: bool = True,
) -> List[Path]:
    """批量渲染；已存在的输出默认跳过（force_regenerate=True 时覆盖）。"""
    out_dir = out_dir_root / renderer.lower()
    print(f"[Render] Renderer={renderer}  -> Out={out_dir}")
    print(f"[Render] Inputs: {len(inputs)}")

    names = _output_names(inputs)
    renamed = [n for p, n in zip(inputs, names) if n != f"{p.stem}.png"]
    if renamed:
        print(f"[Render][WARN] 输入文件名重复，改用带后缀的输出名：{renamed}")

    written: List[Path] = []
    skipped = 0
    for in_path, name in tqdm(list(zip(inputs, names)), desc="Render", ncols=100):
        out_path = out_dir / name
        if out_path.exists() and not force_regenerate:
            skipped += 1
            continue
        written.append(render_one(in_path, out_path, config, renderer, write_meta))

    if skipped:
        print(f"[Render] 跳过 {skipped} 个已存在的图像（io.force_regenerate=true 可覆盖）")
    return written


def _to_abs(p: Optional[str]) -> Optional[Path]:
    """将（可能是相对的）配置路径，转换为 *原始工作目录* 下的绝对路径。"""
    if p is None:
        return None
    pth = Path(p)
    if pth.is_absolute():
        return pth
    return Path(hyutils.get_original_cwd()) / pth


# ---------------- 主流程（Hydra） ----------------
@hydra.main(config_path="../../../configs", config_name="defaults", version_base="1.3")
def main(cfg: DictConfig) -> None:
    rcfg = cfg.get("render", {})
    iocfg = cfg.get("io", {})

    config = RenderConfig.from_mapping(rcfg)
    renderer = str(rcfg.get("renderer", "rgba"))
    out_dir = _to_abs(iocfg.get("out_dir", "outputs/images"))
    force_regenerate = bool(iocfg.get("force_regenerate", False))
    write_meta = bool(iocfg.get("write_meta", True))

    # 优先：单文件模式
    single = _to_abs(iocfg.get("input"))
    if single is not None:
        output = _to_abs(iocfg.get("output")) or (out_dir / f"{single.stem}.png")
        print(f"[Render] Loading: {single}")
        saved = render_one(single, output, config, renderer, write_meta)
        print(f"[Render] Saved -> {saved}")
        print("[Render] Done (single).")
        return

    pattern = iocfg.get("inputs_glob")
    if not pattern:
        raise ValueError(
            "未检测到输入：请设置 io.input=<file.npy|file.json> 或 io.inputs_glob=<pattern>。"
        )
    inputs = _collect_inputs(str(_to_abs(str(pattern))))
    if not inputs:
        raise FileNotFoundError(f"io.inputs_glob 没有匹配到任何文件：{pattern}")

    written = run_batch(inputs, out_dir, config, renderer, force_regenerate, write_meta)
    print(f"\n[Render] Done (batch). Written {len(written)} image(s).")


if __name__ == "__main__":
    main()
