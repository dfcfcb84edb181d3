"""
Example: Lab recoloring usage.

Demonstrates how to use labtint for:
- One-shot recoloring with RecolorParams
- Presets and preset overrides
- Loading editor settings from a dict / JSON
- Interactive re-rendering with RecolorSession

Pass an image path to recolor your own file; otherwise a synthetic
brush stroke is generated.
"""

import logging
import sys
from pathlib import Path

import numpy as np

from labtint import (
    RasterBuffer,
    RecolorParams,
    RecolorSession,
    get_preset,
    load_image,
    params_from_dict,
    process,
    save_image,
)

# Configure logging to see sampler and pipeline statistics
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def generate_brush_stroke(width: int = 480, height: int = 160) -> RasterBuffer:
    """Generate a coral brush stroke on paper with soft alpha edges."""
    rng = np.random.default_rng(42)
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., :3] = (250, 247, 245)
    pixels[..., 3] = 255

    yy, xx = np.mgrid[0:height, 0:width]
    center = height / 2 + 18 * np.sin(xx / width * 2 * np.pi)
    dist = np.abs(yy - center) / (height * 0.28)
    stroke = dist < 1.0

    shade = np.clip(1.0 - 0.35 * dist + rng.normal(0.0, 0.03, dist.shape), 0.0, 1.0)
    pixels[stroke, 0] = (240 * shade[stroke]).astype(np.uint8)
    pixels[stroke, 1] = (130 * shade[stroke]).astype(np.uint8)
    pixels[stroke, 2] = (125 * shade[stroke]).astype(np.uint8)

    # Transparent margin on the left
    pixels[:, :12, 3] = 0
    return RasterBuffer.from_array(pixels)


def example_one_shot(image: RasterBuffer, out_dir: Path) -> None:
    """Recolor once with explicit parameters."""
    print("\n=== One-shot recolor ===")
    params = RecolorParams(target_color="#2E86DE", finish="glossy", vibrance=60)
    out = process(image, params)
    save_image(out, out_dir / "recolor_blue_glossy.png")
    print(f"Target {params.target_color} -> Lab {tuple(round(v, 2) for v in params.target_lab)}")


def example_presets(image: RasterBuffer, out_dir: Path) -> None:
    """Render every look for one target color."""
    print("\n=== Presets ===")
    for name in ("banner", "natural", "matte", "poster", "soft"):
        params = get_preset(name, target_color="#8E44AD")
        save_image(process(image, params), out_dir / f"preset_{name}.png")
        print(f"{name:>8}: finish={params.finish} vibrance={params.vibrance:.0f}")


def example_editor_settings(image: RasterBuffer, out_dir: Path) -> None:
    """Apply settings as the banner editor sends them (camelCase keys)."""
    print("\n=== Editor settings ===")
    settings = {
        "preset": "banner",
        "targetColor": "#27AE60",
        "whiteProtect": 96,
        "finishStrength": 40,
        "warm": -20,
    }
    params = params_from_dict(settings)
    save_image(process(image, params), out_dir / "editor_green.png")
    print(params)


def example_session(image: RasterBuffer) -> None:
    """Drag a slider: the analysis is computed once, repeats are cached."""
    print("\n=== Interactive session ===")
    session = RecolorSession(image)
    base = get_preset("banner", target_color="#E67E22")
    for depth in (0, 20, 40, 40, 60):
        session.update(base.replace(depth=depth))
    print(f"5 updates, {session.render_count} renders")


def main() -> None:
    image = load_image(sys.argv[1]) if len(sys.argv) > 1 else generate_brush_stroke()
    out_dir = Path("recolor_output")
    out_dir.mkdir(exist_ok=True)

    example_one_shot(image, out_dir)
    example_presets(image, out_dir)
    example_editor_settings(image, out_dir)
    example_session(image)
    print(f"\nWrote results to {out_dir.resolve()}")


if __name__ == "__main__":
    main()
