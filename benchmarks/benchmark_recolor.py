"""Benchmark recolor pipeline performance.

Measures:
- Source analysis (Lab conversion + dominant sampling)
- Per-stage render cost on a shared analysis
- End-to-end process() at common banner sizes
"""

import time

import numpy as np

from labtint import BANNER, NATURAL, RasterBuffer, analyze_source, process, render


def create_test_image(width: int, height: int) -> RasterBuffer:
    """Create a synthetic RGBA image for benchmarking."""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    return RasterBuffer.from_array(pixels)


def timed(fn, n_iterations: int) -> float:
    """Average wall time of ``fn`` in milliseconds."""
    fn()  # Warmup
    start = time.perf_counter()
    for _ in range(n_iterations):
        fn()
    return (time.perf_counter() - start) / n_iterations * 1000


def benchmark_size(width: int, height: int, n_iterations: int = 10) -> None:
    print(f"\n{'='*60}")
    print(f"Recolor Benchmark ({width}x{height}, {width * height / 1e6:.2f} MP)")
    print(f"{'='*60}")

    image = create_test_image(width, height)
    analysis = analyze_source(image)

    analyze_ms = timed(lambda: analyze_source(image), n_iterations)
    print(f"\nanalyze_source: {analyze_ms:.2f} ms")

    variants = {
        "remap + lift only": NATURAL,
        "+ matte": BANNER.replace(finish="matte", clarity=0),
        "+ glossy": BANNER.replace(clarity=0),
        "+ clarity (full banner)": BANNER,
    }
    for label, params in variants.items():
        ms = timed(lambda p=params: render(analysis, p), n_iterations)
        throughput = width * height / (ms / 1000) / 1e6
        print(f"  render {label:<26} {ms:8.2f} ms  ({throughput:.1f} MP/s)")

    total_ms = timed(lambda: process(image, BANNER), n_iterations)
    print(f"\nprocess (end-to-end): {total_ms:.2f} ms")


def main() -> None:
    for width, height in [(640, 200), (1500, 500), (3000, 1000), (3840, 2160)]:
        benchmark_size(width, height, n_iterations=5 if width >= 3000 else 10)


if __name__ == "__main__":
    main()
