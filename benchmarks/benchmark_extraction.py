"""
Benchmark feature extraction, reduction and filter rendering.

Tests each stage at various volume sizes.
"""

import logging
import time

import numpy as np

from volbrush import DatasetReducer, FeatureConfig, FeatureExtractor, FilterConfig, InteractiveFilter, ScalarGrid

# Suppress logging for cleaner output
logging.getLogger("volbrush").setLevel(logging.WARNING)


def generate_volume(size: int) -> ScalarGrid:
    """Generate a smooth uint16 test volume of size^3 cells."""
    rng = np.random.default_rng(42)
    z, y, x = np.meshgrid(*(np.linspace(-1.0, 1.0, size),) * 3, indexing="ij")
    field = np.exp(-4.0 * (x**2 + y**2 + z**2)) * 3000.0
    field += rng.normal(0.0, 50.0, size=field.shape)
    return ScalarGrid(np.clip(field, 0, 65535).astype(np.uint16))


def time_ms(func, iterations: int, warmup: int = 3):
    for _ in range(warmup):
        func()

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func()
        end = time.perf_counter()
        times.append((end - start) * 1000)  # Convert to ms
    return np.mean(times), np.std(times)


def benchmark_extraction(size: int = 128, iterations: int = 10):
    """Benchmark per-cell feature extraction."""
    n = size**3
    print("\n" + "=" * 80)
    print(f"FEATURE EXTRACTION ({size}^3 = {n:,} cells, {iterations} iterations)")
    print("=" * 80)

    grid = generate_volume(size)
    for label, config in [
        ("all features", FeatureConfig()),
        ("no std-dev", FeatureConfig(include_std_dev=False)),
        ("reused buffers", FeatureConfig(reuse_buffers=True)),
    ]:
        extractor = FeatureExtractor(config)
        avg_time, std_time = time_ms(lambda: extractor(grid), iterations)
        print(f"{label:<14} {avg_time:8.3f} ms +/- {std_time:.3f} ms  "
              f"({n / (avg_time / 1000) / 1e6:.1f}M cells/sec)")


def benchmark_reduction(size: int = 128, iterations: int = 20):
    """Benchmark fractional reduction at several drop ratios."""
    print("\n" + "=" * 80)
    print(f"REDUCTION ({size}^3 records, {iterations} iterations)")
    print("=" * 80)

    dataset = FeatureExtractor()(generate_volume(size)).dataset
    for ratio in [0.0, 0.5, 0.9, 0.99]:
        reducer = DatasetReducer(ratio)
        avg_time, std_time = time_ms(lambda: reducer(dataset), iterations)
        kept = len(reducer(dataset))
        print(f"drop={ratio:<5} {avg_time:8.3f} ms +/- {std_time:.3f} ms  kept {kept:,}")


def benchmark_render(size: int = 64, drop_ratio: float = 0.9, iterations: int = 10):
    """Benchmark a full re-render of the visible and pick surfaces."""
    dataset = DatasetReducer(drop_ratio)(FeatureExtractor()(generate_volume(size)).dataset)
    print("\n" + "=" * 80)
    print(f"FILTER RENDER ({len(dataset):,} lines, {iterations} iterations)")
    print("=" * 80)

    view = InteractiveFilter(dataset, config=FilterConfig(width=512, height=512))
    view.handles.set_range(0, -0.5, 0.8)
    avg_time, std_time = time_ms(view.invalidate, iterations)

    print(f"Time:       {avg_time:.3f} ms +/- {std_time:.3f} ms")
    print(f"Visible:    {int(view.visible_mask.sum()):,} lines")


if __name__ == "__main__":
    benchmark_extraction()
    benchmark_reduction()
    benchmark_render()
