"""
Example: volume feature brushing usage.

Demonstrates how to use volbrush for:
- Feature extraction from a uint16 volume
- Order-preserving data reduction
- Range brushing with axis handles
- Line linking with pointer clicks
"""

import logging

import numpy as np

from volbrush import (
    FEATURE_NAMES,
    DatasetReducer,
    FeatureConfig,
    FeatureExtractor,
    FilterConfig,
    InteractiveFilter,
    MouseButton,
    Pipeline,
    PointerEvent,
    ScalarGrid,
    SelectionState,
)

# Configure logging to see stage statistics
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def generate_sample_volume(size: int = 32) -> ScalarGrid:
    """Generate a sphere-like uint16 volume with noise."""
    rng = np.random.default_rng(42)
    z, y, x = np.meshgrid(*(np.linspace(-1.0, 1.0, size),) * 3, indexing="ij")
    field = np.where(x**2 + y**2 + z**2 < 0.5, 2500.0, 400.0)
    field += rng.normal(0.0, 80.0, size=field.shape)
    return ScalarGrid(np.clip(field, 0, 65535).astype(np.uint16))


def example_1_extraction():
    """Example 1: Extract per-cell features."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Feature Extraction")
    print("=" * 70)

    grid = generate_sample_volume()
    result = FeatureExtractor(FeatureConfig(include_std_dev=True))(grid)
    dataset = result.dataset

    print(f"Grid {grid.dimensions} -> {len(dataset)} records ({result.status.name})")
    lo, hi = dataset.value_ranges()
    for name, a, b in zip(FEATURE_NAMES, lo, hi):
        print(f"  {name:<20} [{a:9.2f}, {b:9.2f}]")

    # Unsupported sample types are skipped and keep the previous output
    skipped = FeatureExtractor()(ScalarGrid(np.zeros((4, 4, 4), dtype=np.float32)))
    print(f"float32 grid: {skipped.status.name}")


def example_2_reduction():
    """Example 2: Reduce a dataset while keeping element order."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Data Reduction")
    print("=" * 70)

    dataset = FeatureExtractor()(generate_sample_volume()).dataset

    for ratio in [0.0, 0.5, 0.9]:
        reduced = DatasetReducer(drop_ratio=ratio)(dataset)
        print(f"  drop_ratio={ratio}: {len(dataset)} -> {len(reduced)} records "
              f"(sorted={reduced.is_sorted()})")


def example_3_brushing():
    """Example 3: Brush records with axis ranges."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Brushing")
    print("=" * 70)

    selection = SelectionState()
    selection.subscribe(lambda name, indices: print(f"  [{name}] {len(indices)} records"))

    view = InteractiveFilter(config=FilterConfig(width=256, height=256), selection=selection)
    Pipeline().drop(0.95).view(view)(generate_sample_volume())

    # Keep the upper half of the intensity axis
    view.handles.set_range(0, 0.0, 1.0)
    view.invalidate()
    selection.publish(linking=False)
    print(f"Visible lines: {int(view.visible_mask.sum())} / {len(view.visible_mask)}")


def example_4_pointer_interaction():
    """Example 4: Drag a handle and link a line with the pointer."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Pointer Interaction")
    print("=" * 70)

    view = InteractiveFilter(config=FilterConfig(width=256, height=256))
    Pipeline().drop(0.95).view(view)(generate_sample_volume())
    surface = view.output_surface

    # Grab the lower handle of the mean axis and drag it up
    x, y = surface.ndc_to_screen(*view.handles.handle(2).position)
    result = view.handle_mouse_click(PointerEvent(x, y))
    print(f"Clicked handle {result.handle_id}")

    _, y_target = surface.ndc_to_screen(0.0, -0.2)
    view.handle_mouse_move(PointerEvent(x, y_target))
    view.handle_mouse_release(PointerEvent(x, y_target))
    print(f"Mean axis range: [{view.handles.lower(1):.3f}, {view.handles.upper(1):.3f}]")
    print(f"Brushed records: {len(view.selection.brushing_indices)}")

    # Click the first visible line where it crosses the std-dev axis
    visible = np.flatnonzero(view.visible_mask)
    if len(visible):
        coords = view.axis_coordinates[visible[0]]
        x, y = surface.ndc_to_screen(view.handles.axis_x(2), float(coords[2]))
        result = view.handle_mouse_click(PointerEvent(x, y))
        print(f"Clicked line {result.line_id}, linked: {sorted(view.selection.linking_indices)}")

    # Right click on the background clears the linking set
    view.handle_mouse_click(PointerEvent(2, 2, MouseButton.RIGHT))
    print(f"Linked after right click: {len(view.selection.linking_indices)}")


def main():
    """Run all examples."""
    print("\n" + "=" * 70)
    print("VOLBRUSH EXAMPLES")
    print("=" * 70)

    example_1_extraction()
    example_2_reduction()
    example_3_brushing()
    example_4_pointer_interaction()

    print("\n" + "=" * 70)
    print("ALL EXAMPLES COMPLETED")
    print("=" * 70)


if __name__ == "__main__":
    main()
