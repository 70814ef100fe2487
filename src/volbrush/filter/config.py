"""
Interactive filter configuration.

Provides configuration for surface size, axis normalization, brushing policy
and the geometry/colors used to draw lines and handles.
"""

from dataclasses import dataclass

from volbrush.constants import (
    DEFAULT_AXIS_MARGIN,
    DEFAULT_HANDLE_COLOR,
    DEFAULT_HANDLE_HALF_WIDTH,
    DEFAULT_HANDLE_HEIGHT,
    DEFAULT_HEIGHT,
    DEFAULT_LINE_COLOR,
    DEFAULT_LINKED_LINE_COLOR,
    DEFAULT_WIDTH,
    VALID_BRUSHING_POLICIES,
    VALID_NORMALIZATIONS,
)


@dataclass
class FilterConfig:
    """
    Configuration for the interactive parallel-coordinates filter.

    Attributes:
        width: Surface width in pixels
        height: Surface height in pixels
        axis_normalization: "minmax" maps each feature's range onto the axis, "none" uses raw values
        axis_margin: Gap between normalized data and the viewport edge (0.0 to 0.5)
        brushing_policy: "excluded" publishes records failing the axis ranges, "included" those passing
        handle_half_width: Half the handle triangle base in device units
        handle_height: Handle triangle height in device units
        line_color: RGBA of unlinked lines on the visible surface
        linked_line_color: RGBA of linked lines on the visible surface
        handle_color: RGBA of handles on the visible surface
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    axis_normalization: str = "minmax"  # Options: "minmax", "none"
    axis_margin: float = DEFAULT_AXIS_MARGIN

    brushing_policy: str = "excluded"  # Options: "excluded", "included"

    handle_half_width: float = DEFAULT_HANDLE_HALF_WIDTH
    handle_height: float = DEFAULT_HANDLE_HEIGHT

    line_color: tuple[float, float, float, float] = DEFAULT_LINE_COLOR
    linked_line_color: tuple[float, float, float, float] = DEFAULT_LINKED_LINE_COLOR
    handle_color: tuple[float, float, float, float] = DEFAULT_HANDLE_COLOR

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Surface size must be positive, got {self.width}x{self.height}")

        if self.axis_normalization not in VALID_NORMALIZATIONS:
            raise ValueError(
                f"Invalid axis_normalization: {self.axis_normalization}. "
                f"Must be one of {VALID_NORMALIZATIONS}"
            )

        if self.brushing_policy not in VALID_BRUSHING_POLICIES:
            raise ValueError(
                f"Invalid brushing_policy: {self.brushing_policy}. "
                f"Must be one of {VALID_BRUSHING_POLICIES}"
            )

        if not 0.0 <= self.axis_margin < 0.5:
            raise ValueError("axis_margin must be in [0.0, 0.5)")

        if self.handle_half_width <= 0.0:
            raise ValueError("handle_half_width must be positive")
        if self.handle_height <= 0.0:
            raise ValueError("handle_height must be positive")

        for name in ("line_color", "linked_line_color", "handle_color"):
            color = getattr(self, name)
            if len(color) != 4 or not all(0.0 <= c <= 1.0 for c in color):
                raise ValueError(f"{name} must be 4 components in [0.0, 1.0]")


# Default UI slider ranges for building interfaces
UI_RANGES = {
    "drop_ratio": {"min": 0.0, "max": 0.99, "step": 0.01, "default": 0.0},
    "axis_margin": {"min": 0.0, "max": 0.45, "step": 0.01, "default": DEFAULT_AXIS_MARGIN},
    "handle_position": {"min": -1.0, "max": 1.0, "step": 0.01, "default": 0.0},
}
