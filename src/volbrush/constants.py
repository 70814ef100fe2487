"""
Constants and default values for volbrush stages.

Centralizes magic numbers and configuration defaults for better maintainability.
"""

from __future__ import annotations

import numpy as np

# =============================================================================
# Feature Dataset Constants
# =============================================================================

# Fixed order of the per-element feature vector
FEATURE_NAMES = ("intensity", "mean", "std_dev", "gradient_magnitude")
NUM_FEATURES = len(FEATURE_NAMES)

INDEX_DTYPE = np.uint64
VALUE_DTYPE = np.float32

# =============================================================================
# Feature Extraction Constants
# =============================================================================

# The only sample representation the extractor accepts
SUPPORTED_SAMPLE_DTYPE = np.dtype(np.uint16)

# Written into disabled feature columns
STD_DEV_SENTINEL = -1.0
GRADIENT_SENTINEL = -1.0

# =============================================================================
# Data Reduction Constants
# =============================================================================

DEFAULT_DROP_RATIO = 0.0
DROP_RATIO_MIN = 0.0  # Inclusive
DROP_RATIO_MAX = 1.0  # Exclusive

# =============================================================================
# Interactive Filter Constants
# =============================================================================

# Surface defaults
DEFAULT_WIDTH = 512
DEFAULT_HEIGHT = 512

# Device coordinate range of the viewport
NDC_MIN = -1.0
NDC_MAX = 1.0

# Handle geometry in device units
DEFAULT_HANDLE_HALF_WIDTH = 0.05
DEFAULT_HANDLE_HEIGHT = 0.05

# Gap kept between normalized data and the viewport edge
DEFAULT_AXIS_MARGIN = 0.05

# Visible colors (RGBA)
DEFAULT_LINE_COLOR = (0.25, 0.35, 0.8, 1.0)
DEFAULT_LINKED_LINE_COLOR = (1.0, 0.5, 0.0, 1.0)
DEFAULT_HANDLE_COLOR = (0.8, 0.8, 0.8, 1.0)
CLEAR_COLOR = (0.0, 0.0, 0.0, 0.0)

# =============================================================================
# Pick Encoding Constants
# =============================================================================

# Red channel carries (handle_id + 1) / PICK_HANDLE_LEVELS, 0 means no handle
PICK_HANDLE_LEVELS = 255
MAX_HANDLES = PICK_HANDLE_LEVELS - 1

# Green, blue and alpha each carry one chunk of (element_index + 1)
LINE_CHANNEL_BITS = 16
LINE_CHANNEL_COUNT = 3
LINE_CHANNEL_MASK = (1 << LINE_CHANNEL_BITS) - 1
MAX_LINE_ID = (1 << (LINE_CHANNEL_BITS * LINE_CHANNEL_COUNT)) - 1

NO_PICK = -1

# Valid option sets
VALID_NORMALIZATIONS = {"minmax", "none"}
VALID_BRUSHING_POLICIES = {"excluded", "included"}
