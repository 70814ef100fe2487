"""
Numba-optimized kernels for dataset reduction.

The fractional accumulator is inherently sequential, so the selection kernel
runs a single loop; the gather kernel is parallel.
"""

import numpy as np
from numba import njit, prange


@njit(cache=True, nogil=True)
def fractional_keep_mask_numba(keep_fraction: float, out: np.ndarray) -> int:
    """
    Error-diffusion selection of roughly ``keep_fraction * N`` elements.

    The accumulator starts at keep_fraction; an element is kept when the
    accumulator has reached 1.0 (which then loses 1.0), and keep_fraction is
    added after every element.

    Args:
        keep_fraction: 1 - drop_ratio, in (0, 1]
        out: Output keep mask [N] (modified in-place)

    Returns:
        Number of kept elements
    """
    n = out.shape[0]
    counter = keep_fraction
    kept = 0

    for i in range(n):
        if counter >= 1.0:
            counter -= 1.0
            out[i] = True
            kept += 1
        else:
            out[i] = False
        counter += keep_fraction

    return kept


@njit(cache=True, nogil=True)
def compute_output_indices_and_count(mask: np.ndarray, out_indices: np.ndarray) -> int:
    """
    Compute output positions and count of kept rows in a single pass.

    Args:
        mask: Boolean mask [N]
        out_indices: Output positions [N] (modified in-place, -1 for dropped rows)

    Returns:
        Number of True values in mask
    """
    n = mask.shape[0]
    count = 0

    for i in range(n):
        if mask[i]:
            out_indices[i] = count
            count += 1
        else:
            out_indices[i] = -1

    return count


@njit(parallel=True, cache=True, nogil=True)
def gather_records_parallel(
    mask: np.ndarray,
    out_indices: np.ndarray,
    element_index: np.ndarray,
    values: np.ndarray,
    out_element_index: np.ndarray,
    out_values: np.ndarray,
) -> None:
    """
    Parallel scatter of kept records into freshly allocated output arrays.

    Args:
        mask: Boolean mask [N]
        out_indices: Pre-computed output positions [N]
        element_index: Input element indices [N]
        values: Input feature values [N, F]
        out_element_index: Output element indices [n_kept]
        out_values: Output feature values [n_kept, F]
    """
    n = mask.shape[0]
    n_features = values.shape[1]

    for i in prange(n):
        if mask[i]:
            j = out_indices[i]
            out_element_index[j] = element_index[i]
            for k in range(n_features):
                out_values[j, k] = values[i, k]
