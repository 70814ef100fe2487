"""
Validation decorators for volbrush stages.

Provides reusable validation logic for parameter checking across all stages.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Callable
from functools import wraps
from typing import Any

F = Callable[..., Any]


def _extract_value(args: tuple, kwargs: dict, param_name: str, param_index: int) -> tuple[bool, Any]:
    if len(args) > param_index:
        return True, args[param_index]
    if param_name in kwargs:
        return True, kwargs[param_name]
    return False, None


def check_range(
    value: Any,
    min_val: float,
    max_val: float,
    param_name: str = "value",
    max_inclusive: bool = True,
) -> float:
    """
    Check that a numeric value lies in [min_val, max_val] (or [min_val, max_val)).

    Args:
        value: Value to check
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value
        param_name: Name of parameter for error messages
        max_inclusive: Whether max_val itself is allowed

    Returns:
        The value as float

    Raises:
        TypeError: If value is not a real number (bools are rejected)
        ValueError: If value is NaN or outside the range
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(
            f"{param_name} must be a number, got {type(value).__name__}. "
            f"Provide a real number (int, float or numpy scalar)."
        )

    value = float(value)
    upper_ok = value <= max_val if max_inclusive else value < max_val
    if math.isnan(value) or not (min_val <= value and upper_ok):
        closing = "]" if max_inclusive else ")"
        suggestion = ""
        if "drop_ratio" in param_name:
            suggestion = " Use 0.0 to keep everything, 0.9 to keep roughly one element in ten."
        raise ValueError(
            f"{param_name}={value} is outside valid range [{min_val}, {max_val}{closing}.{suggestion}"
        )
    return value


def validate_range(
    min_val: float,
    max_val: float,
    param_name: str = "value",
    param_index: int = 1,
    max_inclusive: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for validating numeric parameter ranges.

    Args:
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature (default: 1 = first arg after self)
        max_inclusive: Whether max_val itself is allowed

    Returns:
        Decorated function with range validation

    Example:
        >>> @validate_range(0.0, 1.0, "drop_ratio", max_inclusive=False)
        ... def drop(self, drop_ratio: float) -> Self:
        ...     self._drop_ratio = drop_ratio
        ...     return self
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _extract_value(args, kwargs, param_name, param_index)
            if found:
                check_range(value, min_val, max_val, param_name, max_inclusive)
            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_choices(
    valid_choices: set[str],
    param_name: str = "value",
    param_index: int = 1,
) -> Callable[[F], F]:
    """
    Decorator for validating parameter choices.

    Args:
        valid_choices: Set of valid string choices
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature

    Returns:
        Decorated function with choice validation
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _extract_value(args, kwargs, param_name, param_index)
            if found and value not in valid_choices:
                choices_str = ", ".join(sorted(valid_choices))
                raise ValueError(
                    f"{param_name}='{value}' is not valid. Valid options are: {choices_str}"
                )
            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
