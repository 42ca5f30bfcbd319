# -*- coding: utf-8 -*-
"""
Text Fitting
Suffix-preserving ellipsis truncation of labels to a container width.
"""

from __future__ import annotations

from typing import Callable

ELLIPSIS = "..."
TRUNCATION_STEP = 4


def fit_text(
    original_text: str,
    measure: Callable[[str], float],
    container_width: float,
    ellipsis: str = ELLIPSIS,
    step: int = TRUNCATION_STEP,
) -> str:
    """
    Truncate text from the front until it fits the container.

    The rightmost characters are kept, which favours the most specific path
    components. Every call restarts from ``original_text``.

    Args:
        original_text: Full label text
        measure: Returns the rendered width of a candidate string
        container_width: Available width; non-positive widths yield the ellipsis
        ellipsis: Marker prepended to truncated text
        step: Number of characters removed per iteration

    Returns:
        The text to render
    """
    if step <= 0:
        raise ValueError("truncation step must be positive")

    if container_width > 0 and measure(original_text) < container_width:
        return original_text

    remaining = original_text
    while True:
        candidate = ellipsis + remaining
        if not remaining:
            return candidate
        if container_width > 0 and measure(candidate) < container_width:
            return candidate
        remaining = remaining[step:]
