# -*- coding: utf-8 -*-
"""
Activity Counter
Tracks in-flight backend operations and drives a single busy/idle signal.
"""

from __future__ import annotations

from typing import Callable

from orangefish.core import log


class ActivityCounter:
    """
    Saturating counter of outstanding asynchronous operations.

    Observers are called with True on the 0 -> 1 transition and with False
    when the count returns to 0. An end() with nothing outstanding is
    absorbed: the count stays at 0 and observers are not called.
    """

    def __init__(self):
        self._count = 0
        self._observers: list[Callable[[bool], None]] = []

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_busy(self) -> bool:
        return self._count > 0

    def subscribe(self, callback: Callable[[bool], None]):
        """Register a callback receiving the busy flag on each transition."""
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: Callable[[bool], None]):
        if callback in self._observers:
            self._observers.remove(callback)

    def start(self):
        """Record one more outstanding operation."""
        self._count += 1
        if self._count == 1:
            log.debug("Activity: busy")
            self._notify(True)

    def end(self):
        """Record one completed operation."""
        if self._count == 0:
            log.debug("Activity: unmatched completion ignored")
            return
        self._count -= 1
        if self._count == 0:
            log.debug("Activity: idle")
            self._notify(False)

    def reset(self):
        """Forget every outstanding operation (their completions are lost)."""
        if self._count == 0:
            return
        log.debug(f"Activity: {self._count} outstanding operation(s) abandoned")
        self._count = 0
        self._notify(False)

    def _notify(self, busy: bool):
        for callback in list(self._observers):
            try:
                callback(busy)
            except Exception as e:
                log.error_safe("Activity observer failed", e)
