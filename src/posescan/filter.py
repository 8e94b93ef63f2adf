"""Sample debouncing and unit conversion for the pose classifier."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import numpy as np

from posescan.types import OrientationSample, RawOrientation

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SEC = 0.3


class PoseSampleFilter:
    """Debounces raw estimator samples into classifier samples.

    At most one sample is accepted per cooldown window. Accepted samples
    are converted from radians to degrees with the pitch sign flipped, so
    that a raised head gives a positive pitch. Yaw keeps its sign.

    Args:
        cooldown_sec: Debounce window length in seconds.
        restart_on_accept: Start a new cooldown on every accepted sample.
            When False the owner calls start_cooldown() itself.
        clock: Monotonic clock returning nanoseconds.

    Example:
        >>> from posescan import PoseSampleFilter, RawOrientation
        >>> filt = PoseSampleFilter()
        >>> sample = filt.accept(RawOrientation(pitch=0.1, yaw=-0.2))
        >>> filt.accept(RawOrientation(pitch=0.1, yaw=-0.2)) is None
        True
    """

    def __init__(
        self,
        cooldown_sec: float = DEFAULT_COOLDOWN_SEC,
        restart_on_accept: bool = True,
        clock: Callable[[], int] = time.monotonic_ns,
    ):
        self._cooldown_ns = int(cooldown_sec * 1e9)
        self._restart_on_accept = restart_on_accept
        self._clock = clock
        self._cooldown_start_ns: Optional[int] = None

    @staticmethod
    def to_sample(raw: RawOrientation) -> OrientationSample:
        """Convert a radian estimate to a classifier sample."""
        pitch = raw.pitch if raw.pitch is not None else 0.0
        yaw = raw.yaw if raw.yaw is not None else 0.0
        return OrientationSample(
            pitch_degrees=-float(np.degrees(pitch)),
            yaw_degrees=float(np.degrees(yaw)),
        )

    def accept(
        self,
        raw: RawOrientation,
        t_ns: Optional[int] = None,
    ) -> Optional[OrientationSample]:
        """Accept a sample unless a cooldown is active.

        Args:
            raw: Estimator output in radians.
            t_ns: Sample timestamp. Defaults to the clock.

        Returns:
            The converted sample, or None when rejected by the cooldown.
        """
        if t_ns is None:
            t_ns = self._clock()

        if self.in_cooldown(t_ns):
            return None

        if self._restart_on_accept:
            self._cooldown_start_ns = t_ns
        return self.to_sample(raw)

    def start_cooldown(self, t_ns: Optional[int] = None) -> None:
        """Start a new cooldown window at t_ns (default: now)."""
        self._cooldown_start_ns = self._clock() if t_ns is None else t_ns

    def in_cooldown(self, t_ns: Optional[int] = None) -> bool:
        """Check if a sample at t_ns would be rejected."""
        if self._cooldown_start_ns is None:
            return False
        if t_ns is None:
            t_ns = self._clock()
        return (t_ns - self._cooldown_start_ns) < self._cooldown_ns

    def reset(self) -> None:
        """Clear the cooldown so the next sample is accepted."""
        self._cooldown_start_ns = None

    @property
    def cooldown_sec(self) -> float:
        return self._cooldown_ns / 1e9


__all__ = ["PoseSampleFilter", "DEFAULT_COOLDOWN_SEC"]
