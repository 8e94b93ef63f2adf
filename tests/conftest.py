"""Shared fixtures for posescan tests.

Time is driven by a fake nanosecond clock, so no test sleeps.
"""

import numpy as np
import pytest

from posescan.types import OrientationSample, Pose, RawOrientation

MS = 1_000_000


class FakeClock:
    """Manually advanced monotonic clock (nanoseconds)."""

    def __init__(self, start_ns: int = 1_000 * MS):
        self.now_ns = start_ns

    def __call__(self) -> int:
        return self.now_ns

    def advance(self, ms: float) -> None:
        self.now_ns += int(ms * MS)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_sample():
    """Factory for degree samples: make_sample(pitch, yaw)."""
    def _make(pitch: float, yaw: float) -> OrientationSample:
        return OrientationSample(pitch_degrees=pitch, yaw_degrees=yaw)
    return _make


@pytest.fixture
def make_raw():
    """Factory for estimator output given classifier-convention degrees.

    Undoes the pitch sign flip so the filter reproduces (pitch, yaw).
    """
    def _make(pitch: float, yaw: float) -> RawOrientation:
        return RawOrientation(pitch=float(np.radians(-pitch)), yaw=float(np.radians(yaw)))
    return _make


# One (pitch, yaw) per pose, each detected on a fresh classifier in this order
SCAN_ORDER = [
    (Pose.FRONT, (0.0, 0.0)),
    (Pose.UP, (15.0, 0.0)),
    (Pose.DOWN, (-15.0, 0.0)),
    (Pose.LEFT_UP, (15.0, -15.0)),
    (Pose.LEFT_DOWN, (3.0, -15.0)),
    (Pose.LEFT, (8.0, -15.0)),
    (Pose.RIGHT_UP, (20.0, 15.0)),
    (Pose.RIGHT_DOWN, (3.0, 15.0)),
    (Pose.RIGHT, (10.0, 15.0)),
]


@pytest.fixture
def scan_order():
    return list(SCAN_ORDER)
