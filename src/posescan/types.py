"""Head pose scan domain types."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Pose(Enum):
    """Head orientations required by a scan cycle.

    Member order is the display order of the pose indicators. A cycle is
    complete once every member has been detected.

    Example:
        >>> Pose.LEFT_UP.instruction
        'Look up and to the left'
    """

    FRONT = "front"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    LEFT_UP = "left_up"
    LEFT_DOWN = "left_down"
    RIGHT = "right"
    RIGHT_UP = "right_up"
    RIGHT_DOWN = "right_down"

    @property
    def instruction(self) -> str:
        """Prompt text for the presentation layer."""
        return _INSTRUCTIONS[self]


_INSTRUCTIONS = {
    Pose.FRONT: "Center your face",
    Pose.UP: "Look up",
    Pose.DOWN: "Look down",
    Pose.LEFT: "Turn your head left",
    Pose.LEFT_UP: "Look up and to the left",
    Pose.LEFT_DOWN: "Look down and to the left",
    Pose.RIGHT: "Turn your head right",
    Pose.RIGHT_UP: "Look up and to the right",
    Pose.RIGHT_DOWN: "Look down and to the right",
}

POSE_COUNT = len(Pose)


@dataclass(frozen=True)
class RawOrientation:
    """Estimator output for one face, angles in radians.

    A missing angle (None) reads as 0 radians.
    """

    pitch: Optional[float] = None
    yaw: Optional[float] = None


@dataclass(frozen=True)
class OrientationSample:
    """Head orientation in degrees, as seen by the classifier.

    - pitch_degrees: down(-) / up(+) head tilt
    - yaw_degrees: subject's left(-) / right(+) head turn
    """

    pitch_degrees: float
    yaw_degrees: float


@dataclass(frozen=True)
class NoChange:
    """Sample classified, nothing new detected."""


@dataclass(frozen=True)
class Detected:
    """A pose detected for the first time in the current cycle."""

    pose: Pose


@dataclass(frozen=True)
class CycleCompleted:
    """All poses were detected; the detection set has been cleared."""


@dataclass(frozen=True)
class ScanStarted:
    """A scan (re)started. Delivered to session listeners only."""


ClassifyResult = Union[NoChange, Detected, CycleCompleted]
ScanEvent = Union[Detected, CycleCompleted, ScanStarted]


__all__ = [
    "Pose",
    "POSE_COUNT",
    "RawOrientation",
    "OrientationSample",
    "NoChange",
    "Detected",
    "CycleCompleted",
    "ScanStarted",
    "ClassifyResult",
    "ScanEvent",
]
