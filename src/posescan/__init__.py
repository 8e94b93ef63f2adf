"""Head pose guided capture scan.

Classifies a stream of per-frame pitch/yaw estimates into the nine head
poses of a liveness style scan (front, up, down, and the six left/right
turns), debounced and repeating once every pose has been seen.

Example:
    >>> from posescan import ScanSession, RawOrientation, Detected
    >>> session = ScanSession()
    >>> result = session.feed(RawOrientation(pitch=0.0, yaw=0.0))
    >>> isinstance(result, Detected)
    True
"""

from posescan.classifier import PoseSequenceClassifier
from posescan.config import ScanConfig
from posescan.filter import PoseSampleFilter
from posescan.session import ScanSession, ScanStats
from posescan.types import (
    POSE_COUNT,
    ClassifyResult,
    CycleCompleted,
    Detected,
    NoChange,
    OrientationSample,
    Pose,
    RawOrientation,
    ScanEvent,
    ScanStarted,
)

__version__ = "0.1.0"

__all__ = [
    "PoseSequenceClassifier",
    "PoseSampleFilter",
    "ScanConfig",
    "ScanSession",
    "ScanStats",
    "Pose",
    "POSE_COUNT",
    "RawOrientation",
    "OrientationSample",
    "ClassifyResult",
    "NoChange",
    "Detected",
    "CycleCompleted",
    "ScanStarted",
    "ScanEvent",
]
