"""Pose sequence classifier: the scan state machine.

Maps debounced orientation samples to a non-repeating sequence of
detected poses. Rules are evaluated top to bottom on every call:

1. front   - centered head
2. right   - yaw >= side_yaw_min (right-up, right-down, right)
3. left    - yaw <= -side_yaw_min (left-up, left-down, left)
4. up/down - remaining pitch checks
5. completion - all poses detected, clear and start over

A rule either returns a terminal result or falls through. A side rule
whose three poses are all detected stops the call before the up/down
rule unless ScanConfig.side_exhausted_fallthrough is set. The
completion check still runs in that case.
"""

from __future__ import annotations

import logging
from typing import Callable, FrozenSet, List, Optional, Set, Tuple, Union

import numpy as np

from posescan.config import ScanConfig
from posescan.types import (
    POSE_COUNT,
    ClassifyResult,
    CycleCompleted,
    Detected,
    NoChange,
    OrientationSample,
    Pose,
)

logger = logging.getLogger(__name__)

# Rule outcomes besides a Detected result
_FALL_THROUGH = "fall_through"
_STOP = "stop"

_RuleOutcome = Union[Detected, str]
_Rule = Callable[[OrientationSample], _RuleOutcome]


class PoseSequenceClassifier:
    """Stateful classifier for one scan.

    Not thread-safe: calls must be serialized by the owner.

    Args:
        config: Thresholds. Defaults to ScanConfig().

    Example:
        >>> from posescan import OrientationSample, PoseSequenceClassifier
        >>> clf = PoseSequenceClassifier()
        >>> clf.classify(OrientationSample(pitch_degrees=0.0, yaw_degrees=0.0))
        Detected(pose=<Pose.FRONT: 'front'>)
    """

    def __init__(self, config: Optional[ScanConfig] = None):
        self.config = config or ScanConfig()
        self._detected: Set[Pose] = set()
        self._rules: Tuple[_Rule, ...] = (
            self._check_front,
            self._check_right,
            self._check_left,
            self._check_up_down,
        )

    def classify(self, sample: OrientationSample) -> ClassifyResult:
        """Classify one sample against the current cycle.

        Args:
            sample: Debounced orientation in degrees.

        Returns:
            Detected(pose) for a newly detected pose, CycleCompleted when
            the cycle was finished and cleared, NoChange otherwise.
        """
        if np.isnan(sample.pitch_degrees) or np.isnan(sample.yaw_degrees):
            logger.debug("Ignoring NaN sample %s", sample)
            return NoChange()

        for rule in self._rules:
            outcome = rule(sample)
            if isinstance(outcome, Detected):
                logger.debug(
                    "Detected %s (pitch=%.1f yaw=%.1f, %d/%d)",
                    outcome.pose.value, sample.pitch_degrees,
                    sample.yaw_degrees, len(self._detected), POSE_COUNT,
                )
                return outcome
            if outcome == _STOP:
                break

        if len(self._detected) == POSE_COUNT:
            self._detected.clear()
            logger.info("Scan cycle completed, restarting")
            return CycleCompleted()

        return NoChange()

    def reset(self) -> None:
        """Abandon the current cycle."""
        self._detected.clear()

    # ── Rules ──

    def _check_front(self, sample: OrientationSample) -> _RuleOutcome:
        cfg = self.config
        if (
            -cfg.front_pitch_max <= sample.pitch_degrees <= cfg.front_pitch_max
            and -cfg.front_yaw_max <= sample.yaw_degrees <= cfg.front_yaw_max
        ):
            return self._claim(Pose.FRONT) or _FALL_THROUGH
        return _FALL_THROUGH

    def _check_right(self, sample: OrientationSample) -> _RuleOutcome:
        cfg = self.config
        if sample.yaw_degrees < cfg.side_yaw_min:
            return _FALL_THROUGH
        return self._check_side(
            sample,
            up=(Pose.RIGHT_UP, cfg.right_up_pitch_min),
            down=Pose.RIGHT_DOWN,
            level=Pose.RIGHT,
        )

    def _check_left(self, sample: OrientationSample) -> _RuleOutcome:
        cfg = self.config
        if sample.yaw_degrees > -cfg.side_yaw_min:
            return _FALL_THROUGH
        return self._check_side(
            sample,
            up=(Pose.LEFT_UP, cfg.left_up_pitch_min),
            down=Pose.LEFT_DOWN,
            level=Pose.LEFT,
        )

    def _check_side(
        self,
        sample: OrientationSample,
        up: Tuple[Pose, float],
        down: Pose,
        level: Pose,
    ) -> _RuleOutcome:
        # Diagonals first, then the level turn
        up_pose, up_pitch_min = up
        candidates: List[Pose] = []
        if sample.pitch_degrees > up_pitch_min:
            candidates.append(up_pose)
        if sample.pitch_degrees < self.config.side_down_pitch_max:
            candidates.append(down)
        candidates.append(level)

        for pose in candidates:
            if pose not in self._detected:
                return self._claim(pose)

        if self.config.side_exhausted_fallthrough:
            return _FALL_THROUGH
        return _STOP

    def _check_up_down(self, sample: OrientationSample) -> _RuleOutcome:
        cfg = self.config
        if sample.pitch_degrees > cfg.up_pitch_min and Pose.UP not in self._detected:
            return self._claim(Pose.UP)
        if sample.pitch_degrees < cfg.down_pitch_max and Pose.DOWN not in self._detected:
            return self._claim(Pose.DOWN)
        return _FALL_THROUGH

    def _claim(self, pose: Pose) -> Optional[Detected]:
        if pose in self._detected:
            return None
        self._detected.add(pose)
        return Detected(pose)

    # ── State ──

    @property
    def detected(self) -> FrozenSet[Pose]:
        """Poses detected in the current cycle."""
        return frozenset(self._detected)

    @property
    def remaining(self) -> List[Pose]:
        """Poses still missing, in display order."""
        return [p for p in Pose if p not in self._detected]

    @property
    def is_complete(self) -> bool:
        """All poses detected; the next non-detecting sample completes the cycle."""
        return len(self._detected) == POSE_COUNT


__all__ = ["PoseSequenceClassifier"]
