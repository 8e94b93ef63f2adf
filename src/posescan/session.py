"""Scan session: wires the sample filter and classifier for one scan.

The session is the calling layer around the lock-free core. A capture
thread may feed samples while a UI thread resets or reads progress;
the session serializes both.

Listeners run after the session lock is released, so a listener may
call back into the session (e.g. reset() on CycleCompleted).

Example:
    >>> from posescan import RawOrientation, ScanSession
    >>> events = []
    >>> session = ScanSession()
    >>> session.add_listener(events.append)
    >>> session.start()
    >>> session.feed(RawOrientation(pitch=0.0, yaw=0.0))
    Detected(pose=<Pose.FRONT: 'front'>)
    >>> events
    [ScanStarted(), Detected(pose=<Pose.FRONT: 'front'>)]
    >>> session.close()
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from posescan.classifier import PoseSequenceClassifier
from posescan.config import ScanConfig
from posescan.filter import PoseSampleFilter
from posescan.types import (
    POSE_COUNT,
    ClassifyResult,
    CycleCompleted,
    Detected,
    NoChange,
    Pose,
    RawOrientation,
    ScanEvent,
    ScanStarted,
)

logger = logging.getLogger(__name__)

ScanListener = Callable[[ScanEvent], None]


@dataclass
class ScanStats:
    """Counters for one session."""

    frames: int = 0
    no_face: int = 0
    rejected: int = 0
    classified: int = 0
    detections: int = 0
    cycles_completed: int = 0


class ScanSession:
    """One in-progress head pose scan.

    Args:
        config: Scan thresholds and timing. Defaults to ScanConfig().
        clock: Monotonic clock returning nanoseconds, shared with the filter.
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        clock: Callable[[], int] = time.monotonic_ns,
    ):
        self.config = config or ScanConfig()
        self._filter = PoseSampleFilter(
            cooldown_sec=self.config.cooldown_sec,
            restart_on_accept=self.config.cooldown_trigger == "accept",
            clock=clock,
        )
        self._classifier = PoseSequenceClassifier(self.config)
        self._clock = clock
        self._listeners: List[ScanListener] = []
        self._lock = threading.Lock()
        self.stats = ScanStats()

    # ── Listeners ──

    def add_listener(self, listener: ScanListener) -> None:
        """Register a callback for Detected/CycleCompleted/ScanStarted."""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: ScanListener) -> None:
        with self._lock:
            self._listeners.remove(listener)

    def _notify(self, event: ScanEvent) -> None:
        # Called without the lock held
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Scan listener failed on %s", event)

    # ── Lifecycle ──

    def start(self) -> None:
        """Announce a fresh scan to listeners."""
        self._notify(ScanStarted())

    def reset(self) -> None:
        """Abandon the current cycle and start over."""
        with self._lock:
            self._classifier.reset()
            self._filter.reset()
            logger.debug("Scan reset")
        self._notify(ScanStarted())

    def close(self) -> None:
        """Log a session summary."""
        s = self.stats
        if s.frames > 0:
            logger.info(
                "scan summary: %d frames, %d classified, %d rejected, "
                "%d without face, %d detections, %d cycles",
                s.frames, s.classified, s.rejected,
                s.no_face, s.detections, s.cycles_completed,
            )

    # ── Frames ──

    def feed(
        self,
        raw: Optional[RawOrientation],
        t_ns: Optional[int] = None,
    ) -> Optional[ClassifyResult]:
        """Process one frame's estimate.

        Args:
            raw: First face's orientation in radians, or None if no face.
            t_ns: Frame timestamp. Defaults to the session clock.

        Returns:
            None if there was no face or the cooldown rejected the sample,
            otherwise the classifier result.
        """
        with self._lock:
            self.stats.frames += 1
            if raw is None:
                self.stats.no_face += 1
                return None

            if t_ns is None:
                t_ns = self._clock()

            sample = self._filter.accept(raw, t_ns)
            if sample is None:
                self.stats.rejected += 1
                return None

            self.stats.classified += 1
            result = self._classifier.classify(sample)
            if isinstance(result, NoChange):
                return result

            if isinstance(result, Detected):
                self.stats.detections += 1
            elif isinstance(result, CycleCompleted):
                self.stats.cycles_completed += 1

            if self.config.cooldown_trigger == "change":
                self._filter.start_cooldown(t_ns)

        self._notify(result)
        return result

    # ── State ──

    @property
    def detected(self) -> List[Pose]:
        """Poses detected in the current cycle, in display order."""
        found = self._classifier.detected
        return [p for p in Pose if p in found]

    @property
    def remaining(self) -> List[Pose]:
        return self._classifier.remaining

    @property
    def progress(self) -> float:
        """Fraction of poses detected in the current cycle (0.0-1.0)."""
        return len(self._classifier.detected) / POSE_COUNT

    @property
    def next_instruction(self) -> Optional[str]:
        """Prompt for the first missing pose, None once all are detected."""
        remaining = self._classifier.remaining
        return remaining[0].instruction if remaining else None


__all__ = ["ScanSession", "ScanStats", "ScanListener"]
