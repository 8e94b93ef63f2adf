"""Configuration for the head pose scan.

All angles are in degrees, following the OrientationSample sign
conventions (pitch up +, yaw toward the subject's right +).

Example:
    >>> from posescan.config import ScanConfig
    >>>
    >>> config = ScanConfig(cooldown_sec=0.5, cooldown_trigger="change")
    >>> ScanConfig.from_dict({"up_pitch_min": 14.0}).up_pitch_min
    14.0
"""

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

COOLDOWN_TRIGGERS = ("accept", "change")


@dataclass(frozen=True)
class ScanConfig:
    """Pose thresholds and scan timing.

    The defaults are empirically tuned. Right-up needs more pitch than
    left-up (17 vs 12).

    Attributes:
        front_pitch_max: Front box half height (inclusive).
        front_yaw_max: Front box half width (inclusive).
        side_yaw_min: |yaw| at which the left/right rules take over.
        right_up_pitch_min: Pitch above which a right turn is right-up.
        left_up_pitch_min: Pitch above which a left turn is left-up.
        side_down_pitch_max: Pitch below which a side turn is side-down.
        up_pitch_min: Pitch above which a centered head is looking up.
        down_pitch_max: Pitch below which a centered head is looking down.
        cooldown_sec: Debounce window between classification decisions.
        cooldown_trigger: "accept" restarts the cooldown on every accepted
            sample; "change" only when the detection set changes.
        side_exhausted_fallthrough: When a side has all three poses, let
            the sample fall through to the up/down rules instead of
            stopping.
    """

    # Front
    front_pitch_max: float = 10.0
    front_yaw_max: float = 10.0

    # Sides
    side_yaw_min: float = 10.0
    right_up_pitch_min: float = 17.0
    left_up_pitch_min: float = 12.0
    side_down_pitch_max: float = 5.0

    # Up / down
    up_pitch_min: float = 12.0
    down_pitch_max: float = -12.0

    # Timing
    cooldown_sec: float = 0.3
    cooldown_trigger: str = "accept"  # "accept" or "change"

    side_exhausted_fallthrough: bool = False

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type is float:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(
                        f"{f.name} must be a number, got {type(value).__name__}"
                    )
                if not math.isfinite(value):
                    raise ValueError(f"{f.name} must be finite, got {value}")
            elif f.type is bool and not isinstance(value, bool):
                raise ValueError(
                    f"{f.name} must be a bool, got {type(value).__name__}"
                )

        if self.cooldown_sec < 0:
            raise ValueError(
                f"cooldown_sec must be >= 0, got {self.cooldown_sec}"
            )
        if self.cooldown_trigger not in COOLDOWN_TRIGGERS:
            raise ValueError(
                f"cooldown_trigger must be one of {COOLDOWN_TRIGGERS}, "
                f"got '{self.cooldown_trigger}'"
            )
        if self.front_pitch_max < 0 or self.front_yaw_max < 0:
            raise ValueError("front box half sizes must be >= 0")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanConfig":
        """Create ScanConfig from a dictionary (e.g., loaded from YAML).

        Missing keys keep their defaults.

        Args:
            data: Mapping of field name to value.

        Returns:
            ScanConfig instance.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown scan config keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "ScanConfig":
        """Load ScanConfig from a YAML file.

        An empty file yields the default config.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            ScanConfig instance.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the document is not a mapping or has bad values.
        """
        import yaml

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(
                f"Scan config must be a mapping, got {type(data).__name__}"
            )
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


__all__ = ["ScanConfig", "COOLDOWN_TRIGGERS"]
