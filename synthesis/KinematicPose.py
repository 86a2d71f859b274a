"""
Kinematic pose: one endpoint (start or end) of a motion intent.

Field layout (8 values, index order matters for sequence conversion):
    0-2 — x, y, z          spatial position
    3-5 — roll, pitch, yaw orientation-like angles
    6   — duration         time marker of the pose
    7   — flag             boolean-like marker stored as 0.0 / 1.0
"""

import math
from dataclasses import dataclass, astuple

import numpy as np

from .errors import InvalidArgument

N_POSE_FIELDS = 8


@dataclass(frozen=True)
class KinematicPose:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0
    duration: float = 0.0
    flag: float = 0.0

    def __post_init__(self):
        for name, value in zip(self.__dataclass_fields__, astuple(self)):
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise InvalidArgument(f"Pose field '{name}' must be numeric, got {value!r}.") from None
            if not math.isfinite(value):
                raise InvalidArgument(f"Pose field '{name}' must be finite, got {value}.")
            # frozen dataclass: bypass __setattr__ to store the coerced float
            object.__setattr__(self, name, value)

        if self.flag not in (0.0, 1.0):
            raise InvalidArgument(f"Pose flag must be 0 or 1, got {self.flag}.")

    @classmethod
    def from_sequence(cls, values) -> "KinematicPose":
        """Build a pose from any 8-element sequence (list, tuple, ndarray)."""
        values = list(values)
        if len(values) != N_POSE_FIELDS:
            raise InvalidArgument(
                f"A kinematic pose needs {N_POSE_FIELDS} values, got {len(values)}."
            )
        return cls(*values)

    @classmethod
    def coerce(cls, pose) -> "KinematicPose":
        if isinstance(pose, cls):
            return pose
        return cls.from_sequence(pose)

    def as_array(self) -> np.ndarray:
        """Return the 8 fields as a float64 array in index order."""
        return np.array(astuple(self), dtype=np.float64)

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @property
    def orientation(self) -> np.ndarray:
        return np.array([self.roll, self.pitch, self.yaw], dtype=np.float64)
