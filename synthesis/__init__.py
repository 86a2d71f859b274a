"""
Synthetic motor-intent signal generation for BCI decoder testing.

Maps a motion intent (start/end kinematic poses) to batches of 12-channel
integer signals using one of two strategies:
  - Cluster activation: channels share a per-cluster activation strength
  - Trajectory noise:   channels follow interpolated positions plus noise
"""

from .errors import SynthesisError, InvalidArgument, InvalidDuration
from .constants import N_CHANNELS
from .KinematicPose import KinematicPose
from .ClusterLayout import ClusterLayout
from .SignalSynthesizer import SignalSynthesizer, NoiseType

__all__ = [
    'SynthesisError', 'InvalidArgument', 'InvalidDuration',
    'KinematicPose', 'NoiseType', 'N_CHANNELS',
    'ClusterLayout', 'SignalSynthesizer',
]
