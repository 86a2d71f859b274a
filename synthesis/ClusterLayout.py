"""
Partition of the signal channels into physiological clusters.

Each cluster models a group of neurons (hand, wrist, ...) that share one
activation value per generated signal. The default layout splits the 12
channels into groups of 4, 3, 2, 2 and 1:

    hand     — 0, 1, 2, 3
    wrist    — 4, 5, 6
    forearm  — 7, 8
    elbow    — 9, 10
    shoulder — 11
"""

import numpy as np

from .errors import InvalidArgument
from .constants import N_CHANNELS

DEFAULT_CLUSTER_SIZES = (4, 3, 2, 2, 1)
DEFAULT_CLUSTER_NAMES = ("hand", "wrist", "forearm", "elbow", "shoulder")


class ClusterLayout:
    """Validated, non-overlapping assignment of every channel to one cluster."""

    def __init__(self, groups, names=None, n_channels: int = N_CHANNELS):
        """
        Args:
            groups:     Sequence of channel-index sequences, one per cluster.
            names:      Optional cluster names (default: cluster_0, cluster_1, ...).
            n_channels: Total number of channels the groups must cover.
        """
        self.n_channels = n_channels
        self.groups = tuple(tuple(int(ch) for ch in g) for g in groups)
        if names is None:
            names = tuple(f"cluster_{i}" for i in range(len(self.groups)))
        self.names = tuple(names)

        self._validate()

        # channel index -> cluster index lookup, used to broadcast activations
        self.channel_cluster = np.empty(n_channels, dtype=np.intp)
        for i, group in enumerate(self.groups):
            self.channel_cluster[list(group)] = i

    @classmethod
    def from_sizes(cls, sizes=DEFAULT_CLUSTER_SIZES, names=None, n_channels: int = N_CHANNELS):
        """Assign consecutive channel ranges to clusters of the given sizes."""
        sizes = [int(s) for s in sizes]
        if any(s <= 0 for s in sizes):
            raise InvalidArgument(f"Cluster sizes must be positive, got {sizes}.")
        if sum(sizes) != n_channels:
            raise InvalidArgument(
                f"Cluster sizes {sizes} sum to {sum(sizes)}, expected {n_channels}."
            )
        bounds = np.cumsum([0] + sizes)
        groups = [range(bounds[i], bounds[i + 1]) for i in range(len(sizes))]
        return cls(groups, names=names, n_channels=n_channels)

    @classmethod
    def default(cls) -> "ClusterLayout":
        return cls.from_sizes(DEFAULT_CLUSTER_SIZES, names=DEFAULT_CLUSTER_NAMES)

    def _validate(self) -> None:
        if not self.groups:
            raise InvalidArgument("A cluster layout needs at least one cluster.")
        if len(self.names) != len(self.groups):
            raise InvalidArgument(
                f"Got {len(self.names)} names for {len(self.groups)} clusters."
            )

        seen = set()
        for name, group in zip(self.names, self.groups):
            if not group:
                raise InvalidArgument(f"Cluster '{name}' is empty.")
            for ch in group:
                if not 0 <= ch < self.n_channels:
                    raise InvalidArgument(
                        f"Channel {ch} in cluster '{name}' is outside 0..{self.n_channels - 1}."
                    )
                if ch in seen:
                    raise InvalidArgument(f"Channel {ch} is assigned to more than one cluster.")
                seen.add(ch)

        missing = sorted(set(range(self.n_channels)) - seen)
        if missing:
            raise InvalidArgument(f"Channels {missing} are not assigned to any cluster.")

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self):
        return iter(self.groups)

    @property
    def sizes(self) -> tuple:
        return tuple(len(g) for g in self.groups)

    def cluster_of(self, channel: int) -> int:
        """Return the cluster index that owns the given channel."""
        return int(self.channel_cluster[channel])

    def __repr__(self) -> str:
        parts = ", ".join(f"{n}={list(g)}" for n, g in zip(self.names, self.groups))
        return f"ClusterLayout({parts})"
