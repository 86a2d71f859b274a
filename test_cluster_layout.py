"""
Test the channel → cluster partition used by cluster-activation mode.
"""

import pytest

from synthesis import ClusterLayout, InvalidArgument, N_CHANNELS


def test_default_layout_partitions_all_channels():
    layout = ClusterLayout.default()

    assert [list(g) for g in layout] == [[0, 1, 2, 3], [4, 5, 6], [7, 8], [9, 10], [11]]
    assert layout.sizes == (4, 3, 2, 2, 1)
    assert layout.names == ("hand", "wrist", "forearm", "elbow", "shoulder")

    # every channel belongs to exactly one cluster
    owners = [[i for i, g in enumerate(layout) if ch in g] for ch in range(N_CHANNELS)]
    assert all(len(o) == 1 for o in owners)
    assert [layout.cluster_of(ch) for ch in range(N_CHANNELS)] == [o[0] for o in owners]


def test_explicit_groups():
    layout = ClusterLayout([[11, 0], [1, 2, 3, 4, 5], [6, 7, 8, 9, 10]], names=["a", "b", "c"])
    assert layout.cluster_of(11) == 0
    assert layout.cluster_of(0) == 0
    assert layout.cluster_of(6) == 2
    assert "a=[11, 0]" in repr(layout)


BAD_SIZES = [
    (4, 3, 2, 2),        # gap: covers 11 channels
    (4, 3, 2, 2, 2),     # too many channels
    (4, 3, 0, 4, 1),     # empty cluster
]


@pytest.mark.parametrize("sizes", BAD_SIZES)
def test_bad_sizes_rejected(sizes):
    with pytest.raises(InvalidArgument):
        ClusterLayout.from_sizes(sizes)


def test_overlap_and_range_rejected():
    with pytest.raises(InvalidArgument, match="more than one cluster"):
        ClusterLayout([[0, 1, 2, 3, 4, 5], [5, 6, 7, 8, 9, 10, 11]])
    with pytest.raises(InvalidArgument, match="outside"):
        ClusterLayout([list(range(11)), [12]])
    with pytest.raises(InvalidArgument, match="not assigned"):
        ClusterLayout([list(range(6)), list(range(7, 12))])
    with pytest.raises(InvalidArgument):
        ClusterLayout([list(range(12))], names=["a", "b"])


if __name__ == "__main__":
    test_default_layout_partitions_all_channels()
    print("✓ Default layout is an exact partition of 0..11")
    test_explicit_groups()
    print("✓ Explicit groups accepted")
    for sizes in BAD_SIZES:
        test_bad_sizes_rejected(sizes)
    test_overlap_and_range_rejected()
    print("✓ Invalid layouts rejected")
