"""
Test KinematicPose construction, coercion and validation.
"""

import math

import numpy as np
import pytest

from synthesis import KinematicPose, InvalidArgument

WRONG_LENGTHS = [
    [0.0] * 7,
    [0.0] * 9,
]


def test_positional_fields():
    pose = KinematicPose(10, 20, 30, math.pi / 2, math.pi / 4, 0, 1, True)
    assert pose.x == 10.0 and pose.y == 20.0 and pose.z == 30.0
    assert pose.pitch == pytest.approx(math.pi / 4)
    assert pose.duration == 1.0
    assert pose.flag == 1.0
    assert isinstance(pose.flag, float)


def test_sequence_round_trip():
    values = [1.5, -2.0, 3.0, 0.1, 0.2, 0.3, 4.0, 0.0]
    pose = KinematicPose.from_sequence(values)
    np.testing.assert_allclose(pose.as_array(), values)
    np.testing.assert_allclose(pose.position, [1.5, -2.0, 3.0])
    np.testing.assert_allclose(pose.orientation, [0.1, 0.2, 0.3])
    assert KinematicPose.coerce(np.array(values)) == pose
    assert KinematicPose.coerce(pose) is pose


def test_pose_is_immutable():
    pose = KinematicPose()
    with pytest.raises(AttributeError):
        pose.x = 1.0


@pytest.mark.parametrize("values", WRONG_LENGTHS)
def test_wrong_length_rejected(values):
    with pytest.raises(InvalidArgument):
        KinematicPose.from_sequence(values)


def test_bad_field_values_rejected():
    with pytest.raises(InvalidArgument):
        KinematicPose(x=float("nan"))
    with pytest.raises(InvalidArgument):
        KinematicPose(y="north")
    with pytest.raises(InvalidArgument):
        KinematicPose(flag=0.5)


if __name__ == "__main__":
    test_positional_fields()
    test_sequence_round_trip()
    test_pose_is_immutable()
    for values in WRONG_LENGTHS:
        test_wrong_length_rejected(values)
    test_bad_field_values_rejected()
    print("✅ All KinematicPose tests passed!")
