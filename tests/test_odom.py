import math

import pytest

from jarchassis.odom import Odom


def make_odom(forward_distance=0.0, sideways_distance=0.0):
    odom = Odom()
    odom.set_physical_distances(forward_distance, sideways_distance)
    odom.set_position(0, 0, 0, 0, 0)
    return odom


def test_set_position_stores_pose():
    odom = Odom()
    odom.set_position(3.0, -4.0, 90.0, 10.0, 2.0)
    assert (odom.x, odom.y, odom.orientation_deg) == (3.0, -4.0, 90.0)
    odom.update_position(10.0, 2.0, 90.0)
    assert odom.x == pytest.approx(3.0)
    assert odom.y == pytest.approx(-4.0)


def test_forward_motion_at_zero_heading_moves_plus_y():
    odom = make_odom()
    odom.update_position(5.0, 0.0, 0.0)
    assert odom.x == pytest.approx(0.0, abs=1e-9)
    assert odom.y == pytest.approx(5.0)


def test_forward_motion_at_ninety_moves_plus_x():
    odom = Odom()
    odom.set_position(0, 0, 90, 0, 0)
    odom.update_position(5.0, 0.0, 90.0)
    assert odom.x == pytest.approx(5.0)
    assert odom.y == pytest.approx(0.0, abs=1e-9)


def test_sideways_motion_at_zero_heading_moves_plus_x():
    odom = make_odom()
    odom.update_position(0.0, 4.0, 0.0)
    assert odom.x == pytest.approx(4.0)
    assert odom.y == pytest.approx(0.0, abs=1e-9)


def test_diagonal_heading_splits_distance_evenly():
    odom = Odom()
    odom.set_position(0, 0, 45, 0, 0)
    odom.update_position(10.0, 0.0, 45.0)
    assert odom.x == pytest.approx(odom.y)
    assert math.hypot(odom.x, odom.y) == pytest.approx(10.0)


def test_no_motion_keeps_position():
    odom = make_odom(2.0, 1.0)
    odom.set_position(1.5, 2.5, 30, 7.0, 3.0)
    odom.update_position(7.0, 3.0, 30.0)
    assert odom.x == pytest.approx(1.5)
    assert odom.y == pytest.approx(2.5)


def test_turn_in_place_keeps_position():
    forward_distance = 3.0
    sideways_distance = 5.5
    odom = make_odom(forward_distance, sideways_distance)
    theta = math.pi / 2
    odom.update_position(-forward_distance * theta, -sideways_distance * theta, 90.0)
    assert odom.x == pytest.approx(0.0, abs=1e-9)
    assert odom.y == pytest.approx(0.0, abs=1e-9)
    assert odom.orientation_deg == 90.0


def test_incremental_updates_accumulate():
    odom = make_odom()
    for reading in (1.0, 2.0, 3.0, 4.0):
        odom.update_position(reading, 0.0, 0.0)
    assert odom.y == pytest.approx(4.0)
    assert odom.forward_position == 4.0