"""Solver, classification and parameter clamping."""

import math

import pytest

from physics import (
    G,
    ConnectedParams,
    Direction,
    SingleBodyParams,
    SurfaceKind,
    SystemDirection,
    SystemKind,
    check_prediction,
    classify_connected,
    classify_single,
    solve_connected,
    solve_single_body,
)


class TestSingleBody:

    def test_rough_surface_scenario(self):
        r = solve_single_body(SingleBodyParams(mass=5, applied_force=20, force_angle=0,
                                               friction=0.2, surface=SurfaceKind.ROUGH))
        assert r.normal_force == pytest.approx(49.0)
        assert r.friction_force == pytest.approx(9.8)
        assert r.net_force == pytest.approx(10.2)
        assert r.acceleration == pytest.approx(2.04)
        assert classify_single(r.acceleration) is Direction.RIGHT
        assert not r.vertical_imbalance

    def test_smooth_surface_has_no_friction(self):
        for mu in (0.0, 0.5, 1.0):
            r = solve_single_body(SingleBodyParams(friction=mu, surface=SurfaceKind.SMOOTH))
            assert r.friction_force == 0
            assert r.net_force == pytest.approx(20.0)

    def test_normal_force_is_clamped_and_never_negative(self):
        for mass in (1, 5, 20):
            for angle in range(0, 61, 5):
                for force in range(0, 51, 5):
                    r = solve_single_body(SingleBodyParams(mass=mass, applied_force=force,
                                                           force_angle=angle))
                    expected = max(0.0, mass * G - force * math.sin(math.radians(angle)))
                    assert r.normal_force == pytest.approx(expected)
                    assert r.normal_force >= 0

    def test_acceleration_is_net_force_over_mass(self):
        for mass in (1, 3, 7, 20):
            r = solve_single_body(SingleBodyParams(mass=mass, applied_force=33, force_angle=25))
            assert r.acceleration == r.net_force / mass

    def test_lift_off_flags_vertical_imbalance(self):
        r = solve_single_body(SingleBodyParams(mass=1, applied_force=50, force_angle=60))
        assert r.normal_force == 0
        assert r.friction_force == 0
        assert r.vertical_imbalance

    def test_friction_can_exceed_pull(self):
        # kinetic magnitude is used even when the block would stay put
        r = solve_single_body(SingleBodyParams(mass=20, applied_force=5, friction=1.0))
        assert r.net_force < 0
        assert classify_single(r.acceleration) is Direction.LEFT

    def test_unknown_surface_raises(self):
        with pytest.raises(ValueError):
            solve_single_body(SingleBodyParams(surface="rough"))


class TestConnected:

    def test_pulley_scenario(self):
        r = solve_connected(ConnectedParams(mass_a=5, mass_b=3, friction=0.2,
                                            system=SystemKind.PULLEY_TABLE_HANGING))
        assert r.friction_force == pytest.approx(9.8)
        assert r.weight_b == pytest.approx(29.4)
        assert r.acceleration == pytest.approx(2.45)
        assert r.tension == pytest.approx(22.05)
        assert classify_connected(r.acceleration) is SystemDirection.A_RIGHT_B_DOWN

    def test_incline(self):
        r = solve_connected(ConnectedParams(mass_a=5, mass_b=3, incline_angle=30, friction=0.2,
                                            system=SystemKind.INCLINE_HANGING))
        theta = math.radians(30)
        normal = 5 * G * math.cos(theta)
        slope = 5 * G * math.sin(theta)
        accel = (3 * G - slope - 0.2 * normal) / 8
        assert r.normal_force == pytest.approx(normal)
        assert r.slope_component == pytest.approx(slope)
        assert r.acceleration == pytest.approx(accel)
        assert r.tension == pytest.approx(3 * (G - accel))
        assert classify_connected(r.acceleration) is SystemDirection.A_LEFT_B_UP

    def test_two_on_table_only_decelerates(self):
        r = solve_connected(ConnectedParams(mass_a=5, mass_b=3, friction=0.2,
                                            system=SystemKind.TWO_ON_TABLE))
        assert r.acceleration == pytest.approx(-0.2 * G)
        assert r.tension == pytest.approx(3 * 0.2 * G)

    def test_frictionless_table_is_at_rest(self):
        r = solve_connected(ConnectedParams(friction=0.0, system=SystemKind.TWO_ON_TABLE))
        assert r.acceleration == 0
        assert classify_connected(r.acceleration) is SystemDirection.NONE

    @pytest.mark.parametrize("system", [SystemKind.PULLEY_TABLE_HANGING, SystemKind.INCLINE_HANGING])
    def test_tension_is_tensile_when_b_wins(self, system):
        for ma in (1, 5, 20):
            for mb in (1, 5, 20):
                for angle in (0, 30, 60):
                    for mu in (0.0, 0.5, 1.0):
                        p = ConnectedParams(mass_a=ma, mass_b=mb, incline_angle=angle,
                                            friction=mu, system=system)
                        r = solve_connected(p)
                        if r.weight_b > r.friction_force + r.slope_component:
                            assert r.tension >= 0
                            assert r.acceleration > 0


class TestDirection:

    @pytest.mark.parametrize("accel, expected", [
        (0.005, Direction.NONE),
        (-0.005, Direction.NONE),
        (0.02, Direction.RIGHT),
        (-0.02, Direction.LEFT),
    ])
    def test_single_threshold(self, accel, expected):
        assert classify_single(accel) is expected

    def test_connected_labels(self):
        assert classify_connected(0.02).value == "A-right/B-down"
        assert classify_connected(0.0).value == "none"
        assert classify_connected(-0.02).value == "A-left/B-up"

    def test_check_prediction_accepts_values(self):
        assert check_prediction("right", 1.0)
        assert check_prediction(Direction.NONE, 0.001)
        assert not check_prediction("left", 1.0)
        assert check_prediction(SystemDirection.A_LEFT_B_UP, -3.0)
        assert not check_prediction(SystemDirection.NONE, -3.0)


class TestParams:

    def test_single_clamping(self):
        p = SingleBodyParams(mass=0, applied_force=-4, force_angle=90, friction=2).clamped()
        assert (p.mass, p.applied_force, p.force_angle, p.friction) == (1.0, 0.0, 60.0, 1.0)

    def test_clamping_snaps_to_slider_steps(self):
        p = SingleBodyParams(mass=4.6, applied_force=12.4, force_angle=17.3, friction=0.33).clamped()
        assert (p.mass, p.applied_force, p.force_angle, p.friction) == (5.0, 12.0, 15.0, 0.35)
        c = ConnectedParams(incline_angle=33, friction=0.12).clamped()
        assert (c.incline_angle, c.friction) == (35.0, 0.1)

    def test_connected_clamping_accepts_kind_values(self):
        p = ConnectedParams(mass_a=50, mass_b=0.1, incline_angle=-5, system="incline").clamped()
        assert (p.mass_a, p.mass_b, p.incline_angle) == (20.0, 1.0, 0.0)
        assert p.system is SystemKind.INCLINE_HANGING

    def test_params_are_immutable(self):
        p = SingleBodyParams()
        with pytest.raises(Exception):
            p.mass = 3
