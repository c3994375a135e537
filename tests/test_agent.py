"""
Tests for the Agent steering rules and integration.
"""

import numpy as np
import pytest

from flocking import Agent, ConfigError, Group, GroupProfile, SteeringParams
from flocking.vector import normalize


def make_agent(position, velocity=(0.0, 0.0, 0.0), mass=1.0, home=(0.0, 0.0, 0.0),
               group=Group.A, facing_policy="position"):
    return Agent(
        position=np.array(position, dtype=np.float64),
        velocity=np.array(velocity, dtype=np.float64),
        mass=mass,
        group=group,
        home=np.array(home, dtype=np.float64),
        facing_policy=facing_policy,
    )


class TestIsolation:
    """An agent far from everyone only feels the centering force."""

    def test_rules_are_zero_without_neighbors(self):
        agent = make_agent((200.0, 0.0, 0.0), velocity=(0.0, 0.5, 0.0))
        other = make_agent((-200.0, 0.0, 0.0))
        flock = [agent, other]

        np.testing.assert_array_equal(agent.separate(flock), np.zeros(3))
        np.testing.assert_array_equal(agent.align(flock), np.zeros(3))
        np.testing.assert_array_equal(agent.cohesion(flock), np.zeros(3))

    def test_only_centering_contributes(self):
        agent = make_agent((200.0, 0.0, 0.0), velocity=(0.0, 0.5, 0.0))
        flock = [agent, make_agent((-200.0, 0.0, 0.0))]

        acc = agent.accumulate(flock)

        expected = (np.array([-1.0, 0.0, 0.0]) - agent.velocity) * 0.0001 * 200.0
        np.testing.assert_allclose(acc, expected)

    def test_agent_at_home_feels_nothing(self):
        agent = make_agent((0.0, 0.0, 0.0))
        acc = agent.accumulate([agent])
        np.testing.assert_array_equal(acc, np.zeros(3))


class TestSelfExclusion:

    def test_coincident_agents_are_not_neighbors(self):
        """Zero distance excludes both self and an exactly coincident agent."""
        a = make_agent((1.0, 2.0, 3.0), velocity=(0.3, 0.0, 0.0))
        b = make_agent((1.0, 2.0, 3.0), velocity=(0.0, 0.7, 0.0))
        flock = [a, b]

        for agent in flock:
            np.testing.assert_array_equal(agent.separate(flock), np.zeros(3))
            np.testing.assert_array_equal(agent.align(flock), np.zeros(3))
            np.testing.assert_array_equal(agent.cohesion(flock), np.zeros(3))
            assert np.all(np.isfinite(agent.accumulate(flock)))


class TestSeparation:

    def test_points_away_from_neighbor(self):
        agent = make_agent((0.0, 0.0, 0.0))
        flock = [agent, make_agent((5.0, 0.0, 0.0))]
        np.testing.assert_allclose(agent.separate(flock), [-1.0, 0.0, 0.0])

    def test_closer_neighbors_push_harder(self):
        agent = make_agent((0.0, 0.0, 0.0))
        near = make_agent((0.0, 2.0, 0.0))
        far = make_agent((20.0, 0.0, 0.0))

        result = agent.separate([agent, near, far])

        raw = np.array([-1.0 / 20.0, -1.0 / 2.0, 0.0]) / 2
        np.testing.assert_allclose(result, normalize(raw))
        assert np.linalg.norm(result) == pytest.approx(1.0)

    def test_radius_is_exclusive(self):
        agent = make_agent((0.0, 0.0, 0.0))
        flock = [agent, make_agent((40.0, 0.0, 0.0))]
        np.testing.assert_array_equal(agent.separate(flock), np.zeros(3))


class TestAlignment:

    def test_average_is_clamped_to_unit_length(self):
        agent = make_agent((0.0, 0.0, 0.0))
        flock = [
            agent,
            make_agent((5.0, 0.0, 0.0), velocity=(3.0, 0.0, 0.0)),
            make_agent((0.0, 5.0, 0.0), velocity=(0.0, 4.0, 0.0)),
        ]

        result = agent.align(flock)

        # Average (1.5, 2, 0) has length 2.5
        assert np.linalg.norm(result) == pytest.approx(1.0)
        np.testing.assert_allclose(result, [0.6, 0.8, 0.0])

    def test_slow_average_is_unchanged(self):
        agent = make_agent((0.0, 0.0, 0.0))
        flock = [
            agent,
            make_agent((30.0, 0.0, 0.0), velocity=(0.2, 0.0, 0.0)),
            make_agent((0.0, 0.0, 45.0), velocity=(0.0, 0.0, -0.4)),
        ]
        np.testing.assert_allclose(agent.align(flock), [0.1, 0.0, -0.2])

    def test_own_velocity_is_ignored(self):
        agent = make_agent((0.0, 0.0, 0.0), velocity=(9.0, 9.0, 9.0))
        flock = [agent, make_agent((10.0, 0.0, 0.0), velocity=(0.0, 0.5, 0.0))]
        np.testing.assert_allclose(agent.align(flock), [0.0, 0.5, 0.0])


class TestCohesion:

    def test_steers_toward_centroid(self):
        agent = make_agent((0.0, 0.0, 0.0), velocity=(0.1, 0.0, 0.0))
        flock = [
            agent,
            make_agent((1.0, 2.0, 0.0)),
            make_agent((3.0, 0.0, 1.0)),
            make_agent((2.0, -2.0, 2.0)),
        ]

        result = agent.cohesion(flock)

        centroid = np.array([2.0, 0.0, 1.0])
        np.testing.assert_allclose(result, agent.steer(centroid))
        np.testing.assert_allclose(result, centroid / np.sqrt(5.0) - agent.velocity)

    def test_only_engages_within_ten_units(self):
        agent = make_agent((0.0, 0.0, 0.0), velocity=(0.1, 0.0, 0.0))
        flock = [agent, make_agent((10.0, 0.0, 0.0)), make_agent((0.0, 15.0, 0.0))]
        np.testing.assert_array_equal(agent.cohesion(flock), np.zeros(3))


class TestSteer:

    def test_desired_minus_velocity(self):
        agent = make_agent((1.0, 1.0, 1.0), velocity=(0.5, 0.0, 0.0))
        result = agent.steer(np.array([1.0, 11.0, 1.0]))
        np.testing.assert_allclose(result, [-0.5, 1.0, 0.0])

    def test_zero_when_target_coincides(self):
        agent = make_agent((1.0, 1.0, 1.0), velocity=(0.5, 0.0, 0.0))
        np.testing.assert_array_equal(agent.steer(np.array([1.0, 1.0, 1.0])), np.zeros(3))


class TestMassScaling:
    """Separation and centering scale with mass going in; the sum is divided by mass."""

    @staticmethod
    def _scene(mass):
        agent = make_agent((0.0, 0.0, 0.0), velocity=(0.2, 0.1, 0.0), mass=mass,
                           home=(30.0, 0.0, 0.0))
        flock = [
            agent,
            make_agent((5.0, 0.0, 0.0), velocity=(0.5, 0.0, 0.0)),
            make_agent((3.0, 4.0, 0.0), velocity=(0.0, 0.3, 0.0)),
        ]
        return agent, flock

    def test_closed_form(self):
        s = SteeringParams()
        for mass in (1.0, 2.0, 15.0):
            agent, flock = self._scene(mass)
            sep = agent.separate(flock)
            ali = agent.align(flock)
            coh = agent.cohesion(flock)
            cen = agent.steer(agent.home)
            d = np.linalg.norm(agent.home - agent.position)

            acc = agent.accumulate(flock)

            expected = (sep * s.separation_weight
                        + cen * s.centering_weight * d
                        + (ali * s.alignment_weight + coh * s.cohesion_weight) / mass)
            np.testing.assert_allclose(acc, expected, rtol=1e-10, atol=1e-14)

    def test_doubling_mass_halves_only_alignment_and_cohesion(self):
        s = SteeringParams()
        light, flock_light = self._scene(1.0)
        heavy, flock_heavy = self._scene(2.0)

        mass_free = (light.separate(flock_light) * s.separation_weight
                     + light.steer(light.home) * s.centering_weight * 30.0)

        acc_light = light.accumulate(flock_light)
        acc_heavy = heavy.accumulate(flock_heavy)

        np.testing.assert_allclose(acc_heavy, mass_free + (acc_light - mass_free) / 2,
                                   rtol=1e-10, atol=1e-14)

    def test_non_positive_mass_is_rejected(self):
        with pytest.raises(ConfigError):
            make_agent((0.0, 0.0, 0.0), mass=0.0)
        with pytest.raises(ConfigError):
            make_agent((0.0, 0.0, 0.0), mass=-1.0)


class TestIntegration:

    def test_at_rest_stays_put(self):
        agent = make_agent((7.0, -3.0, 2.0))
        agent.integrate()
        np.testing.assert_array_equal(agent.position, [7.0, -3.0, 2.0])
        np.testing.assert_array_equal(agent.velocity, np.zeros(3))

    def test_euler_step_and_reset(self):
        agent = make_agent((1.0, 0.0, 0.0), velocity=(0.0, 1.0, 0.0))
        agent.acceleration = np.array([0.5, 0.0, 0.0])

        agent.integrate()

        np.testing.assert_allclose(agent.velocity, [0.5, 1.0, 0.0])
        np.testing.assert_allclose(agent.position, [1.5, 1.0, 0.0])
        np.testing.assert_array_equal(agent.acceleration, np.zeros(3))

    def test_step_returns_position_and_facing(self):
        agent = make_agent((0.0, 0.0, 0.0))
        position, facing = agent.step([agent])
        np.testing.assert_array_equal(position, np.zeros(3))
        np.testing.assert_array_equal(facing, np.zeros(3))


class TestFacing:

    def test_position_policy_faces_outward(self):
        agent = make_agent((10.0, 0.0, 0.0), velocity=(0.0, 1.0, 0.0))
        agent.integrate()
        np.testing.assert_array_equal(agent.facing, agent.position)
        assert agent.facing is not agent.position

    def test_velocity_policy_faces_heading(self):
        agent = make_agent((10.0, 0.0, 0.0), velocity=(0.0, 1.0, 0.0),
                           group=Group.B, facing_policy="velocity")
        agent.integrate()
        np.testing.assert_array_equal(agent.facing, [0.0, 1.0, 0.0])

    def test_unknown_policy_is_rejected(self):
        with pytest.raises(ConfigError):
            make_agent((0.0, 0.0, 0.0), facing_policy="sideways")


class TestGroupDefaults:
    """The group's profile supplies mass, home and facing policy."""

    def test_group_b_defaults(self):
        agent = Agent(position=np.array([-90.0, 0.0, 0.0]), velocity=np.array([0.0, 1.0, 0.0]),
                      group=Group.B)
        assert agent.mass == 15.0
        assert agent.facing_policy == "velocity"
        np.testing.assert_array_equal(agent.home, [50.0, 0.0, 0.0])
        np.testing.assert_array_equal(agent.facing, [0.0, 1.0, 0.0])

    def test_group_a_defaults(self):
        agent = Agent(position=np.array([90.0, 0.0, 0.0]), group=Group.A)
        assert agent.mass == 1.0
        assert agent.facing_policy == "position"
        np.testing.assert_array_equal(agent.home, [0.0, 0.0, 0.0])

    def test_mismatched_facing_is_rejected(self):
        with pytest.raises(ConfigError, match="Group B"):
            Agent(group=Group.B, facing_policy="position")
        with pytest.raises(ConfigError, match="Group A"):
            Agent(group=Group.A, facing_policy="velocity")

    def test_custom_profile_sets_policy(self):
        profile = GroupProfile(mass=3.0, home=(1.0, 2.0, 3.0), spawn_x=(0.0, 1.0),
                               spawn_y=(0.0, 1.0), spawn_z=(0.0, 0.0), facing="velocity")
        agent = Agent(group=Group.A, profile=profile)
        assert agent.mass == 3.0
        assert agent.facing_policy == "velocity"
        np.testing.assert_array_equal(agent.home, [1.0, 2.0, 3.0])

    def test_explicit_home_and_mass_override_profile(self):
        agent = Agent(group=Group.B, mass=2.0, home=np.array([0.0, 5.0, 0.0]))
        assert agent.mass == 2.0
        assert agent.facing_policy == "velocity"
        np.testing.assert_array_equal(agent.home, [0.0, 5.0, 0.0])
