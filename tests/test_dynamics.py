import random

import pytest

import continuo.dynamics


Dynamics = continuo.dynamics.Dynamics
Level = continuo.dynamics.DynamicsLevel
Direction = continuo.dynamics.DynamicsDirection


@pytest.mark.parametrize("trend, level", [
	(0.0, Level.MEDIUM),
	(0.6, Level.MEDIUM),
	(0.61, Level.LOUD),
	(1.2, Level.LOUD),
	(-0.2, Level.MEDIUM),
	(-0.21, Level.SOFT),
])
def test_level_for_trend (trend: float, level: continuo.dynamics.DynamicsLevel) -> None:

	assert continuo.dynamics.level_for_trend(trend) is level


def test_base_velocity_at_start_of_segment () -> None:

	"""Bar 0 has no phrase or arc contribution, so medium gives 72."""

	assert continuo.dynamics.base_velocity(Dynamics.initial(), 0, 16) == 72


def test_base_velocity_includes_section_modifier () -> None:

	assert continuo.dynamics.base_velocity(Dynamics.initial(), 0, 16, velocity_mod=-15) == 57


def test_base_velocity_arc_peaks_mid_segment () -> None:

	dynamics = Dynamics.initial()

	assert continuo.dynamics.base_velocity(dynamics, 8, 16) > continuo.dynamics.base_velocity(dynamics, 0, 16)


def test_base_velocity_is_clamped () -> None:

	loud = Dynamics(level=Level.LOUD, direction=Direction.BUILDING, velocity_trend=1.2)
	soft = Dynamics(level=Level.SOFT, direction=Direction.FADING, velocity_trend=-1.0)

	for bar in range(16):
		assert continuo.dynamics.base_velocity(loud, bar, 16, velocity_mod=15) == 100
		assert continuo.dynamics.base_velocity(soft, bar, 16, velocity_mod=-20) == 40


def test_evolve_builds_early () -> None:

	evolved = continuo.dynamics.evolve_dynamics(Dynamics.initial(), 0, 20, random.Random(1))

	assert evolved.direction is Direction.BUILDING
	assert evolved.velocity_trend == pytest.approx(0.15)


def test_evolve_fades_at_the_end () -> None:

	start = Dynamics(level=Level.SOFT, direction=Direction.FADING, velocity_trend=-0.25)
	evolved = continuo.dynamics.evolve_dynamics(start, 19, 20, random.Random(1))

	assert evolved.direction is Direction.FADING
	assert evolved.velocity_trend == pytest.approx(-0.3)
	assert evolved.level is Level.SOFT


def test_evolve_secondary_swell_is_capped () -> None:

	start = Dynamics(level=Level.LOUD, direction=Direction.BUILDING, velocity_trend=1.15)
	evolved = continuo.dynamics.evolve_dynamics(start, 15, 20, random.Random(1))

	assert evolved.direction is Direction.BUILDING
	assert evolved.velocity_trend == pytest.approx(1.2)


def test_trend_stays_in_bounds_over_many_segments () -> None:

	rng = random.Random(99)
	dynamics = Dynamics.initial()

	for _ in range(50):
		for bar in range(16):
			dynamics = continuo.dynamics.evolve_dynamics(dynamics, bar, 16, rng)
			assert continuo.dynamics.TREND_MIN <= dynamics.velocity_trend <= continuo.dynamics.TREND_MAX
			assert dynamics.level is continuo.dynamics.level_for_trend(dynamics.velocity_trend)


def test_dict_round_trip () -> None:

	dynamics = Dynamics(level=Level.LOUD, direction=Direction.FADING, velocity_trend=0.75)

	assert dynamics.to_dict() == {"level": "loud", "direction": "fading", "velocityTrend": 0.75}
	assert Dynamics.from_dict(dynamics.to_dict()) == dynamics


def test_from_dict_tolerates_missing_and_unknown_values () -> None:

	assert Dynamics.from_dict(None) == Dynamics.initial()
	assert Dynamics.from_dict({}) == Dynamics.initial()

	restored = Dynamics.from_dict({"level": "deafening", "direction": "sideways", "velocityTrend": 5})

	assert restored.velocity_trend == continuo.dynamics.TREND_MAX
	assert restored.level is Level.LOUD
	assert restored.direction is Direction.STABLE
