"""Bar-by-bar loudness model.

A :class:`Dynamics` value carries a continuous ``velocity_trend`` plus the
coarse level and direction derived from it. The orchestrator reads it to set
each bar's base velocity (:func:`base_velocity`) and then advances it one bar
(:func:`evolve_dynamics`). Values are immutable; evolving returns a new one.

Across a segment the trend swells early, drifts through the middle, swells
again toward the end and finally fades, so a chain of segments breathes
rather than sitting at one level.
"""

import dataclasses
import enum
import math
import random
import typing

import continuo.constants.velocity
import continuo.sequence_utils
import continuo.theory


TREND_MIN = -1.0
TREND_MAX = 1.2

LOUD_THRESHOLD = 0.6
SOFT_THRESHOLD = -0.2


class DynamicsLevel (enum.Enum):

	"""Coarse loudness band."""

	SOFT = "soft"
	MEDIUM = "medium"
	LOUD = "loud"


class DynamicsDirection (enum.Enum):

	"""Whether the trend is currently rising, falling or holding."""

	BUILDING = "building"
	FADING = "fading"
	STABLE = "stable"


LEVEL_BASE_VELOCITY: typing.Dict[DynamicsLevel, int] = {
	DynamicsLevel.SOFT: 55,
	DynamicsLevel.MEDIUM: 72,
	DynamicsLevel.LOUD: 88,
}


def level_for_trend (velocity_trend: float) -> DynamicsLevel:

	"""Derive the loudness band from a velocity trend."""

	if velocity_trend > LOUD_THRESHOLD:
		return DynamicsLevel.LOUD

	if velocity_trend < SOFT_THRESHOLD:
		return DynamicsLevel.SOFT

	return DynamicsLevel.MEDIUM


@dataclasses.dataclass(frozen=True)
class Dynamics:

	"""
	Loudness state threaded from bar to bar and from segment to segment.

	Attributes:
		level: Loudness band, re-derived from the trend every bar.
		direction: Current movement of the trend.
		velocity_trend: Continuous loudness offset within ``[-1.0, 1.2]``.
	"""

	level: DynamicsLevel = DynamicsLevel.MEDIUM
	direction: DynamicsDirection = DynamicsDirection.STABLE
	velocity_trend: float = 0.0

	@classmethod
	def initial (cls) -> "Dynamics":

		"""Return the state a fresh piece starts from (medium, stable, no trend)."""

		return cls()

	def to_dict (self) -> typing.Dict[str, typing.Any]:

		"""Return a JSON-safe representation."""

		return {
			"level": self.level.value,
			"direction": self.direction.value,
			"velocityTrend": self.velocity_trend,
		}

	@classmethod
	def from_dict (cls, data: typing.Optional[typing.Mapping[str, typing.Any]]) -> "Dynamics":

		"""Rebuild from :meth:`to_dict` output; missing or unknown fields use the initial state."""

		if not data:
			return cls.initial()

		trend = float(data.get("velocityTrend", 0.0))
		trend = continuo.sequence_utils.clamp(trend, TREND_MIN, TREND_MAX)

		return cls(
			level = continuo.theory.resolve_name(DynamicsLevel, data.get("level"), level_for_trend(trend)),
			direction = continuo.theory.resolve_name(DynamicsDirection, data.get("direction"), DynamicsDirection.STABLE),
			velocity_trend = trend,
		)


def base_velocity (dynamics: Dynamics, bar: int, total_bars: int, velocity_mod: int = 0) -> int:

	"""Return the base velocity for a bar.

	Combines the level's base, the trend (x10), a small rise and fall across
	each four-bar phrase (0, 3, 3, 0), a sine arc across the whole segment
	peaking at +8 in the middle, and the section's ``velocity_mod``. The sum is
	held within 40-100.
	"""

	base = LEVEL_BASE_VELOCITY[dynamics.level]

	phrase_position = bar % 4
	phrase_dynamic = phrase_position * 3 if phrase_position < 2 else (3 - phrase_position) * 3

	progress = bar / max(1, total_bars)
	arc_dynamic = math.sin(progress * math.pi) * 8

	velocity = base + dynamics.velocity_trend * 10 + phrase_dynamic + arc_dynamic + velocity_mod

	return int(continuo.sequence_utils.clamp(
		velocity,
		continuo.constants.velocity.BASE_VELOCITY_FLOOR,
		continuo.constants.velocity.BASE_VELOCITY_CEILING
	))


def evolve_dynamics (dynamics: Dynamics, bar: int, total_bars: int, rng: random.Random) -> Dynamics:

	"""Advance the loudness state by one bar.

	By position within the segment:

	- first 20%: building, trend +0.15 (up to 1.0)
	- 20-70%: stable, trend drifts randomly by at most ±0.05
	- 70-90%: building again, trend +0.1 (up to 1.2)
	- last 10%: fading, trend -0.1 (down to -0.3)
	"""

	progress = bar / max(1, total_bars)
	trend = dynamics.velocity_trend

	if progress < 0.2:
		direction = DynamicsDirection.BUILDING
		trend = min(1.0, trend + 0.15)

	elif progress < 0.7:
		direction = DynamicsDirection.STABLE
		trend += (rng.random() - 0.5) * 0.1

	elif progress < 0.9:
		direction = DynamicsDirection.BUILDING
		trend = min(TREND_MAX, trend + 0.1)

	else:
		direction = DynamicsDirection.FADING
		trend = max(-0.3, trend - 0.1)

	trend = continuo.sequence_utils.clamp(trend, TREND_MIN, TREND_MAX)

	return Dynamics(level=level_for_trend(trend), direction=direction, velocity_trend=trend)
