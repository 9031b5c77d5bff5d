"""Small random timing and velocity perturbations.

Every generator passes its quantized ticks and velocities through these
helpers so repeated bars never sound machine-identical. Amounts are in
engine units: ticks (32 per sixteenth note) and MIDI velocity steps.
"""

import math
import random

import continuo.constants.velocity


def humanize_timing (tick: int, amount: int, rng: random.Random) -> int:

	"""Shift a tick by up to ``amount`` in either direction, never below zero."""

	varied = tick + math.floor((rng.random() - 0.5) * amount * 2)

	return max(0, varied)


def humanize_velocity (velocity: int, amount: int, rng: random.Random) -> int:

	"""Vary a velocity by up to ``amount`` either way, clamped to the MIDI range."""

	varied = velocity + math.floor((rng.random() - 0.5) * amount * 2)

	return min(
		continuo.constants.velocity.MAX_VELOCITY,
		max(continuo.constants.velocity.MIN_VELOCITY, varied)
	)
