import math
import random
import typing

import continuo.constants.gm_drums
import continuo.constants.ticks
import continuo.dynamics
import continuo.events
import continuo.form
import continuo.humanize
import continuo.styles
import continuo.tracks.bar


INTENSITY_MULTIPLIERS: typing.Dict[continuo.form.DrumIntensity, float] = {
	continuo.form.DrumIntensity.MINIMAL: 0.6,
	continuo.form.DrumIntensity.LIGHT: 0.8,
	continuo.form.DrumIntensity.FULL: 1.0,
	continuo.form.DrumIntensity.BUILDING: 1.15,
}

DIRECTION_MULTIPLIERS: typing.Dict[continuo.dynamics.DynamicsDirection, float] = {
	continuo.dynamics.DynamicsDirection.BUILDING: 1.1,
	continuo.dynamics.DynamicsDirection.FADING: 0.9,
	continuo.dynamics.DynamicsDirection.STABLE: 1.0,
}

# Probability that a snare, hi-hat or ride hit from the grid is played.
DENSITY_GATES: typing.Dict[continuo.form.DrumIntensity, float] = {
	continuo.form.DrumIntensity.MINIMAL: 0.4,
	continuo.form.DrumIntensity.LIGHT: 0.7,
	continuo.form.DrumIntensity.FULL: 1.0,
	continuo.form.DrumIntensity.BUILDING: 1.0,
}

FILL_START_STEP = 12
GHOST_NOTE_STEPS = (6, 10)
GHOST_NOTE_STYLES = (continuo.styles.Style.LOFI, continuo.styles.Style.JAZZ)


def generate_drums (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	rng: random.Random,
	add_fill: bool = False
) -> None:

	"""
	Write one bar of drums from the style's grid.

	The last four steps are replaced by a snare roll with low-tom accents when
	``add_fill`` is set, which the orchestrator requests on the final bar of a
	section.
	"""

	intensity = ctx.section_config.drums

	if intensity is continuo.form.DrumIntensity.NONE:
		return

	grid = ctx.table.drums
	base_velocity = ctx.base_velocity
	intensity_mult = INTENSITY_MULTIPLIERS[intensity] * DIRECTION_MULTIPLIERS[ctx.dynamics.direction]
	density_gate = DENSITY_GATES[intensity]
	role = continuo.events.TrackRole.DRUMS
	sixteenth = continuo.events.Duration.SIXTEENTH

	def hit (pitch: str, velocity: float, velocity_jitter: int, timing_jitter: int, tick: int) -> None:

		continuo.events.add_note(
			events,
			role,
			[pitch],
			sixteenth,
			continuo.humanize.humanize_velocity(math.floor(velocity), velocity_jitter, rng),
			continuo.humanize.humanize_timing(tick, timing_jitter, rng)
		)

	for step in range(continuo.constants.ticks.STEPS_PER_BAR):

		tick = ctx.start_tick + step * continuo.constants.ticks.TICKS_PER_SIXTEENTH

		if add_fill and step >= FILL_START_STEP:

			# Snare roll rising into the next section.
			hit(continuo.constants.gm_drums.SNARE, base_velocity * intensity_mult * (0.8 + (step - FILL_START_STEP) * 0.1), 5, 2, tick)

			if step in (13, 15):
				hit(continuo.constants.gm_drums.LOW_TOM, base_velocity * intensity_mult * 0.85, 5, 2, tick)

			continue

		if grid.kick[step] and (intensity is not continuo.form.DrumIntensity.MINIMAL or step == 0):
			hit(continuo.constants.gm_drums.KICK, base_velocity * intensity_mult, 5, 2, tick)

		if grid.snare[step] and rng.random() < density_gate:
			hit(continuo.constants.gm_drums.SNARE, base_velocity * 0.9 * intensity_mult, 6, 3, tick)

		if (
			ctx.style in GHOST_NOTE_STYLES
			and intensity is not continuo.form.DrumIntensity.MINIMAL
			and step in GHOST_NOTE_STEPS
			and rng.random() > 0.5
		):
			hit(continuo.constants.gm_drums.SNARE, base_velocity * 0.35, 8, 5, tick)

		if grid.hihat[step] and rng.random() < density_gate:
			offbeat = step % 2 == 1
			open_hat = intensity is continuo.form.DrumIntensity.BUILDING and step % 4 == 2
			pitch = continuo.constants.gm_drums.OPEN_HI_HAT if open_hat else continuo.constants.gm_drums.CLOSED_HI_HAT
			hit(pitch, (base_velocity - 20) * (0.7 if offbeat else 1.0) * intensity_mult, 10, 4, tick)

		if grid.ride is not None and grid.ride[step] and rng.random() < density_gate:
			hit(continuo.constants.gm_drums.RIDE, base_velocity * 0.6 * intensity_mult, 8, 5, tick)
