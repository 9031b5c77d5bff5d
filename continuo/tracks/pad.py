import math
import random
import typing

import continuo.events
import continuo.form
import continuo.humanize
import continuo.styles
import continuo.tracks.bar


PAD_STYLES = (continuo.styles.Style.AMBIENT, continuo.styles.Style.ELECTRONIC)
PAD_SECTIONS = (continuo.form.Section.INTRO, continuo.form.Section.OUTRO)


def pad_enabled (ctx: continuo.tracks.bar.BarContext) -> bool:

	"""
	Return True if the pad plays in this bar.

	The section must allow a pad, and then only atmospheric styles keep it
	throughout; other styles use it to frame the intro and outro.
	"""

	if not ctx.section_config.pad:
		return False

	return ctx.style in PAD_STYLES or ctx.section in PAD_SECTIONS


def generate_pad (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	rng: random.Random
) -> None:

	"""
	Hold the upper chord voicing for the whole bar at about 40% of the bar velocity.
	"""

	swell = 1.1 if ctx.section is continuo.form.Section.CLIMAX else 0.9
	velocity = math.floor(ctx.base_velocity * swell * 0.4)

	continuo.events.add_note(
		events,
		continuo.events.TrackRole.PAD,
		ctx.chord_notes_high,
		continuo.events.Duration.WHOLE,
		continuo.humanize.humanize_velocity(velocity, 5, rng),
		ctx.start_tick
	)
