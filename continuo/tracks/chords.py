import math
import random
import typing

import continuo.constants.ticks
import continuo.events
import continuo.form
import continuo.humanize
import continuo.styles
import continuo.tracks.bar


# Intro and outro chords are sparser, the climax fuller.
SECTION_SPARSITY: typing.Dict[continuo.form.Section, float] = {
	continuo.form.Section.INTRO: 0.5,
	continuo.form.Section.VERSE: 1.0,
	continuo.form.Section.BUILD: 1.0,
	continuo.form.Section.CLIMAX: 1.2,
	continuo.form.Section.OUTRO: 0.6,
}

# Sixteenth-note steps of syncopated stabs.
STAB_STEPS: typing.Dict[continuo.form.Section, typing.Tuple[int, ...]] = {
	continuo.form.Section.INTRO: (0, 8),
	continuo.form.Section.CLIMAX: (0, 2, 4, 6, 8, 10, 12, 14),
}
DEFAULT_STAB_STEPS = (0, 3, 6, 10, 14)

JAZZ_SWING_TICKS = 8


def generate_chords (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	rng: random.Random
) -> None:

	"""
	Write one bar of the chord track using the style's voicing strategy.
	"""

	style = ctx.style
	sparsity = SECTION_SPARSITY[ctx.section]

	if style is continuo.styles.Style.AMBIENT:
		_slow_arpeggio(events, ctx, sparsity, rng)

	elif style is continuo.styles.Style.ELECTRONIC:
		_fast_arpeggio(events, ctx, sparsity, rng)

	elif style in (continuo.styles.Style.LOFI, continuo.styles.Style.JAZZ):
		_syncopated_stabs(events, ctx, sparsity, rng)

	else:
		_block_chords(events, ctx, sparsity, rng)


def _arpeggio_shape (section: continuo.form.Section) -> typing.List[typing.List[int]]:

	"""Up-and-down in the climax, straight up elsewhere."""

	name = "up_down" if section is continuo.form.Section.CLIMAX else "up"

	return continuo.styles.ARPEGGIO_PATTERNS[name]


def _slow_arpeggio (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	sparsity: float,
	rng: random.Random
) -> None:

	"""Half notes in the intro, quarter-note spacing otherwise.

	Later steps of a pattern may ring on into the following bar.
	"""

	intro = ctx.section is continuo.form.Section.INTRO
	spacing = continuo.constants.ticks.TICKS_PER_HALF if intro else continuo.constants.ticks.TICKS_PER_QUARTER
	duration = continuo.events.Duration.HALF if intro else continuo.events.Duration.QUARTER
	chord = ctx.chord_notes

	for i, indices in enumerate(_arpeggio_shape(ctx.section)):

		continuo.events.add_note(
			events,
			continuo.events.TrackRole.CHORDS,
			[chord[idx % len(chord)] for idx in indices],
			duration,
			continuo.humanize.humanize_velocity(math.floor(ctx.base_velocity * 0.6 * sparsity), 8, rng),
			continuo.humanize.humanize_timing(ctx.start_tick + i * spacing, 10, rng)
		)


def _fast_arpeggio (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	sparsity: float,
	rng: random.Random
) -> None:

	"""Four notes a bar in the intro, sixteen in the climax, eight otherwise."""

	if ctx.section is continuo.form.Section.INTRO:
		note_count = 4
	elif ctx.section is continuo.form.Section.CLIMAX:
		note_count = 16
	else:
		note_count = 8

	shape = _arpeggio_shape(ctx.section)
	chord = ctx.chord_notes
	spacing = continuo.constants.ticks.TICKS_PER_BAR // note_count

	for i in range(note_count):

		note = chord[shape[i % len(shape)][0] % len(chord)]

		continuo.events.add_note(
			events,
			continuo.events.TrackRole.CHORDS,
			[note],
			continuo.events.Duration.SIXTEENTH,
			continuo.humanize.humanize_velocity(math.floor(ctx.base_velocity * 0.7 * sparsity), 10, rng),
			continuo.humanize.humanize_timing(ctx.start_tick + i * spacing, 3, rng)
		)


def _syncopated_stabs (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	sparsity: float,
	rng: random.Random
) -> None:

	"""Short chord hits on fixed offsets, some skipped, jazz offbeats swung late."""

	steps = STAB_STEPS.get(ctx.section, DEFAULT_STAB_STEPS)
	skip_threshold = 0.3 * (2 - sparsity)

	for step in steps:

		if rng.random() <= skip_threshold:
			continue

		swing = JAZZ_SWING_TICKS if ctx.style is continuo.styles.Style.JAZZ and step % 2 == 1 else 0
		tick = ctx.start_tick + step * continuo.constants.ticks.TICKS_PER_SIXTEENTH + swing

		continuo.events.add_note(
			events,
			continuo.events.TrackRole.CHORDS,
			ctx.chord_notes,
			continuo.events.Duration.EIGHTH,
			continuo.humanize.humanize_velocity(math.floor(ctx.base_velocity * 0.65 * sparsity), 12, rng),
			continuo.humanize.humanize_timing(tick, 8, rng)
		)


def _block_chords (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	sparsity: float,
	rng: random.Random
) -> None:

	"""A held whole-bar chord, or quarter-note hits for styles without sustain."""

	framing = ctx.section in (continuo.form.Section.INTRO, continuo.form.Section.OUTRO)

	if ctx.table.params.use_sustain or framing:

		continuo.events.add_note(
			events,
			continuo.events.TrackRole.CHORDS,
			ctx.chord_notes,
			continuo.events.Duration.WHOLE,
			continuo.humanize.humanize_velocity(math.floor(ctx.base_velocity * 0.7 * sparsity), 5, rng),
			ctx.start_tick
		)
		return

	beats = 4 if ctx.section in (continuo.form.Section.CLIMAX, continuo.form.Section.VERSE) else 2

	for beat in range(beats):

		continuo.events.add_note(
			events,
			continuo.events.TrackRole.CHORDS,
			ctx.chord_notes,
			continuo.events.Duration.QUARTER,
			continuo.humanize.humanize_velocity(math.floor(ctx.base_velocity * 0.65 * sparsity), 8, rng),
			continuo.humanize.humanize_timing(ctx.start_tick + beat * continuo.constants.ticks.TICKS_PER_QUARTER, 5, rng)
		)
