import math
import random
import typing

import continuo.constants.ticks
import continuo.events
import continuo.form
import continuo.humanize
import continuo.theory
import continuo.tracks.bar


BASS_OCTAVE = 2

# Ticks the lofi groove sits behind the beat.
LAZY_OFFSET = 5

WALKING_SWING_TICKS = 12

SIXTEENTH = continuo.constants.ticks.TICKS_PER_SIXTEENTH

Step = typing.Tuple[int, str, continuo.events.Duration]


class BassTones (typing.NamedTuple):

	"""Chord functions of the current bar, spelled in the bass register."""

	root: str
	third: str
	fifth: str
	octave_up: str
	approach: str


def bass_tones (ctx: continuo.tracks.bar.BarContext, rng: random.Random) -> BassTones:

	"""
	Spell root, third and fifth in octave 2, the root an octave up, and a
	chromatic neighbour of the next chord's root.
	"""

	root = continuo.theory.strip_octave(ctx.bass_root)

	def in_octave (pitch: str, octave: int = BASS_OCTAVE) -> str:
		return f"{continuo.theory.strip_octave(pitch)}{octave}"

	next_root_midi = continuo.theory.note_to_midi(f"{ctx.next_chord_root}{BASS_OCTAVE}")
	approach_midi = continuo.theory.get_approach_note(next_root_midi, (), "chromatic", rng)

	return BassTones(
		root = in_octave(root),
		third = in_octave(ctx.chord_notes[1 % len(ctx.chord_notes)]),
		fifth = in_octave(ctx.chord_notes[2 % len(ctx.chord_notes)]),
		octave_up = in_octave(root, BASS_OCTAVE + 1),
		approach = continuo.theory.midi_to_note(approach_midi),
	)


def generate_bass (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	rng: random.Random
) -> None:

	"""
	Write one bar of bass using the style's line archetype.

	Intro and outro bars always hold a single root for the whole bar.
	"""

	tones = bass_tones(ctx, rng)
	velocity = math.floor(ctx.base_velocity * 0.85)

	if ctx.section in (continuo.form.Section.INTRO, continuo.form.Section.OUTRO):
		_note(events, tones.root, continuo.events.Duration.WHOLE, continuo.humanize.humanize_velocity(velocity - 10, 5, rng), ctx.start_tick)
		return

	builder = _PATTERN_BUILDERS.get(ctx.table.bass_pattern.name, _sustained)
	builder(events, ctx, tones, velocity, rng)


def _note (
	events: typing.List[continuo.events.NoteEvent],
	pitch: str,
	duration: continuo.events.Duration,
	velocity: int,
	tick: int
) -> None:

	continuo.events.add_note(events, continuo.events.TrackRole.BASS, [pitch], duration, velocity, tick)


def _walking (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	tones: BassTones,
	velocity: int,
	rng: random.Random
) -> None:

	"""Four quarter notes ending on an approach to the next root, beats 2 and 4 swung late."""

	if ctx.section is continuo.form.Section.CLIMAX:
		line = [tones.root, tones.third, tones.fifth, tones.approach]
	else:
		line = [tones.root, tones.fifth, tones.root, tones.approach]

	for i, pitch in enumerate(line):

		swing = WALKING_SWING_TICKS if i in (1, 3) else 0
		tick = ctx.start_tick + i * continuo.constants.ticks.TICKS_PER_QUARTER + swing

		_note(
			events,
			pitch,
			continuo.events.Duration.QUARTER,
			continuo.humanize.humanize_velocity(velocity, 8, rng),
			continuo.humanize.humanize_timing(tick, 10, rng)
		)


def _groove (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	tones: BassTones,
	velocity: int,
	rng: random.Random
) -> None:

	"""A fixed syncopated figure played slightly behind the beat."""

	eighth = continuo.events.Duration.EIGHTH
	sixteenth = continuo.events.Duration.SIXTEENTH

	steps: typing.List[Step]

	if ctx.section is continuo.form.Section.CLIMAX:
		steps = [
			(0, tones.root, eighth),
			(2, tones.root, sixteenth),
			(4, tones.third, eighth),
			(6, tones.fifth, eighth),
			(8, tones.root, eighth),
			(10, tones.fifth, sixteenth),
			(12, tones.third, eighth),
			(14, tones.root, eighth),
		]
	else:
		steps = [
			(0, tones.root, eighth),
			(3, tones.root, sixteenth),
			(6, tones.fifth, eighth),
			(8, tones.root, eighth),
			(11, tones.third, sixteenth),
			(14, tones.fifth, eighth),
		]

	for step, pitch, duration in steps:

		_note(
			events,
			pitch,
			duration,
			continuo.humanize.humanize_velocity(velocity, 10, rng),
			continuo.humanize.humanize_timing(ctx.start_tick + step * SIXTEENTH + LAZY_OFFSET, 8, rng)
		)


def _offbeat (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	tones: BassTones,
	velocity: int,
	rng: random.Random
) -> None:

	"""Root on the beat, octave (or fifth in the climax) off it."""

	climax = ctx.section is continuo.form.Section.CLIMAX
	note_count = 16 if climax else 8
	spacing = continuo.constants.ticks.TICKS_PER_BAR // note_count
	duration = continuo.events.Duration.SIXTEENTH if climax else continuo.events.Duration.EIGHTH
	accent = 15 if climax else 10

	for i in range(note_count):

		if i % 2 == 0:
			pitch = tones.root
		elif climax and i % 4 == 1:
			pitch = tones.fifth
		else:
			pitch = tones.octave_up

		_note(
			events,
			pitch,
			duration,
			continuo.humanize.humanize_velocity(velocity + accent, 5, rng),
			continuo.humanize.humanize_timing(ctx.start_tick + i * spacing, 3, rng)
		)


def _alberti (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	tones: BassTones,
	velocity: int,
	rng: random.Random
) -> None:

	"""Eight broken-chord eighth notes."""

	root, third, fifth = tones.root, tones.third, tones.fifth

	if ctx.section is continuo.form.Section.CLIMAX:
		figure = [root, fifth, third, fifth, root, third, fifth, third]
	else:
		figure = [root, fifth, third, fifth, root, fifth, third, fifth]

	for i, pitch in enumerate(figure):

		_note(
			events,
			pitch,
			continuo.events.Duration.EIGHTH,
			continuo.humanize.humanize_velocity(velocity - 10, 8, rng),
			continuo.humanize.humanize_timing(ctx.start_tick + i * continuo.constants.ticks.TICKS_PER_EIGHTH, 5, rng)
		)


def _sustained (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	tones: BassTones,
	velocity: int,
	rng: random.Random
) -> None:

	"""A held root; in the climax, root then octave as two half notes."""

	if ctx.section is continuo.form.Section.CLIMAX:

		half = continuo.events.Duration.HALF

		_note(events, tones.root, half, continuo.humanize.humanize_velocity(velocity - 10, 5, rng), ctx.start_tick)
		_note(events, tones.octave_up, half, continuo.humanize.humanize_velocity(velocity - 5, 5, rng), ctx.start_tick + half.ticks)
		return

	_note(events, tones.root, continuo.events.Duration.WHOLE, continuo.humanize.humanize_velocity(velocity - 15, 5, rng), ctx.start_tick)


_PATTERN_BUILDERS: typing.Dict[str, typing.Callable[..., None]] = {
	"walking": _walking,
	"groove": _groove,
	"offbeat": _offbeat,
	"alberti": _alberti,
	"sustained": _sustained,
}
