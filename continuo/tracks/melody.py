"""Motif-driven melody generator.

Each bar offers eight eighth-note slots. Strong slots (beats 1 and 3) are
kept more often than weak ones, and the last slot of a closing answer bar is
dropped so the phrase can breathe. Every kept slot then picks a pitch from
one of four sources, in order of priority:

1. the phrase's resolution degree, for the closing note of a phrase,
2. a random chord tone, on a strong beat,
3. the next degree of the (varied) motif, most of the time,
4. a chromatic step toward the chord root, or a weighted scale step.

The chosen pitch is folded into the style's register and large leaps are
usually cut back to two or three semitones.
"""

import math
import random
import typing

import continuo.constants.ticks
import continuo.events
import continuo.humanize
import continuo.motif
import continuo.styles
import continuo.theory
import continuo.tracks.bar


CANDIDATE_STEPS = (0, 2, 4, 6, 8, 10, 12, 14)
STRONG_STEPS = (0, 8)
REST_STEP = 14

STRONG_BEAT_BOOST = 1.3
ANSWER_DENSITY = 0.7

# Chance of keeping a leap wider than the style allows.
LEAP_KEEP_CHANCE = 0.15

JAZZ_SWING_TICKS = 8

AMBIENT_DURATIONS = (
	continuo.events.Duration.QUARTER,
	continuo.events.Duration.HALF,
	continuo.events.Duration.QUARTER,
)

DEFAULT_DURATIONS = (
	continuo.events.Duration.EIGHTH,
	continuo.events.Duration.EIGHTH,
	continuo.events.Duration.QUARTER,
	continuo.events.Duration.EIGHTH,
	continuo.events.Duration.SIXTEENTH,
)


def fold_into_range (midi: int, low: int, high: int) -> int:

	"""Shift a note by whole octaves until it lies within ``low..high``."""

	while midi < low:
		midi += 12

	while midi > high:
		midi -= 12

	return midi


def choose_steps (ctx: continuo.tracks.bar.BarContext, effective_density: float, rng: random.Random) -> typing.List[int]:

	"""Return the sixteenth-note steps that carry a melody note this bar."""

	closing_answer = ctx.phrase.is_answer and _ends_phrase(ctx.bar)
	weak_chance = effective_density * (ANSWER_DENSITY if closing_answer else 1.0)

	steps = [
		step for step in CANDIDATE_STEPS
		if rng.random() < (effective_density * STRONG_BEAT_BOOST if step in STRONG_STEPS else weak_chance)
	]

	if closing_answer and steps and steps[-1] == REST_STEP:
		steps.pop()

	return steps


def _ends_phrase (bar: int) -> bool:

	return (bar + 1) % 2 == 0


def generate_melody (
	events: typing.List[continuo.events.NoteEvent],
	ctx: continuo.tracks.bar.BarContext,
	scale: typing.Sequence[str],
	motif: continuo.motif.Motif,
	last_note: str,
	effective_density: float,
	rng: random.Random
) -> str:

	"""
	Write one bar of melody and return the last pitch played.

	Parameters:
		events: Melody event list to append to.
		ctx: The bar being written.
		scale: Pitch names of the key's scale.
		motif: The motif already varied for this bar.
		last_note: Pitch the line continues from.
		effective_density: Style note density scaled by the section.
		rng: Random source.

	Returns:
		The final pitch of the bar, or ``last_note`` (folded into the
		style's register) when the bar is silent.
	"""

	params = ctx.table.params
	low, high = params.lowest_melody_midi, params.highest_melody_midi
	style = ctx.style
	phrase = ctx.phrase
	ends_phrase = _ends_phrase(ctx.bar)

	chord = ctx.chord_notes
	chord_pcs = {continuo.theory.pitch_class(note) for note in chord}
	scale_pcs = [continuo.theory.pitch_class(note) for note in scale]

	steps = choose_steps(ctx, effective_density, rng)

	current = fold_into_range(continuo.theory.note_to_midi(last_note), low, high)
	motif_index = 0
	phrase_target = continuo.theory.note_to_midi(scale[phrase.target_resolution % len(scale)])

	for i, step in enumerate(steps):

		closing_note = ends_phrase and i == len(steps) - 1
		strong = step in STRONG_STEPS

		if closing_note:
			target = phrase_target

		elif strong:
			chord_pc = continuo.theory.pitch_class(rng.choice(chord))

			if chord_pc in scale_pcs:
				degree = scale_pcs.index(chord_pc)
			elif motif_index < len(motif):
				degree = motif[motif_index]
				motif_index += 1
			else:
				degree = 0

			target = continuo.theory.note_to_midi(scale[degree % len(scale)])

		elif motif_index < len(motif) and rng.random() > 0.4:
			target = continuo.theory.note_to_midi(scale[motif[motif_index] % len(scale)])
			motif_index += 1

		elif any(s in STRONG_STEPS for s in steps[i + 1:]):
			# Lean a semitone toward the chord root ahead of the next downbeat.
			root = continuo.theory.note_to_midi(chord[0])
			target = current + (1 if root > current else -1)

		else:
			direction = 1 if rng.random() > 0.5 else -1
			walked = continuo.theory.get_next_melodic_note(
				continuo.theory.midi_to_note(current),
				scale,
				chord,
				direction = direction,
				leap = rng.random() > 0.7,
				rng = rng
			)
			target = continuo.theory.note_to_midi(walked)

		midi = fold_into_range(target, low, high)

		if abs(midi - current) > ctx.table.max_melodic_interval and rng.random() > LEAP_KEEP_CHANCE:
			direction = 1 if midi > current else -1
			midi = current + direction * (3 if rng.random() > 0.5 else 2)

		velocity = ctx.base_velocity

		if midi % 12 in chord_pcs:
			velocity += 8

		if strong:
			velocity += 5

		progress = i / max(1, len(steps) - 1)

		if phrase.is_question:
			velocity += math.floor(progress * 8)
		else:
			velocity -= math.floor(progress * 6)

		offset = 0

		if style is continuo.styles.Style.JAZZ and not strong:
			offset = JAZZ_SWING_TICKS
		elif style is continuo.styles.Style.LOFI:
			offset = rng.randrange(6) + 2

		velocity = continuo.humanize.humanize_velocity(velocity, 10, rng)

		if closing_note and phrase.is_answer:
			duration = continuo.events.Duration.QUARTER
		elif strong:
			duration = continuo.events.Duration.QUARTER if rng.random() > 0.5 else continuo.events.Duration.EIGHTH
		else:
			duration = rng.choice(AMBIENT_DURATIONS if style is continuo.styles.Style.AMBIENT else DEFAULT_DURATIONS)

		tick = ctx.start_tick + step * continuo.constants.ticks.TICKS_PER_SIXTEENTH + offset
		jitter = 10 if style is continuo.styles.Style.LOFI else 6

		continuo.events.add_note(
			events,
			continuo.events.TrackRole.MELODY,
			[continuo.theory.midi_to_note(midi)],
			duration,
			velocity,
			continuo.humanize.humanize_timing(tick, jitter, rng)
		)

		current = midi

	return continuo.theory.midi_to_note(current)
