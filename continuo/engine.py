"""Segment orchestrator.

:func:`generate_segment` walks the bars of one segment in order. For each
bar it resolves the chord from the progression, the section and phrase from
the song form, and the bar velocity from the dynamics state, then asks each
enabled track generator to append that bar's notes. Between bars it advances
the progression (and with it the motif variation) and evolves the dynamics.

After the last bar the ending state is packaged as a
:class:`~continuo.context.SegmentInfo`, from which the caller can build the
:class:`~continuo.context.ContinuationContext` for the next segment.

Example:
	```python
	import continuo.engine

	options = continuo.engine.GenerationOptions(bars=16, key="D", mode="dorian", style="lofi", seed=7)
	segment = continuo.engine.generate_segment(options)

	segment.segment_info.duration_seconds   # → 42.666...
	segment.to_midi_file().save("lofi.mid")
	```
"""

import dataclasses
import logging
import random
import typing

import mido

import continuo.constants.ticks
import continuo.context
import continuo.dynamics
import continuo.events
import continuo.form
import continuo.midi_file
import continuo.motif
import continuo.styles
import continuo.theory
import continuo.tracks.bar
import continuo.tracks.bass
import continuo.tracks.chords
import continuo.tracks.drums
import continuo.tracks.melody
import continuo.tracks.pad


logger = logging.getLogger(__name__)


CHORD_OCTAVE = 3
PAD_OCTAVE = 4
SCALE_OCTAVE = 4
BASS_OCTAVE = 2

# Closing bars whose notes are remembered for the next segment.
ENDING_BARS = 2


@dataclasses.dataclass(frozen=True)
class GenerationOptions:

	"""
	Parameters of one segment.

	Musical names are resolved leniently (unknown style → ambient, unknown
	mode → major, unknown key → C). Only structurally impossible values raise.

	Attributes:
		bars: Length of the segment in bars.
		key: Tonic name, sharps or flats (``"F#"``, ``"Bb"``).
		mode: Mode name (``"major"``, ``"dorian"``, ...).
		tempo: Tempo in BPM.
		style: Style name (``"ambient"``, ``"lofi"``, ...).
		total_bars_offset: Bars already generated in the same piece.
		extension_direction: Energy shape of a continuing segment.
		seed: Seed for a reproducible segment when no ``rng`` is passed.
	"""

	bars: int = 16
	key: str = "C"
	mode: typing.Union[continuo.theory.Mode, str] = "major"
	tempo: float = 90
	style: typing.Union[continuo.styles.Style, str] = "ambient"
	total_bars_offset: int = 0
	extension_direction: typing.Union[continuo.form.ExtensionDirection, str] = "continue"
	seed: typing.Optional[int] = None

	def __post_init__ (self) -> None:

		if self.bars < 1:
			raise ValueError("A segment needs at least one bar")

		if self.tempo <= 0:
			raise ValueError("Tempo must be positive")

		if self.total_bars_offset < 0:
			raise ValueError("Bar offset cannot be negative")


@dataclasses.dataclass(frozen=True)
class Segment:

	"""
	A generated segment: five note-event tracks and the state it ended in.

	Attributes:
		tracks: Events per role, in the order they were generated.
		segment_info: Ending state for continuation.
		options: Options the segment was generated with.
		sections: Section of each bar.
	"""

	tracks: typing.Dict[continuo.events.TrackRole, typing.Tuple[continuo.events.NoteEvent, ...]]
	segment_info: continuo.context.SegmentInfo
	options: GenerationOptions
	sections: typing.Tuple[continuo.form.Section, ...]

	def events (self, role: continuo.events.TrackRole) -> typing.Tuple[continuo.events.NoteEvent, ...]:

		"""Return the events of one track."""

		return self.tracks[role]

	def to_midi_file (self) -> mido.MidiFile:

		"""Encode the segment as a type 1 MIDI file."""

		return continuo.midi_file.build_midi_file(self)

	def to_midi_bytes (self) -> bytes:

		"""Return the encoded MIDI file as bytes."""

		return continuo.midi_file.to_bytes(self.to_midi_file())

	def to_base64 (self) -> str:

		"""Return the encoded MIDI file as base64 text."""

		return continuo.midi_file.to_base64(self.to_midi_file())


def duration_seconds (bars: int, tempo: float) -> float:

	"""Playing time of ``bars`` bars of 4/4 at ``tempo`` BPM."""

	return bars * continuo.constants.ticks.BEATS_PER_BAR / tempo * 60


def generate_segment (
	options: typing.Optional[GenerationOptions] = None,
	context: typing.Optional[continuo.context.ContinuationContext] = None,
	rng: typing.Optional[random.Random] = None
) -> Segment:

	"""
	Generate one segment.

	Parameters:
		options: Segment parameters. Defaults to ``GenerationOptions()``.
		context: State to continue from. ``None`` starts a fresh piece. The
			context's progression position, dynamics, motif and first
			remembered melody note seed the segment; key, mode, tempo and
			style always come from ``options``.
		rng: Random source. When omitted, one is seeded from ``options.seed``.

	Returns:
		The generated :class:`Segment`.
	"""

	if options is None:
		options = GenerationOptions()

	if context is None:
		context = continuo.context.ContinuationContext.empty(options)

	if rng is None:
		rng = random.Random(options.seed)

	table = continuo.styles.get_style_table(options.style)
	key = continuo.theory.resolve_key(options.key)
	mode = continuo.theory.Mode.resolve(options.mode)
	direction = continuo.form.ExtensionDirection.resolve(options.extension_direction)
	bars = options.bars
	offset = options.total_bars_offset

	scale = continuo.theory.get_scale(key, mode, SCALE_OCTAVE)
	progression = table.progression

	position = context.progression_position % len(progression)
	dynamics = context.dynamics

	if context.motif:
		motif = context.motif
	else:
		motif = continuo.motif.Motif.generate(len(scale), rng)

	last_melody_note = context.last_melody_note or scale[motif[0] % len(scale)]
	variation = 0

	tracks = continuo.events.empty_tracks()
	sections: typing.List[continuo.form.Section] = []

	ending_melody: typing.List[continuo.context.NoteMemory] = []
	ending_bass: typing.List[continuo.context.NoteMemory] = []
	ending_chords: typing.List[continuo.context.ChordMemory] = []
	ending_chord = (key, continuo.theory.DEFAULT_CHORD_TYPE)

	for bar in range(bars):

		degree, chord_type = progression[position]
		next_degree, next_type = progression[(position + 1) % len(progression)]

		chord_notes = tuple(continuo.theory.get_chord_from_degree(key, mode, degree, chord_type, CHORD_OCTAVE))
		chord_notes_high = tuple(continuo.theory.get_chord_from_degree(key, mode, degree, chord_type, PAD_OCTAVE))
		chord_root = continuo.theory.strip_octave(chord_notes[0])
		next_root = continuo.theory.strip_octave(
			continuo.theory.get_chord_from_degree(key, mode, next_degree, next_type, BASS_OCTAVE)[0]
		)

		section = continuo.form.get_song_section(bar, bars, offset, direction)
		config = continuo.form.SECTION_CONFIGS[section]
		phrase = continuo.form.get_phrase_type(bar, rng)
		velocity = continuo.dynamics.base_velocity(dynamics, bar, bars, config.velocity_mod)

		ctx = continuo.tracks.bar.BarContext(
			bar = bar,
			chord_notes = chord_notes,
			chord_notes_high = chord_notes_high,
			bass_root = f"{chord_root}{BASS_OCTAVE}",
			next_chord_root = next_root,
			section = section,
			section_config = config,
			phrase = phrase,
			base_velocity = velocity,
			dynamics = dynamics,
			table = table,
		)

		logger.debug(
			f"Bar {bar + 1}/{bars}: {section.value}, "
			f"{continuo.theory.chord_name(chord_root, chord_type)}, velocity {velocity}"
		)

		fill = continuo.form.is_section_end(bar, bars, offset, direction)
		continuo.tracks.drums.generate_drums(tracks[continuo.events.TrackRole.DRUMS], ctx, rng, add_fill=fill)

		if continuo.tracks.pad.pad_enabled(ctx):
			continuo.tracks.pad.generate_pad(tracks[continuo.events.TrackRole.PAD], ctx, rng)

		if config.chords:
			continuo.tracks.chords.generate_chords(tracks[continuo.events.TrackRole.CHORDS], ctx, rng)

		if config.bass:
			continuo.tracks.bass.generate_bass(tracks[continuo.events.TrackRole.BASS], ctx, rng)

		if config.melody:
			last_melody_note = continuo.tracks.melody.generate_melody(
				tracks[continuo.events.TrackRole.MELODY],
				ctx,
				scale,
				motif.vary(variation, len(scale)),
				last_melody_note,
				table.params.note_density * config.density,
				rng
			)

		if bar >= bars - ENDING_BARS:
			ending_melody.append(continuo.context.NoteMemory(last_melody_note, velocity))
			ending_bass.append(continuo.context.NoteMemory(ctx.bass_root, velocity))
			ending_chords.append(continuo.context.ChordMemory(chord_notes, velocity))

		sections.append(section)
		ending_chord = (chord_root, chord_type)

		if (bar + 1) % table.progression_rate == 0:
			position = (position + 1) % len(progression)
			variation += 1

		dynamics = continuo.dynamics.evolve_dynamics(dynamics, bar, bars, rng)

	info = continuo.context.SegmentInfo(
		bars = bars,
		duration_seconds = duration_seconds(bars, options.tempo),
		ending_notes = continuo.context.LastNotes(
			melody = tuple(ending_melody),
			bass = tuple(ending_bass),
			chords = tuple(ending_chords),
		),
		ending_chord = ending_chord[0],
		ending_chord_type = ending_chord[1],
		progression_position = position,
		dynamics = dynamics,
		motif = motif,
	)

	logger.info(
		f"Generated {bars} bars of {table.style.value} in {key} {mode.value} at {options.tempo} BPM "
		f"({continuo.context.format_duration(info.duration_seconds)})"
	)

	return Segment(
		tracks = {role: tuple(events) for role, events in tracks.items()},
		segment_info = info,
		options = options,
		sections = tuple(sections),
	)
