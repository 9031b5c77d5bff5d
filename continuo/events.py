import dataclasses
import enum
import typing

import continuo.constants.gm_drums
import continuo.constants.ticks
import continuo.constants.velocity
import continuo.theory


class Duration (enum.Enum):

	"""Symbolic note lengths on the 4/4 grid."""

	WHOLE = "whole"
	HALF = "half"
	QUARTER = "quarter"
	EIGHTH = "eighth"
	SIXTEENTH = "sixteenth"

	@property
	def ticks (self) -> int:

		"""Length in engine ticks (512 per bar)."""

		return _DURATION_TICKS[self]


_DURATION_TICKS: typing.Dict[Duration, int] = {
	Duration.WHOLE: continuo.constants.ticks.TICKS_PER_WHOLE,
	Duration.HALF: continuo.constants.ticks.TICKS_PER_HALF,
	Duration.QUARTER: continuo.constants.ticks.TICKS_PER_QUARTER,
	Duration.EIGHTH: continuo.constants.ticks.TICKS_PER_EIGHTH,
	Duration.SIXTEENTH: continuo.constants.ticks.TICKS_PER_SIXTEENTH,
}


class TrackRole (enum.Enum):

	"""The five simultaneous instrumental parts of a segment."""

	MELODY = "melody"
	CHORDS = "chords"
	BASS = "bass"
	PAD = "pad"
	DRUMS = "drums"

	@property
	def channel (self) -> int:

		"""MIDI channel (0-indexed) the role plays on; drums use the GM percussion channel."""

		return _ROLE_CHANNELS[self]


_ROLE_CHANNELS: typing.Dict[TrackRole, int] = {
	TrackRole.MELODY: 0,
	TrackRole.CHORDS: 1,
	TrackRole.BASS: 2,
	TrackRole.PAD: 3,
	TrackRole.DRUMS: continuo.constants.gm_drums.DRUM_CHANNEL,
}


@dataclasses.dataclass(frozen=True)
class NoteEvent:

	"""
	One or more pitches struck together.

	Attributes:
		pitches: Pitch names sounding at once (a single note or a chord).
		duration: Symbolic length.
		velocity: MIDI velocity, 1-127.
		start_tick: Onset in engine ticks from the start of the segment.
		channel: MIDI channel of the track role.
	"""

	pitches: typing.Tuple[str, ...]
	duration: Duration
	velocity: int
	start_tick: int
	channel: int

	def __post_init__ (self) -> None:

		if not self.pitches:
			raise ValueError("A note event needs at least one pitch")

		if not continuo.constants.velocity.MIN_VELOCITY <= self.velocity <= continuo.constants.velocity.MAX_VELOCITY:
			raise ValueError(f"Velocity {self.velocity} outside 1-127")

		if self.start_tick < 0:
			raise ValueError("Start tick cannot be negative")

	@property
	def midi_pitches (self) -> typing.List[int]:

		"""MIDI note numbers of the pitches."""

		return [continuo.theory.note_to_midi(p) for p in self.pitches]

	@property
	def end_tick (self) -> int:

		"""Tick at which the notes are released."""

		return self.start_tick + self.duration.ticks

	@property
	def bar (self) -> int:

		"""Bar index the onset falls in."""

		return self.start_tick // continuo.constants.ticks.TICKS_PER_BAR


def add_note (
	events: typing.List[NoteEvent],
	role: TrackRole,
	pitches: typing.Sequence[str],
	duration: Duration,
	velocity: int,
	start_tick: int
) -> NoteEvent:

	"""Append a note event on the role's channel and return it."""

	event = NoteEvent(
		pitches = tuple(pitches),
		duration = duration,
		velocity = velocity,
		start_tick = start_tick,
		channel = role.channel
	)

	events.append(event)

	return event


TrackEvents = typing.Dict[TrackRole, typing.List[NoteEvent]]


def empty_tracks () -> TrackEvents:

	"""Return one empty event list per role, in track order."""

	return {role: [] for role in TrackRole}
