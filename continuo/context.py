"""Continuation state passed from one segment to the next.

A piece is built from segments generated one call at a time. Whatever must
carry across the seam - where the chord progression stands, the motif, the
loudness trend and the last notes each part played - is captured in a
:class:`SegmentInfo` when a segment finishes and turned into a
:class:`ContinuationContext` for the next call:

```python
first = continuo.engine.generate_segment(options)
context = continuo.context.ContinuationContext.from_segment_info(first.segment_info, options)
second = continuo.engine.generate_segment(later_options, context)
```

Both types are immutable and round-trip through plain dictionaries with
camelCase keys, so a session store can keep them as JSON.
"""

from __future__ import annotations

import dataclasses
import math
import typing

import continuo.dynamics
import continuo.motif
import continuo.styles
import continuo.theory

if typing.TYPE_CHECKING:
	import continuo.engine


@dataclasses.dataclass(frozen=True)
class NoteMemory:

	"""A single pitch remembered from the end of a segment, with its bar velocity."""

	note: str
	velocity: int

	def to_dict (self) -> typing.Dict[str, typing.Any]:
		return {"note": self.note, "velocity": self.velocity}

	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> NoteMemory:
		return cls(note=str(data.get("note", continuo.theory.DEFAULT_PITCH)), velocity=int(data.get("velocity", 0)))


@dataclasses.dataclass(frozen=True)
class ChordMemory:

	"""A chord voicing remembered from the end of a segment."""

	notes: typing.Tuple[str, ...]
	velocity: int

	def to_dict (self) -> typing.Dict[str, typing.Any]:
		return {"notes": list(self.notes), "velocity": self.velocity}

	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> ChordMemory:
		return cls(notes=tuple(str(n) for n in data.get("notes", ())), velocity=int(data.get("velocity", 0)))


@dataclasses.dataclass(frozen=True)
class LastNotes:

	"""
	What the melody, bass and chord parts played over the closing bars.

	Entries are in bar order, so ``melody[0]`` is the earliest remembered
	melody note.
	"""

	melody: typing.Tuple[NoteMemory, ...] = ()
	bass: typing.Tuple[NoteMemory, ...] = ()
	chords: typing.Tuple[ChordMemory, ...] = ()

	def to_dict (self) -> typing.Dict[str, typing.Any]:

		return {
			"melody": [m.to_dict() for m in self.melody],
			"bass": [b.to_dict() for b in self.bass],
			"chords": [c.to_dict() for c in self.chords],
		}

	@classmethod
	def from_dict (cls, data: typing.Optional[typing.Mapping[str, typing.Any]]) -> LastNotes:

		if not data:
			return cls()

		return cls(
			melody = tuple(NoteMemory.from_dict(m) for m in data.get("melody") or ()),
			bass = tuple(NoteMemory.from_dict(b) for b in data.get("bass") or ()),
			chords = tuple(ChordMemory.from_dict(c) for c in data.get("chords") or ()),
		)


def _motif_to_list (motif: typing.Optional[continuo.motif.Motif]) -> typing.Optional[typing.List[int]]:

	return motif.to_list() if motif is not None else None


def _motif_from_list (degrees: typing.Optional[typing.Iterable[int]]) -> typing.Optional[continuo.motif.Motif]:

	if not degrees:
		return None

	return continuo.motif.Motif.from_degrees(degrees)


@dataclasses.dataclass(frozen=True)
class SegmentInfo:

	"""
	The musical state a segment ended in.

	Attributes:
		bars: Bars in the segment.
		duration_seconds: Playing time at the segment's tempo (four beats a bar).
		ending_notes: Melody, bass and chord notes of the last two bars.
		ending_chord: Root name of the chord played in the final bar.
		ending_chord_type: Chord type of that chord.
		progression_position: Index into the progression the next segment starts at.
		dynamics: Loudness state after the final bar.
		motif: The motif the segment developed.
	"""

	bars: int
	duration_seconds: float
	ending_notes: LastNotes
	ending_chord: str
	ending_chord_type: str
	progression_position: int
	dynamics: continuo.dynamics.Dynamics
	motif: continuo.motif.Motif

	def to_dict (self) -> typing.Dict[str, typing.Any]:

		"""Return a JSON-safe representation with camelCase keys."""

		return {
			"bars": self.bars,
			"durationSeconds": self.duration_seconds,
			"endingNotes": self.ending_notes.to_dict(),
			"endingChord": self.ending_chord,
			"endingChordType": self.ending_chord_type,
			"progressionPosition": self.progression_position,
			"dynamics": self.dynamics.to_dict(),
			"motif": self.motif.to_list(),
		}

	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> SegmentInfo:

		"""Rebuild from :meth:`to_dict` output."""

		return cls(
			bars = int(data["bars"]),
			duration_seconds = float(data["durationSeconds"]),
			ending_notes = LastNotes.from_dict(data.get("endingNotes")),
			ending_chord = str(data.get("endingChord", continuo.theory.DEFAULT_KEY)),
			ending_chord_type = str(data.get("endingChordType", continuo.theory.DEFAULT_CHORD_TYPE)),
			progression_position = int(data.get("progressionPosition", 0)),
			dynamics = continuo.dynamics.Dynamics.from_dict(data.get("dynamics")),
			motif = continuo.motif.Motif.from_degrees(data.get("motif") or ()),
		)


@dataclasses.dataclass(frozen=True)
class ContinuationContext:

	"""
	State a new segment picks up from.

	An empty context (``total_bars == 0``, no motif, no last notes) starts a
	fresh piece. Key, mode and style are stored as canonical names.

	Attributes:
		key: Key the piece was in.
		mode: Mode name the piece was in.
		tempo: Tempo in BPM.
		style: Style name.
		progression_position: Index into the progression for the first bar.
		current_chord: Root name of the last chord played, if any.
		current_chord_type: Chord type of that chord, if any.
		last_notes: Closing notes of the previous segment.
		dynamics: Loudness state to continue from.
		total_bars: Bars already generated in the piece.
		motif: Motif to keep developing, or ``None`` for a fresh one.
	"""

	key: str = continuo.theory.DEFAULT_KEY
	mode: str = continuo.theory.Mode.MAJOR.value
	tempo: float = 90
	style: str = continuo.styles.Style.AMBIENT.value
	progression_position: int = 0
	current_chord: typing.Optional[str] = None
	current_chord_type: typing.Optional[str] = None
	last_notes: LastNotes = dataclasses.field(default_factory=LastNotes)
	dynamics: continuo.dynamics.Dynamics = dataclasses.field(default_factory=continuo.dynamics.Dynamics.initial)
	total_bars: int = 0
	motif: typing.Optional[continuo.motif.Motif] = None

	@property
	def is_empty (self) -> bool:

		"""Return True when no segment has been generated yet."""

		return self.total_bars == 0

	@property
	def last_melody_note (self) -> typing.Optional[str]:

		"""The first remembered melody note, which seeds the next melody."""

		return self.last_notes.melody[0].note if self.last_notes.melody else None

	@classmethod
	def empty (cls, options: continuo.engine.GenerationOptions) -> ContinuationContext:

		"""Return the context for a fresh piece with the given options."""

		return cls(
			key = continuo.theory.resolve_key(options.key),
			mode = continuo.theory.Mode.resolve(options.mode).value,
			tempo = options.tempo,
			style = continuo.styles.Style.resolve(options.style).value,
		)

	@classmethod
	def from_segment_info (
		cls,
		info: SegmentInfo,
		options: continuo.engine.GenerationOptions,
		total_bars: typing.Optional[int] = None
	) -> ContinuationContext:

		"""
		Build the context that continues a finished segment.

		Parameters:
			info: Ending state of the segment just generated.
			options: Options that segment was generated with.
			total_bars: Bars generated in the piece so far, this segment
				included. Defaults to the segment's own length.
		"""

		return cls(
			key = continuo.theory.resolve_key(options.key),
			mode = continuo.theory.Mode.resolve(options.mode).value,
			tempo = options.tempo,
			style = continuo.styles.Style.resolve(options.style).value,
			progression_position = info.progression_position,
			current_chord = info.ending_chord,
			current_chord_type = info.ending_chord_type,
			last_notes = info.ending_notes,
			dynamics = info.dynamics,
			total_bars = info.bars if total_bars is None else total_bars,
			motif = info.motif,
		)

	def to_dict (self) -> typing.Dict[str, typing.Any]:

		"""Return a JSON-safe representation with camelCase keys."""

		return {
			"key": self.key,
			"mode": self.mode,
			"tempo": self.tempo,
			"style": self.style,
			"progressionPosition": self.progression_position,
			"currentChord": self.current_chord,
			"currentChordType": self.current_chord_type,
			"lastNotes": self.last_notes.to_dict(),
			"dynamics": self.dynamics.to_dict(),
			"totalBars": self.total_bars,
			"motif": _motif_to_list(self.motif),
		}

	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> ContinuationContext:

		"""Rebuild from :meth:`to_dict` output; missing fields take fresh-piece values."""

		return cls(
			key = continuo.theory.resolve_key(data.get("key")),
			mode = continuo.theory.Mode.resolve(data.get("mode")).value,
			tempo = data.get("tempo", 90),
			style = continuo.styles.Style.resolve(data.get("style")).value,
			progression_position = int(data.get("progressionPosition") or 0),
			current_chord = data.get("currentChord"),
			current_chord_type = data.get("currentChordType"),
			last_notes = LastNotes.from_dict(data.get("lastNotes")),
			dynamics = continuo.dynamics.Dynamics.from_dict(data.get("dynamics")),
			total_bars = int(data.get("totalBars") or 0),
			motif = _motif_from_list(data.get("motif")),
		)


def format_duration (seconds: float) -> str:

	"""Format a duration as ``M:SS`` (``125.4`` → ``"2:05"``)."""

	minutes = math.floor(seconds / 60)
	remainder = math.floor(seconds % 60)

	return f"{minutes}:{remainder:02d}"
