"""Scales, chords, pitch names and weighted melodic motion.

This module holds the pure music-theory layer of the engine. Everything here
is stateless and total: unknown mode names fall back to major, unknown chord
types to a major triad, unknown keys to C, and malformed pitch strings to
middle C. Nothing raises on musical input.

Pitches travel through the engine as names in the grammar
``<letter>[#|b]<octave>`` (``"C4"``, ``"F#3"``, ``"Bb2"``) with C4 = 60.
Names produced by the engine are always spelled with sharps, so
``midi_to_note(note_to_midi("Bb2"))`` is ``"A#2"``.

Module-level tables:
- `NOTES`: The twelve pitch-class names in sharp spelling
- `SCALE_INTERVALS`: Maps each `Mode` to semitone offsets from the root
- `CHORD_INTERVALS`: Maps chord type names to semitone offsets from the root
- `PROGRESSIONS`: Named looped progressions of ``(scale_degree, chord_type)``
"""

import enum
import logging
import random
import re
import typing

import continuo.sequence_utils


logger = logging.getLogger(__name__)


NOTES: typing.List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

FLAT_TO_SHARP: typing.Dict[str, str] = {
	"Cb": "B",
	"Db": "C#",
	"Eb": "D#",
	"Fb": "E",
	"Gb": "F#",
	"Ab": "G#",
	"Bb": "A#",
}

DEFAULT_KEY = "C"
DEFAULT_PITCH = "C4"
DEFAULT_CHORD_TYPE = "major"

_PITCH_PATTERN = re.compile(r"^([A-G])([#b]?)(-?\d+)$")

EnumType = typing.TypeVar("EnumType", bound=enum.Enum)


def resolve_name (
	enum_type: typing.Type[EnumType],
	value: typing.Union[EnumType, str, None],
	default: EnumType,
	aliases: typing.Optional[typing.Dict[str, EnumType]] = None
) -> EnumType:

	"""Resolve a loosely typed name to a member of a closed enumeration.

	Members pass straight through. Strings are matched against member values
	case-insensitively, with spaces and hyphens read as underscores. Anything
	else, including ``None``, resolves to ``default``.
	"""

	if isinstance(value, enum_type):
		return value

	if not isinstance(value, str):
		return default

	normalized = value.strip().lower().replace("-", "_").replace(" ", "_")

	for member in enum_type:
		if member.value == normalized:
			return member

	if aliases and normalized in aliases:
		return aliases[normalized]

	logger.debug(f"Unknown {enum_type.__name__} {value!r} - using {default.value!r}")

	return default


class Mode (enum.Enum):

	"""Scale modes the engine can build melodies and chords from."""

	MAJOR = "major"
	MINOR = "minor"
	DORIAN = "dorian"
	MIXOLYDIAN = "mixolydian"
	PENTATONIC = "pentatonic"
	MINOR_PENTATONIC = "minor_pentatonic"
	BLUES = "blues"
	CHROMATIC = "chromatic"

	@classmethod
	def resolve (cls, value: typing.Union["Mode", str, None]) -> "Mode":

		"""Return the matching mode, or ``MAJOR`` for anything unrecognised."""

		return resolve_name(cls, value, cls.MAJOR, _MODE_ALIASES)


_MODE_ALIASES: typing.Dict[str, Mode] = {
	"ionian": Mode.MAJOR,
	"aeolian": Mode.MINOR,
	"natural_minor": Mode.MINOR,
	"minorpentatonic": Mode.MINOR_PENTATONIC,
	"major_pentatonic": Mode.PENTATONIC,
}


SCALE_INTERVALS: typing.Dict[Mode, typing.List[int]] = {
	Mode.MAJOR: [0, 2, 4, 5, 7, 9, 11],
	Mode.MINOR: [0, 2, 3, 5, 7, 8, 10],
	Mode.DORIAN: [0, 2, 3, 5, 7, 9, 10],
	Mode.MIXOLYDIAN: [0, 2, 4, 5, 7, 9, 10],
	Mode.PENTATONIC: [0, 2, 4, 7, 9],
	Mode.MINOR_PENTATONIC: [0, 3, 5, 7, 10],
	Mode.BLUES: [0, 3, 5, 6, 7, 10],
	Mode.CHROMATIC: [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11],
}


CHORD_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"major": [0, 4, 7],
	"minor": [0, 3, 7],
	"dim": [0, 3, 6],
	"aug": [0, 4, 8],
	"maj7": [0, 4, 7, 11],
	"min7": [0, 3, 7, 10],
	"dom7": [0, 4, 7, 10],
	"sus2": [0, 2, 7],
	"sus4": [0, 5, 7],
}

CHORD_SUFFIX: typing.Dict[str, str] = {
	"major": "",
	"minor": "m",
	"dim": "dim",
	"aug": "+",
	"maj7": "maj7",
	"min7": "m7",
	"dom7": "7",
	"sus2": "sus2",
	"sus4": "sus4",
}


# Looped progressions as (scale degree, chord type), degrees 0-indexed.
PROGRESSIONS: typing.Dict[str, typing.List[typing.Tuple[int, str]]] = {
	"pop": [(0, "major"), (5, "major"), (3, "minor"), (4, "major")],
	"jazz": [(1, "min7"), (4, "dom7"), (0, "maj7"), (0, "maj7")],
	"blues": [
		(0, "dom7"), (0, "dom7"), (0, "dom7"), (0, "dom7"),
		(3, "dom7"), (3, "dom7"), (0, "dom7"), (0, "dom7"),
		(4, "dom7"), (3, "dom7"), (0, "dom7"), (4, "dom7"),
	],
	"ambient": [(0, "maj7"), (2, "minor"), (4, "major"), (3, "minor")],
	"lofi": [(0, "maj7"), (3, "min7"), (4, "dom7"), (0, "maj7")],
	"classical": [(0, "major"), (3, "major"), (4, "major"), (0, "major")],
	"electronic": [(0, "minor"), (5, "minor"), (3, "major"), (4, "major")],
}


def resolve_key (key: typing.Optional[str]) -> str:

	"""Return a key's pitch-class name in sharp spelling, or ``"C"`` if unknown.

	Example:
		```python
		resolve_key("Bb")   # → "A#"
		resolve_key("f#")   # → "F#"
		resolve_key("H")    # → "C"
		```
	"""

	if not isinstance(key, str) or not key.strip():
		return DEFAULT_KEY

	name = key.strip()
	name = name[0].upper() + name[1:]

	if name in NOTES:
		return name

	if name in FLAT_TO_SHARP:
		return FLAT_TO_SHARP[name]

	logger.debug(f"Unknown key {key!r} - using {DEFAULT_KEY!r}")

	return DEFAULT_KEY


def resolve_chord_type (chord_type: typing.Optional[str]) -> str:

	"""Return a known chord type name, falling back to ``"major"``."""

	if chord_type in CHORD_INTERVALS:
		return typing.cast(str, chord_type)

	logger.debug(f"Unknown chord type {chord_type!r} - using {DEFAULT_CHORD_TYPE!r}")

	return DEFAULT_CHORD_TYPE


def note_to_midi (pitch: str) -> int:

	"""Convert a pitch name to a MIDI note number.

	Malformed names fall back to middle C (60) rather than raising.

	Example:
		```python
		note_to_midi("C4")    # → 60
		note_to_midi("F#3")   # → 54
		note_to_midi("Bb2")   # → 46
		note_to_midi("H7")    # → 60
		```
	"""

	match = _PITCH_PATTERN.match(pitch) if isinstance(pitch, str) else None

	if match is None:
		logger.debug(f"Malformed pitch {pitch!r} - using {DEFAULT_PITCH}")
		return 60

	letter, accidental, octave = match.groups()
	pc = NOTES.index(letter)

	if accidental == "#":
		pc += 1
	elif accidental == "b":
		pc -= 1

	return pc + (int(octave) + 1) * 12


def midi_to_note (midi: int) -> str:

	"""Convert a MIDI note number to a sharp-spelled pitch name (60 → ``"C4"``)."""

	octave = midi // 12 - 1

	return f"{NOTES[midi % 12]}{octave}"


def strip_octave (pitch: str) -> str:

	"""Return the pitch-class part of a pitch name (``"F#3"`` → ``"F#"``)."""

	return NOTES[note_to_midi(pitch) % 12]


def pitch_class (pitch: str) -> int:

	"""Return the pitch class (0-11) of a pitch name."""

	return note_to_midi(pitch) % 12


def _build_from_intervals (root: str, intervals: typing.List[int], octave: int) -> typing.List[str]:

	"""Spell intervals above a root, carrying into the next octave where they wrap."""

	root_index = NOTES.index(resolve_key(root))

	return [
		f"{NOTES[(root_index + interval) % 12]}{octave + (root_index + interval) // 12}"
		for interval in intervals
	]


def get_scale (root: str, mode: typing.Union[Mode, str, None], octave: int = 4) -> typing.List[str]:

	"""Return the ordered pitch names of a scale.

	Parameters:
		root: Key name (``"C"``, ``"F#"``, ``"Bb"``). Unknown keys use C.
		mode: A `Mode` or mode name. Unknown names use major.
		octave: Octave of the root note.

	Example:
		```python
		get_scale("A", "minor", 3)
		# → ["A3", "B3", "C4", "D4", "E4", "F4", "G4"]
		```
	"""

	return _build_from_intervals(root, SCALE_INTERVALS[Mode.resolve(mode)], octave)


def get_chord (root: str, chord_type: str, octave: int = 4) -> typing.List[str]:

	"""Return the ordered pitch names of a chord built on ``root``."""

	return _build_from_intervals(root, CHORD_INTERVALS[resolve_chord_type(chord_type)], octave)


def get_chord_from_degree (
	root: str,
	mode: typing.Union[Mode, str, None],
	degree: int,
	chord_type: str,
	octave: int = 4
) -> typing.List[str]:

	"""Return the chord whose root is the given scale degree of a key.

	The degree wraps around the scale, so degree 7 of a major scale is the
	tonic again. The chord is voiced from ``octave`` regardless of where the
	degree falls within the scale.

	Example:
		```python
		get_chord_from_degree("C", "major", 4, "dom7", 3)
		# → ["G3", "B3", "D4", "F4"]
		```
	"""

	intervals = SCALE_INTERVALS[Mode.resolve(mode)]
	root_index = NOTES.index(resolve_key(root))
	chord_root = NOTES[(root_index + intervals[degree % len(intervals)]) % 12]

	return get_chord(chord_root, chord_type, octave)


def chord_name (root: str, chord_type: str) -> str:

	"""Return a human-friendly chord name (``"A"``, ``"min7"`` → ``"Am7"``)."""

	return f"{resolve_key(root)}{CHORD_SUFFIX[resolve_chord_type(chord_type)]}"


def get_progression (name: str) -> typing.List[typing.Tuple[int, str]]:

	"""Return a named progression, falling back to ``"pop"``."""

	return list(PROGRESSIONS.get(name, PROGRESSIONS["pop"]))


def get_next_melodic_note (
	current_pitch: str,
	scale: typing.Sequence[str],
	chord: typing.Sequence[str],
	direction: int = 0,
	leap: bool = False,
	rng: typing.Optional[random.Random] = None
) -> str:

	"""Take one weighted-random step of a melodic walk.

	Candidates are every scale tone within an octave either side of the
	current pitch (the current pitch included). Each starts at weight 1 and
	gains:

	- +2 when it is a chord tone,
	- +1 when it moves in the requested ``direction`` (positive = up,
	  negative = down, zero = no preference),
	- +2 for a step of at most 2 semitones when ``leap`` is false,
	- +2 for a leap of 3-7 semitones when ``leap`` is true.

	The winner is drawn by cumulative-weight roulette rather than taken as the
	maximum, so repeated calls wander instead of settling on one answer.

	Parameters:
		current_pitch: Pitch name the walk starts from.
		scale: Pitch names of the scale (only their pitch classes matter).
		chord: Pitch names of the current chord.
		direction: Preferred direction of motion.
		leap: Favour leaps instead of steps.
		rng: Random source. A fresh unseeded one is used when omitted.

	Returns:
		The chosen pitch name, or ``current_pitch`` when the scale is empty.
	"""

	if rng is None:
		rng = random.Random()

	current_midi = note_to_midi(current_pitch)
	scale_pcs = {note_to_midi(note) % 12 for note in scale}
	chord_pcs = {note_to_midi(note) % 12 for note in chord}

	options: typing.List[typing.Tuple[int, float]] = []

	for offset in range(-12, 13):

		midi = current_midi + offset

		if midi % 12 not in scale_pcs:
			continue

		weight = 1.0

		if midi % 12 in chord_pcs:
			weight += 2

		if (direction > 0 and midi > current_midi) or (direction < 0 and midi < current_midi):
			weight += 1

		interval = abs(offset)

		if not leap and interval <= 2:
			weight += 2

		if leap and 3 <= interval <= 7:
			weight += 2

		options.append((midi, weight))

	if not options:
		return current_pitch

	return midi_to_note(continuo.sequence_utils.weighted_choice(options, rng))


def get_approach_note (
	target_midi: int,
	scale: typing.Sequence[str],
	approach_type: str = "chromatic",
	rng: typing.Optional[random.Random] = None
) -> int:

	"""Return a MIDI note that leads into ``target_midi``.

	Parameters:
		target_midi: The note being approached.
		scale: Pitch names used for ``"scale"`` approaches.
		approach_type: ``"chromatic"`` (a half step below or above),
			``"scale"`` (the nearest scale tone below or above) or
			``"enclosure"`` (the half step above, first note of an enclosure).
			Anything else approaches from a half step below.
		rng: Random source for the above/below choice.
	"""

	if rng is None:
		rng = random.Random()

	if approach_type == "chromatic":
		return target_midi - 1 if rng.random() > 0.5 else target_midi + 1

	if approach_type == "scale":
		scale_midis = sorted(note_to_midi(note) for note in scale)
		below = [m for m in scale_midis if m < target_midi]
		above = [m for m in scale_midis if m > target_midi]
		lower = below[-1] if below else target_midi - 2
		upper = above[0] if above else target_midi + 2
		return lower if rng.random() > 0.5 else upper

	if approach_type == "enclosure":
		return target_midi + 1

	return target_midi - 1
