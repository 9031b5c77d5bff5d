"""Per-style constant tables.

Each `Style` owns a bundle of read-only data the generators consume: the
drum grid, the bass line archetype, GM instrument programs, the chord
progression and how fast it moves, and the `StyleParams` that bound tempo,
density, velocity and register.

Lookups never fail. ``get_style_table("polka")`` returns the ambient table,
exactly as ``get_style_table(Style.AMBIENT)`` does.

Example:
	```python
	table = continuo.styles.get_style_table("lofi")
	table.progression_rate          # → 2 (bars per chord)
	table.drums.snare[4]            # → True (backbeat)
	table.params.octave_range       # → (3, 5)
	```
"""

import dataclasses
import enum
import typing

import continuo.sequence_utils
import continuo.theory


class Style (enum.Enum):

	"""Musical styles with their own arrangement tables."""

	AMBIENT = "ambient"
	LOFI = "lofi"
	ELECTRONIC = "electronic"
	CLASSICAL = "classical"
	JAZZ = "jazz"

	@classmethod
	def resolve (cls, value: typing.Union["Style", str, None]) -> "Style":

		"""Return the matching style, or ``AMBIENT`` for anything unrecognised."""

		return continuo.theory.resolve_name(cls, value, cls.AMBIENT, {"lo_fi": cls.LOFI})


@dataclasses.dataclass(frozen=True)
class StyleParams:

	"""
	Ranges and switches that shape a style's note choices.

	Attributes:
		tempo_range: Suggested ``(low, high)`` BPM.
		note_density: Base probability (0-1) of a melody note on a candidate step.
		velocity_range: Typical ``(low, high)`` velocity.
		octave_range: ``(low, high)`` octaves the melody is confined to, inclusive.
		preferred_scales: Modes that suit the style.
		rhythm_patterns: Names of entries in `RHYTHM_PATTERNS` that suit the style.
		use_sustain: Block chords ring for the whole bar instead of being struck per beat.
	"""

	tempo_range: typing.Tuple[int, int]
	note_density: float
	velocity_range: typing.Tuple[int, int]
	octave_range: typing.Tuple[int, int]
	preferred_scales: typing.Tuple[continuo.theory.Mode, ...]
	rhythm_patterns: typing.Tuple[str, ...]
	use_sustain: bool

	@property
	def lowest_melody_midi (self) -> int:

		"""Lowest MIDI note the melody may use (C of the low octave)."""

		return (self.octave_range[0] + 1) * 12

	@property
	def highest_melody_midi (self) -> int:

		"""Highest MIDI note the melody may use (B of the high octave)."""

		return (self.octave_range[1] + 1) * 12 + 11


@dataclasses.dataclass(frozen=True)
class DrumGrid:

	"""Sixteen-step hit grids for each drum voice."""

	kick: typing.Tuple[bool, ...]
	snare: typing.Tuple[bool, ...]
	hihat: typing.Tuple[bool, ...]
	ride: typing.Optional[typing.Tuple[bool, ...]] = None


@dataclasses.dataclass(frozen=True)
class BassPattern:

	"""A named bass line archetype, selecting the line builder in the bass generator."""

	name: str


@dataclasses.dataclass(frozen=True)
class Instruments:

	"""General MIDI program numbers (0-indexed) for the pitched roles."""

	melody: int
	chords: int
	bass: int
	pad: int


@dataclasses.dataclass(frozen=True)
class StyleTable:

	"""Everything the engine needs to know about one style."""

	style: Style
	params: StyleParams
	drums: DrumGrid
	bass_pattern: BassPattern
	instruments: Instruments
	progression: typing.Tuple[typing.Tuple[int, str], ...]
	progression_rate: int
	max_melodic_interval: int


_grid = continuo.sequence_utils.grid_from_string


RHYTHM_PATTERNS: typing.Dict[str, typing.Tuple[bool, ...]] = {
	"straight":   _grid("x... x... x... x..."),
	"offbeat":    _grid("..x. ..x. ..x. ..x."),
	"syncopated": _grid("x..x ..x. x..x ..x."),
	"driving":    _grid("x.x. x.x. x.x. x.x."),
	"sparse":     _grid("x... .... x... ...."),
	"dense":      _grid("xxxx xxxx xxxx xxxx"),
	"triplet":    _grid("x..x ..x. .x.. x..x"),
}


DRUM_PATTERNS: typing.Dict[Style, DrumGrid] = {
	Style.AMBIENT: DrumGrid(
		kick =  _grid("x... .... .... ...."),
		snare = _grid(".... .... .... ...."),
		hihat = _grid(".... .... .... ...."),
	),
	Style.LOFI: DrumGrid(
		kick =  _grid("x... .... x... ...."),
		snare = _grid(".... x... .... x..."),
		hihat = _grid("x.x. x.x. x.x. x.x."),
	),
	Style.ELECTRONIC: DrumGrid(
		kick =  _grid("x... x... x... x..."),
		snare = _grid(".... x... .... x..."),
		hihat = _grid("xxxx xxxx xxxx xxxx"),
	),
	Style.CLASSICAL: DrumGrid(
		kick =  _grid(".... .... .... ...."),
		snare = _grid(".... .... .... ...."),
		hihat = _grid(".... .... .... ...."),
	),
	Style.JAZZ: DrumGrid(
		kick =  _grid("x... ..x. .... ..x."),
		snare = _grid(".... .... .... ...."),
		hihat = _grid(".... .... .... ...."),
		ride =  _grid("x.xx .xx. xx.x x.x."),
	),
}


BASS_PATTERNS: typing.Dict[Style, BassPattern] = {
	Style.AMBIENT: BassPattern("sustained"),
	Style.LOFI: BassPattern("groove"),
	Style.ELECTRONIC: BassPattern("offbeat"),
	Style.CLASSICAL: BassPattern("alberti"),
	Style.JAZZ: BassPattern("walking"),
}


# Step indices into a chord's tones; several indices sound together.
ARPEGGIO_PATTERNS: typing.Dict[str, typing.List[typing.List[int]]] = {
	"up": [[0], [1], [2], [3]],
	"down": [[3], [2], [1], [0]],
	"up_down": [[0], [1], [2], [3], [2], [1]],
	"broken": [[0, 2], [1, 3]],
	"spread": [[0], [2], [1], [3]],
}


INSTRUMENTS: typing.Dict[Style, Instruments] = {
	Style.AMBIENT: Instruments(melody=89, chords=52, bass=39, pad=92),		# Warm Pad, Choir, Synth Bass 2, Bowed Pad
	Style.LOFI: Instruments(melody=5, chords=1, bass=33, pad=89),			# Electric Piano 2, Bright Piano, Finger Bass, Warm Pad
	Style.ELECTRONIC: Instruments(melody=81, chords=63, bass=38, pad=95),	# Saw Lead, Synth Brass 2, Synth Bass 1, Sweep Pad
	Style.CLASSICAL: Instruments(melody=41, chords=49, bass=43, pad=49),	# Viola, Slow Strings, Contrabass, Slow Strings
	Style.JAZZ: Instruments(melody=66, chords=1, bass=33, pad=52),			# Tenor Sax, Bright Piano, Finger Bass, Choir Aahs
}


# Bars spent on each chord before the progression advances.
PROGRESSION_RATES: typing.Dict[Style, int] = {
	Style.AMBIENT: 4,
	Style.LOFI: 2,
	Style.ELECTRONIC: 2,
	Style.CLASSICAL: 1,
	Style.JAZZ: 1,
}


# Widest melodic leap (semitones) allowed before the line is usually pulled back.
MAX_MELODIC_INTERVALS: typing.Dict[Style, int] = {
	Style.AMBIENT: 6,
	Style.LOFI: 6,
	Style.ELECTRONIC: 6,
	Style.CLASSICAL: 8,
	Style.JAZZ: 9,
}


STYLE_PARAMS: typing.Dict[Style, StyleParams] = {
	Style.AMBIENT: StyleParams(
		tempo_range = (60, 80),
		note_density = 0.3,
		velocity_range = (40, 80),
		octave_range = (3, 5),
		preferred_scales = (continuo.theory.Mode.MAJOR, continuo.theory.Mode.DORIAN),
		rhythm_patterns = ("sparse", "straight"),
		use_sustain = True,
	),
	Style.LOFI: StyleParams(
		tempo_range = (70, 90),
		note_density = 0.5,
		velocity_range = (50, 90),
		octave_range = (3, 5),
		preferred_scales = (continuo.theory.Mode.PENTATONIC, continuo.theory.Mode.DORIAN),
		rhythm_patterns = ("syncopated", "offbeat"),
		use_sustain = True,
	),
	Style.ELECTRONIC: StyleParams(
		tempo_range = (120, 140),
		note_density = 0.7,
		velocity_range = (70, 110),
		octave_range = (2, 6),
		preferred_scales = (continuo.theory.Mode.MINOR, continuo.theory.Mode.MINOR_PENTATONIC),
		rhythm_patterns = ("driving", "syncopated"),
		use_sustain = False,
	),
	Style.CLASSICAL: StyleParams(
		tempo_range = (80, 120),
		note_density = 0.6,
		velocity_range = (50, 100),
		octave_range = (3, 6),
		preferred_scales = (continuo.theory.Mode.MAJOR, continuo.theory.Mode.MINOR),
		rhythm_patterns = ("straight", "triplet"),
		use_sustain = True,
	),
	Style.JAZZ: StyleParams(
		tempo_range = (100, 140),
		note_density = 0.6,
		velocity_range = (60, 100),
		octave_range = (3, 5),
		preferred_scales = (continuo.theory.Mode.DORIAN, continuo.theory.Mode.MIXOLYDIAN),
		rhythm_patterns = ("syncopated", "triplet"),
		use_sustain = True,
	),
}


def get_style_table (style: typing.Union[Style, str, None]) -> StyleTable:

	"""Return the full table for a style, using ambient for unknown names."""

	resolved = Style.resolve(style)

	return StyleTable(
		style = resolved,
		params = STYLE_PARAMS[resolved],
		drums = DRUM_PATTERNS[resolved],
		bass_pattern = BASS_PATTERNS[resolved],
		instruments = INSTRUMENTS[resolved],
		progression = tuple(continuo.theory.get_progression(resolved.value)),
		progression_rate = PROGRESSION_RATES[resolved],
		max_melodic_interval = MAX_MELODIC_INTERVALS[resolved],
	)


def get_style_params (style: typing.Union[Style, str, None]) -> StyleParams:

	"""Return the `StyleParams` for a style, using ambient for unknown names."""

	return STYLE_PARAMS[Style.resolve(style)]
