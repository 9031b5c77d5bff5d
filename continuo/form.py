"""Song structure - sections across a segment and phrases within them.

Defines the five coarse :class:`Section` labels with their arrangement
(:class:`SectionConfig`), the mapping from a bar's position to its section
(:func:`get_song_section`), and the two-bar question/answer :class:`Phrase`
grouping the melody uses for tension and resolution.

A first segment follows a fixed arc (intro → verse → build → climax → outro).
Later segments of the same piece are shaped by an :class:`ExtensionDirection`
chosen by the caller, so a long piece can keep building, hold a peak, wind
down, or drop away and rebuild.
"""

import dataclasses
import enum
import random
import typing

import continuo.theory


# Bars assumed to remain in the piece when a "continue" extension places
# itself within the overall arc. A rough estimate, not a structural constant.
CONTINUE_REMAINING_BARS = 32


class Section (enum.Enum):

	"""Coarse structural label attached to each bar."""

	INTRO = "intro"
	VERSE = "verse"
	BUILD = "build"
	CLIMAX = "climax"
	OUTRO = "outro"


class DrumIntensity (enum.Enum):

	"""How hard the drum generator plays in a section."""

	NONE = "none"
	MINIMAL = "minimal"
	LIGHT = "light"
	FULL = "full"
	BUILDING = "building"


class ExtensionDirection (enum.Enum):

	"""Energy shape requested for a segment that extends an existing piece."""

	CONTINUE = "continue"
	BUILD = "build"
	PEAK = "peak"
	WIND_DOWN = "wind_down"
	CONTRAST = "contrast"

	@classmethod
	def resolve (cls, value: typing.Union["ExtensionDirection", str, None]) -> "ExtensionDirection":

		"""Return the matching direction, or ``CONTINUE`` for anything unrecognised."""

		return continuo.theory.resolve_name(cls, value, cls.CONTINUE, {"winddown": cls.WIND_DOWN})


@dataclasses.dataclass(frozen=True)
class SectionConfig:

	"""
	Arrangement of one section: which tracks play, and how densely and loudly.

	Attributes:
		melody: The melody track plays.
		chords: The chord track plays.
		bass: The bass track plays.
		pad: The pad may play (the pad is further limited by style).
		drums: Drum intensity; ``NONE`` silences the kit.
		density: Multiplier (0-1) on the style's melody note density.
		velocity_mod: Signed offset added to the bar's base velocity.
	"""

	melody: bool
	chords: bool
	bass: bool
	pad: bool
	drums: DrumIntensity
	density: float
	velocity_mod: int


SECTION_CONFIGS: typing.Dict[Section, SectionConfig] = {
	Section.INTRO: SectionConfig(
		melody=False, chords=True, bass=True, pad=True,
		drums=DrumIntensity.NONE, density=0.3, velocity_mod=-15,
	),
	Section.VERSE: SectionConfig(
		melody=True, chords=True, bass=True, pad=True,
		drums=DrumIntensity.LIGHT, density=0.6, velocity_mod=-5,
	),
	Section.BUILD: SectionConfig(
		melody=True, chords=True, bass=True, pad=True,
		drums=DrumIntensity.BUILDING, density=0.8, velocity_mod=5,
	),
	Section.CLIMAX: SectionConfig(
		melody=True, chords=True, bass=True, pad=True,
		drums=DrumIntensity.FULL, density=1.0, velocity_mod=15,
	),
	Section.OUTRO: SectionConfig(
		melody=True, chords=False, bass=True, pad=True,
		drums=DrumIntensity.MINIMAL, density=0.4, velocity_mod=-10,
	),
}


def get_song_section (
	bar_number: int,
	total_bars: int,
	total_bars_offset: int = 0,
	extension_direction: typing.Union[ExtensionDirection, str, None] = ExtensionDirection.CONTINUE,
	remaining_bars_estimate: int = CONTINUE_REMAINING_BARS
) -> Section:

	"""Return the section a bar belongs to.

	Parameters:
		bar_number: Bar index within the segment (0-indexed).
		total_bars: Bars in the segment.
		total_bars_offset: Bars generated earlier in the same piece. Zero
			means this is the first segment.
		extension_direction: Shape of a later segment. Ignored for the first.
		remaining_bars_estimate: Bars assumed to follow a ``CONTINUE``
			segment when placing it within the whole piece.

	Example:
		```python
		# First segment, 16 bars: bar 0 is the intro, bar 15 the outro.
		get_song_section(0, 16)    # → Section.INTRO
		get_song_section(15, 16)   # → Section.OUTRO

		# A "peak" extension holds the climax to its last bar.
		get_song_section(15, 16, total_bars_offset=32, extension_direction="peak")
		# → Section.CLIMAX
		```
	"""

	total_bars = max(1, total_bars)
	local_progress = bar_number / total_bars

	if total_bars_offset <= 0:

		if local_progress < 0.1:
			return Section.INTRO
		if local_progress < 0.35:
			return Section.VERSE
		if local_progress < 0.6:
			return Section.BUILD
		if local_progress < 0.85:
			return Section.CLIMAX
		return Section.OUTRO

	direction = ExtensionDirection.resolve(extension_direction)

	if direction is ExtensionDirection.BUILD:

		if local_progress < 0.3:
			return Section.VERSE
		if local_progress < 0.7:
			return Section.BUILD
		return Section.CLIMAX

	if direction is ExtensionDirection.PEAK:

		if local_progress < 0.1:
			return Section.BUILD
		return Section.CLIMAX

	if direction is ExtensionDirection.WIND_DOWN:

		if local_progress < 0.6:
			return Section.VERSE
		return Section.OUTRO

	if direction is ExtensionDirection.CONTRAST:

		if local_progress < 0.25:
			return Section.INTRO
		if local_progress < 0.5:
			return Section.VERSE
		if local_progress < 0.75:
			return Section.BUILD
		return Section.CLIMAX

	# CONTINUE: place the bar within the whole piece, assuming more to come.
	overall_progress = (total_bars_offset + bar_number) / (total_bars_offset + total_bars + remaining_bars_estimate)

	if overall_progress < 0.2:
		return Section.VERSE
	if overall_progress < 0.4:
		return Section.BUILD
	if overall_progress < 0.7:
		return Section.CLIMAX
	if overall_progress < 0.9:
		return Section.BUILD
	return Section.OUTRO


def is_section_end (
	bar_number: int,
	total_bars: int,
	total_bars_offset: int = 0,
	extension_direction: typing.Union[ExtensionDirection, str, None] = ExtensionDirection.CONTINUE
) -> bool:

	"""Return True when the following bar falls in a different section."""

	current = get_song_section(bar_number, total_bars, total_bars_offset, extension_direction)
	following = get_song_section(bar_number + 1, total_bars, total_bars_offset, extension_direction)

	return following is not current


def section_plan (
	total_bars: int,
	total_bars_offset: int = 0,
	extension_direction: typing.Union[ExtensionDirection, str, None] = ExtensionDirection.CONTINUE
) -> typing.List[Section]:

	"""Return the section of every bar in a segment."""

	return [
		get_song_section(bar, total_bars, total_bars_offset, extension_direction)
		for bar in range(total_bars)
	]


class PhraseType (enum.Enum):

	"""Role of a two-bar phrase in a question/answer pair."""

	QUESTION = "question"
	ANSWER = "answer"


@dataclasses.dataclass(frozen=True)
class Phrase:

	"""
	A two-bar melodic grouping.

	Attributes:
		type: Question phrases end on tension, answer phrases resolve.
		target_resolution: Scale-degree index (0 = root, 1 = 2nd, 2 = 3rd,
			4 = 5th) the phrase's final note lands on.
		bars: Phrase length in bars.
	"""

	type: PhraseType
	target_resolution: int
	bars: int = 2

	@property
	def is_question (self) -> bool:

		"""Return True for a question (tension) phrase."""

		return self.type is PhraseType.QUESTION

	@property
	def is_answer (self) -> bool:

		"""Return True for an answer (resolution) phrase."""

		return self.type is PhraseType.ANSWER


def get_phrase_type (bar_number: int, rng: typing.Optional[random.Random] = None) -> Phrase:

	"""Return the phrase for a bar within its four-bar question/answer pair.

	Bars 0-1 of each group of four ask a question ending on the 5th or 2nd;
	bars 2-3 answer it, resolving to the root or the 3rd.
	"""

	if rng is None:
		rng = random.Random()

	if bar_number % 4 < 2:
		return Phrase(type=PhraseType.QUESTION, target_resolution=4 if rng.random() > 0.5 else 1)

	return Phrase(type=PhraseType.ANSWER, target_resolution=0 if rng.random() > 0.6 else 2)
