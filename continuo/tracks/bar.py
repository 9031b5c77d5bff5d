import dataclasses
import typing

import continuo.constants.ticks
import continuo.dynamics
import continuo.form
import continuo.styles


@dataclasses.dataclass(frozen=True)
class BarContext:

	"""
	Everything a track generator may read about the bar being written.

	Generators only read this snapshot and append to their own event list;
	they never see each other's output.

	Attributes:
		bar: Bar index within the segment.
		chord_notes: Current chord voiced from octave 3.
		chord_notes_high: The same chord voiced from octave 4.
		bass_root: Chord root in octave 2.
		next_chord_root: Pitch class name of the following chord's root.
		section: Section the bar belongs to.
		section_config: Arrangement of that section.
		phrase: Question/answer phrase of the bar.
		base_velocity: Bar velocity before per-track scaling.
		dynamics: Loudness state for the bar.
		table: Style tables in force.
	"""

	bar: int
	chord_notes: typing.Tuple[str, ...]
	chord_notes_high: typing.Tuple[str, ...]
	bass_root: str
	next_chord_root: str
	section: continuo.form.Section
	section_config: continuo.form.SectionConfig
	phrase: continuo.form.Phrase
	base_velocity: int
	dynamics: continuo.dynamics.Dynamics
	table: continuo.styles.StyleTable

	@property
	def start_tick (self) -> int:

		"""Tick at which the bar begins."""

		return self.bar * continuo.constants.ticks.TICKS_PER_BAR

	@property
	def style (self) -> continuo.styles.Style:

		"""Style of the bar."""

		return self.table.style
