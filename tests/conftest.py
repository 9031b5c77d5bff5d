import random
import typing

import pytest

import continuo.dynamics
import continuo.form
import continuo.styles
import continuo.theory
import continuo.tracks.bar


@pytest.fixture
def rng () -> random.Random:

	"""A seeded random source so generator tests are repeatable."""

	return random.Random(1234)


def make_bar_context (
	style: str = "ambient",
	section: continuo.form.Section = continuo.form.Section.VERSE,
	bar: int = 0,
	key: str = "C",
	mode: str = "major",
	degree: int = 0,
	chord_type: str = "major",
	next_chord_root: str = "F",
	base_velocity: int = 80,
	phrase: typing.Optional[continuo.form.Phrase] = None,
	dynamics: typing.Optional[continuo.dynamics.Dynamics] = None,
) -> continuo.tracks.bar.BarContext:

	"""Build a bar snapshot with test defaults (C major, tonic triad, verse)."""

	chord = tuple(continuo.theory.get_chord_from_degree(key, mode, degree, chord_type, 3))
	chord_high = tuple(continuo.theory.get_chord_from_degree(key, mode, degree, chord_type, 4))

	return continuo.tracks.bar.BarContext(
		bar = bar,
		chord_notes = chord,
		chord_notes_high = chord_high,
		bass_root = f"{continuo.theory.strip_octave(chord[0])}2",
		next_chord_root = next_chord_root,
		section = section,
		section_config = continuo.form.SECTION_CONFIGS[section],
		phrase = phrase or continuo.form.Phrase(type=continuo.form.PhraseType.QUESTION, target_resolution=4),
		base_velocity = base_velocity,
		dynamics = dynamics or continuo.dynamics.Dynamics.initial(),
		table = continuo.styles.get_style_table(style),
	)


@pytest.fixture
def bar_context () -> typing.Callable[..., continuo.tracks.bar.BarContext]:

	"""Factory fixture returning :func:`make_bar_context`."""

	return make_bar_context
