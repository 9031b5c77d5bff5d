import random

import pytest

import continuo.form


Section = continuo.form.Section


def test_first_segment_arc () -> None:

	"""Sixteen bars: 2 intro, 4 verse, 4 build, 4 climax, 2 outro."""

	plan = continuo.form.section_plan(16)

	assert plan == (
		[Section.INTRO] * 2
		+ [Section.VERSE] * 4
		+ [Section.BUILD] * 4
		+ [Section.CLIMAX] * 4
		+ [Section.OUTRO] * 2
	)


def test_first_segment_ignores_direction () -> None:

	assert continuo.form.section_plan(16, 0, "peak") == continuo.form.section_plan(16)


def test_single_bar_segment_is_intro () -> None:

	assert continuo.form.section_plan(1) == [Section.INTRO]


def test_peak_holds_climax () -> None:

	"""After a short build the peak extension stays in the climax to the end."""

	bars = 16

	for bar in range(bars):
		section = continuo.form.get_song_section(bar, bars, 32, "peak")
		if bar / bars >= 0.1:
			assert section is Section.CLIMAX

	assert continuo.form.get_song_section(0, bars, 32, "peak") is Section.BUILD


def test_peak_climax_within_middle_fraction () -> None:

	bars = 20

	for bar in range(bars):
		if 0.1 <= bar / bars < 0.85:
			assert continuo.form.get_song_section(bar, bars, 32, "peak") is Section.CLIMAX


def test_build_is_monotonic () -> None:

	order = [Section.VERSE, Section.BUILD, Section.CLIMAX]
	plan = continuo.form.section_plan(16, 16, "build")

	assert [order.index(s) for s in plan] == sorted(order.index(s) for s in plan)
	assert plan[0] is Section.VERSE
	assert plan[-1] is Section.CLIMAX


def test_wind_down_ends_in_outro () -> None:

	plan = continuo.form.section_plan(16, 16, "wind_down")

	assert set(plan) == {Section.VERSE, Section.OUTRO}
	assert plan[-1] is Section.OUTRO
	assert continuo.form.section_plan(16, 16, "winddown") == plan


def test_contrast_drops_then_rebuilds () -> None:

	plan = continuo.form.section_plan(16, 16, "contrast")

	assert plan[0] is Section.INTRO
	assert plan[-1] is Section.CLIMAX


def test_continue_never_restarts_with_an_intro () -> None:

	for offset in (8, 16, 64, 256):
		assert Section.INTRO not in continuo.form.section_plan(16, offset, "continue")


def test_continue_moves_toward_the_outro_in_a_long_piece () -> None:

	assert continuo.form.get_song_section(15, 16, 512, "continue") is Section.OUTRO


def test_unknown_direction_is_continue () -> None:

	assert continuo.form.ExtensionDirection.resolve("sideways") is continuo.form.ExtensionDirection.CONTINUE
	assert continuo.form.section_plan(16, 16, "sideways") == continuo.form.section_plan(16, 16, "continue")


def test_section_end_detection () -> None:

	assert continuo.form.is_section_end(1, 16) is True
	assert continuo.form.is_section_end(2, 16) is False
	assert continuo.form.is_section_end(15, 16) is False


def test_section_configs () -> None:

	intro = continuo.form.SECTION_CONFIGS[Section.INTRO]
	outro = continuo.form.SECTION_CONFIGS[Section.OUTRO]
	climax = continuo.form.SECTION_CONFIGS[Section.CLIMAX]

	assert intro.melody is False
	assert intro.drums is continuo.form.DrumIntensity.NONE
	assert outro.chords is False
	assert climax.density == 1.0
	assert climax.velocity_mod == 15


@pytest.mark.parametrize("bar", range(8))
def test_phrase_types (bar: int) -> None:

	rng = random.Random(bar)
	phrase = continuo.form.get_phrase_type(bar, rng)

	assert phrase.bars == 2

	if bar % 4 < 2:
		assert phrase.is_question
		assert phrase.target_resolution in (4, 1)
	else:
		assert phrase.is_answer
		assert phrase.target_resolution in (0, 2)


def test_phrase_targets_vary () -> None:

	rng = random.Random(11)

	targets = {continuo.form.get_phrase_type(0, rng).target_resolution for _ in range(50)}

	assert targets == {1, 4}
