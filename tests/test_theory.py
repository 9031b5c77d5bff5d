"""Tests for the music theory layer.

Covers:
- Pitch name parsing and spelling, including flats and malformed input
- Scale, chord and degree-chord construction with fallbacks
- Name resolution for modes, keys and chord types
- The weighted melodic walk and approach notes
"""

import random

import pytest

import continuo.theory


# ---------------------------------------------------------------------------
# Pitch names
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("pitch, midi", [
	("C4", 60),
	("A4", 69),
	("F#3", 54),
	("Bb2", 46),
	("C-1", 0),
	("G9", 127),
])
def test_note_to_midi (pitch: str, midi: int) -> None:

	assert continuo.theory.note_to_midi(pitch) == midi


@pytest.mark.parametrize("pitch", ["H7", "", "C", "c4", "C##4", "middle C"])
def test_malformed_pitch_falls_back_to_middle_c (pitch: str) -> None:

	assert continuo.theory.note_to_midi(pitch) == 60


def test_pitch_round_trip_for_sharp_spellings () -> None:

	"""Every sharp-spelled name survives a trip through MIDI numbers."""

	for octave in range(-1, 9):
		for name in continuo.theory.NOTES:
			pitch = f"{name}{octave}"
			assert continuo.theory.midi_to_note(continuo.theory.note_to_midi(pitch)) == pitch


def test_midi_round_trip_over_full_range () -> None:

	for midi in range(128):
		assert continuo.theory.note_to_midi(continuo.theory.midi_to_note(midi)) == midi


def test_flats_normalise_to_sharps () -> None:

	assert continuo.theory.midi_to_note(continuo.theory.note_to_midi("Bb2")) == "A#2"
	assert continuo.theory.midi_to_note(continuo.theory.note_to_midi("Eb4")) == "D#4"


def test_strip_octave_and_pitch_class () -> None:

	assert continuo.theory.strip_octave("F#3") == "F#"
	assert continuo.theory.strip_octave("Db5") == "C#"
	assert continuo.theory.pitch_class("E2") == 4


# ---------------------------------------------------------------------------
# Name resolution
# ---------------------------------------------------------------------------

def test_mode_resolve () -> None:

	assert continuo.theory.Mode.resolve("dorian") is continuo.theory.Mode.DORIAN
	assert continuo.theory.Mode.resolve(" Mixolydian ") is continuo.theory.Mode.MIXOLYDIAN
	assert continuo.theory.Mode.resolve("minorPentatonic") is continuo.theory.Mode.MINOR_PENTATONIC
	assert continuo.theory.Mode.resolve("minor-pentatonic") is continuo.theory.Mode.MINOR_PENTATONIC
	assert continuo.theory.Mode.resolve("aeolian") is continuo.theory.Mode.MINOR
	assert continuo.theory.Mode.resolve(continuo.theory.Mode.BLUES) is continuo.theory.Mode.BLUES


@pytest.mark.parametrize("value", ["lydian-ish", "", None, 7])
def test_unknown_mode_is_major (value: object) -> None:

	assert continuo.theory.Mode.resolve(value) is continuo.theory.Mode.MAJOR  # type: ignore[arg-type]


def test_resolve_key () -> None:

	assert continuo.theory.resolve_key("Bb") == "A#"
	assert continuo.theory.resolve_key("f#") == "F#"
	assert continuo.theory.resolve_key("eb") == "D#"
	assert continuo.theory.resolve_key("H") == "C"
	assert continuo.theory.resolve_key(None) == "C"


def test_resolve_chord_type () -> None:

	assert continuo.theory.resolve_chord_type("min7") == "min7"
	assert continuo.theory.resolve_chord_type("add9") == "major"


# ---------------------------------------------------------------------------
# Scales and chords
# ---------------------------------------------------------------------------

def test_c_major_scale () -> None:

	assert continuo.theory.get_scale("C", "major", 4) == ["C4", "D4", "E4", "F4", "G4", "A4", "B4"]


def test_scale_carries_into_next_octave () -> None:

	assert continuo.theory.get_scale("A", "minor", 3) == ["A3", "B3", "C4", "D4", "E4", "F4", "G4"]


def test_scale_lengths () -> None:

	assert len(continuo.theory.get_scale("C", "pentatonic")) == 5
	assert len(continuo.theory.get_scale("C", "blues")) == 6
	assert len(continuo.theory.get_scale("C", "chromatic")) == 12


def test_unknown_mode_builds_major_scale () -> None:

	assert continuo.theory.get_scale("D", "nonsense", 4) == continuo.theory.get_scale("D", "major", 4)


def test_unknown_key_builds_on_c () -> None:

	assert continuo.theory.get_scale("X", "major", 4) == continuo.theory.get_scale("C", "major", 4)


def test_chords () -> None:

	assert continuo.theory.get_chord("C", "maj7", 3) == ["C3", "E3", "G3", "B3"]
	assert continuo.theory.get_chord("A", "minor", 3) == ["A3", "C4", "E4"]
	assert continuo.theory.get_chord("C", "sus4", 4) == ["C4", "F4", "G4"]


def test_unknown_chord_type_is_major_triad () -> None:

	assert continuo.theory.get_chord("G", "hyper", 3) == ["G3", "B3", "D4"]


def test_chord_from_degree () -> None:

	assert continuo.theory.get_chord_from_degree("C", "major", 4, "dom7", 3) == ["G3", "B3", "D4", "F4"]
	assert continuo.theory.get_chord_from_degree("A", "minor", 2, "major", 3) == ["C3", "E3", "G3"]


def test_chord_degree_wraps_around_scale () -> None:

	assert continuo.theory.get_chord_from_degree("C", "major", 7, "major", 3) == ["C3", "E3", "G3"]


def test_chord_name () -> None:

	assert continuo.theory.chord_name("A", "min7") == "Am7"
	assert continuo.theory.chord_name("Bb", "major") == "A#"
	assert continuo.theory.chord_name("G", "dom7") == "G7"


def test_progression_fallback_is_pop () -> None:

	assert continuo.theory.get_progression("polka") == continuo.theory.get_progression("pop")
	assert len(continuo.theory.get_progression("blues")) == 12


# ---------------------------------------------------------------------------
# Melodic walk
# ---------------------------------------------------------------------------

C_MAJOR = continuo.theory.get_scale("C", "major", 4)
C_TRIAD = continuo.theory.get_chord("C", "major", 4)


def test_melodic_note_stays_in_scale_and_octave () -> None:

	rng = random.Random(3)
	scale_pcs = {continuo.theory.pitch_class(n) for n in C_MAJOR}

	for _ in range(500):
		note = continuo.theory.get_next_melodic_note("E4", C_MAJOR, C_TRIAD, rng=rng)
		midi = continuo.theory.note_to_midi(note)
		assert midi % 12 in scale_pcs
		assert abs(midi - 64) <= 12


def test_melodic_note_is_deterministic_with_seed () -> None:

	a = [continuo.theory.get_next_melodic_note("C4", C_MAJOR, C_TRIAD, rng=random.Random(9)) for _ in range(5)]
	b = [continuo.theory.get_next_melodic_note("C4", C_MAJOR, C_TRIAD, rng=random.Random(9)) for _ in range(5)]

	assert a == b


def test_empty_scale_returns_current_pitch () -> None:

	assert continuo.theory.get_next_melodic_note("D4", [], C_TRIAD, rng=random.Random(1)) == "D4"


def _interval_counts (leap: bool, trials: int = 20000) -> tuple:

	rng = random.Random(2024)
	stepwise = 0
	leaps = 0

	for _ in range(trials):
		note = continuo.theory.get_next_melodic_note("C4", C_MAJOR, C_TRIAD, direction=0, leap=leap, rng=rng)
		interval = abs(continuo.theory.note_to_midi(note) - 60)
		if interval <= 2:
			stepwise += 1
		elif 3 <= interval <= 7:
			leaps += 1

	return stepwise, leaps


def test_steps_are_favoured_per_candidate () -> None:

	"""
	Without ``leap`` each stepwise candidate is chosen more often than each leap candidate.

	Around C4 in C major there are three stepwise candidates (B3, C4, D4)
	and six leaps of 3-7 semitones (F3, G3, A3, E4, F4, G4), so the totals
	alone are close; the per-candidate rate is what the weights separate.
	"""

	stepwise_candidates = [n for n in range(48, 73) if n % 12 in {0, 2, 4, 5, 7, 9, 11} and abs(n - 60) <= 2]
	leap_candidates = [n for n in range(48, 73) if n % 12 in {0, 2, 4, 5, 7, 9, 11} and 3 <= abs(n - 60) <= 7]

	stepwise, leaps = _interval_counts(leap=False)

	assert stepwise / len(stepwise_candidates) > leaps / len(leap_candidates)


def test_leap_flag_shifts_motion_toward_leaps () -> None:

	steps_without, leaps_without = _interval_counts(leap=False)
	steps_with, leaps_with = _interval_counts(leap=True)

	assert steps_without / (steps_without + leaps_without) > steps_with / (steps_with + leaps_with)


def test_direction_preference () -> None:

	rng = random.Random(5)
	up = 0
	down = 0

	for _ in range(5000):
		midi = continuo.theory.note_to_midi(continuo.theory.get_next_melodic_note("C4", C_MAJOR, C_TRIAD, direction=1, rng=rng))
		if midi > 60:
			up += 1
		elif midi < 60:
			down += 1

	assert up > down


# ---------------------------------------------------------------------------
# Approach notes
# ---------------------------------------------------------------------------

def test_chromatic_approach_is_a_semitone_away () -> None:

	rng = random.Random(0)

	results = {continuo.theory.get_approach_note(60, C_MAJOR, "chromatic", rng) for _ in range(100)}

	assert results == {59, 61}


def test_scale_approach_uses_neighbouring_scale_tones () -> None:

	rng = random.Random(0)

	results = {continuo.theory.get_approach_note(64, C_MAJOR, "scale", rng) for _ in range(100)}

	assert results == {62, 65}


def test_scale_approach_outside_scale_range () -> None:

	rng = random.Random(0)

	results = {continuo.theory.get_approach_note(60, C_MAJOR, "scale", rng) for _ in range(100)}

	assert results == {58, 62}


def test_enclosure_and_default_approach () -> None:

	assert continuo.theory.get_approach_note(60, C_MAJOR, "enclosure") == 61
	assert continuo.theory.get_approach_note(60, C_MAJOR, "other") == 59
