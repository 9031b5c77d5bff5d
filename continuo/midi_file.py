from __future__ import annotations

import base64
import collections
import dataclasses
import io
import logging
import typing

import mido

import continuo.constants.gm_drums
import continuo.constants.ticks
import continuo.events
import continuo.styles

if typing.TYPE_CHECKING:
	import continuo.engine


logger = logging.getLogger(__name__)


# Engine ticks map one-to-one onto file ticks.
TICKS_PER_BEAT = continuo.constants.ticks.TICKS_PER_QUARTER

# Shortest gap between two onsets of the same pitched note that is written as a re-strike.
MIN_RESTRIKE_TICKS = continuo.constants.ticks.TICKS_PER_SIXTEENTH

TRACK_NAMES: typing.Dict[continuo.events.TrackRole, str] = {
	continuo.events.TrackRole.MELODY: "Melody",
	continuo.events.TrackRole.CHORDS: "Chords",
	continuo.events.TrackRole.BASS: "Bass",
	continuo.events.TrackRole.PAD: "Pad",
	continuo.events.TrackRole.DRUMS: "Drums",
}


def _program (instruments: continuo.styles.Instruments, role: continuo.events.TrackRole) -> typing.Optional[int]:

	"""GM program for a pitched role, or None for drums."""

	if role is continuo.events.TrackRole.DRUMS:
		return None

	return typing.cast(int, getattr(instruments, role.value))


@dataclasses.dataclass
class SoundingNote:

	"""One pitch as it will be written: onset, release and velocity in file ticks."""

	channel: int
	note: int
	start: int
	end: int
	velocity: int


def voice_notes (events: typing.Sequence[continuo.events.NoteEvent]) -> typing.List[SoundingNote]:

	"""
	Split note events into single pitches so no pitch sounds twice at once.

	A pitch struck again while it is still sounding cuts the earlier note off
	at the new onset. On pitched channels a re-strike less than a sixteenth
	after the earlier onset is folded into that note instead, which then lasts
	until the later release. Drum hits are one-shots and only fold when struck on the same tick.
	"""

	voices: typing.Dict[typing.Tuple[int, int], typing.List[SoundingNote]] = collections.defaultdict(list)
	folded = 0

	for event in sorted(events, key=lambda e: e.start_tick):

		percussive = event.channel == continuo.constants.gm_drums.DRUM_CHANNEL
		fold_window = 1 if percussive else MIN_RESTRIKE_TICKS

		for pitch in event.midi_pitches:

			voice = voices[(event.channel, pitch)]

			if voice and event.start_tick < voice[-1].end:

				previous = voice[-1]

				if event.start_tick - previous.start < fold_window:
					previous.end = max(previous.end, event.end_tick)
					folded += 1
					continue

				previous.end = event.start_tick

			voice.append(SoundingNote(event.channel, pitch, event.start_tick, event.end_tick, event.velocity))

	if folded:
		logger.debug(f"Folded {folded} re-struck notes into the notes already sounding")

	return [note for voice in voices.values() for note in voice]


def build_track (
	role: continuo.events.TrackRole,
	events: typing.Sequence[continuo.events.NoteEvent],
	program: typing.Optional[int] = None
) -> mido.MidiTrack:

	"""
	Turn one role's note events into a MIDI track.

	Overlapping notes of the same pitch are resolved by :func:`voice_notes`.
	Messages are then placed at absolute ticks and sorted, with releases
	ahead of onsets on the same tick, and converted to the deltas MIDI files
	store.
	"""

	track = mido.MidiTrack()
	track.append(mido.MetaMessage("track_name", name=TRACK_NAMES[role], time=0))

	if program is not None:
		track.append(mido.Message("program_change", channel=role.channel, program=program, time=0))

	timed: typing.List[typing.Tuple[int, int, mido.Message]] = []

	for sounding in voice_notes(events):
		timed.append((sounding.start, 1, mido.Message("note_on", channel=sounding.channel, note=sounding.note, velocity=sounding.velocity)))
		timed.append((sounding.end, 0, mido.Message("note_off", channel=sounding.channel, note=sounding.note, velocity=0)))

	timed.sort(key=lambda item: (item[0], item[1]))

	last_tick = 0

	for tick, _, message in timed:
		track.append(message.copy(time=tick - last_tick))
		last_tick = tick

	return track


def build_midi_file (segment: continuo.engine.Segment) -> mido.MidiFile:

	"""
	Encode a segment as a type 1 MIDI file.

	The first track carries tempo and time signature; it is followed by one
	track per role in the order melody, chords, bass, pad, drums. Pitched
	tracks open with their style's GM program change; drums play on the
	percussion channel.
	"""

	instruments = continuo.styles.get_style_table(segment.options.style).instruments

	mid = mido.MidiFile(type=1, ticks_per_beat=TICKS_PER_BEAT)

	conductor = mido.MidiTrack()
	conductor.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(segment.options.tempo), time=0))
	conductor.append(mido.MetaMessage("time_signature", numerator=4, denominator=4, time=0))
	mid.tracks.append(conductor)

	for role in continuo.events.TrackRole:
		mid.tracks.append(build_track(role, segment.events(role), _program(instruments, role)))

	logger.debug(f"Encoded {sum(len(t) for t in segment.tracks.values())} note events into {len(mid.tracks)} tracks")

	return mid


def to_bytes (mid: mido.MidiFile) -> bytes:

	"""Serialise a MIDI file to bytes in memory."""

	buffer = io.BytesIO()
	mid.save(file=buffer)

	return buffer.getvalue()


def to_base64 (mid: mido.MidiFile) -> str:

	"""Serialise a MIDI file to ASCII base64 text."""

	return base64.b64encode(to_bytes(mid)).decode("ascii")
