"""Tick-based timing constants.

The engine works on a fixed 4/4 grid of 16 sixteenth-note steps per bar with
**512 ticks per bar** (128 ticks per quarter note). Every ``NoteEvent.start_tick``
is expressed in these units, and the MIDI writer uses the same resolution so
ticks map one-to-one onto the file.
"""

STEPS_PER_BAR = 16
BEATS_PER_BAR = 4

TICKS_PER_SIXTEENTH = 32
TICKS_PER_EIGHTH = 64
TICKS_PER_QUARTER = 128
TICKS_PER_HALF = 256
TICKS_PER_WHOLE = 512

TICKS_PER_BAR = TICKS_PER_WHOLE
