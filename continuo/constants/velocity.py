"""MIDI velocity constants.

Velocity is the MIDI attack strength. Emitted notes always stay within
``MIN_VELOCITY``-``MAX_VELOCITY``; the per-bar base velocity computed by the
dynamics model is held within ``BASE_VELOCITY_FLOOR``-``BASE_VELOCITY_CEILING``.
"""

MIN_VELOCITY = 1
MAX_VELOCITY = 127

BASE_VELOCITY_FLOOR = 40
BASE_VELOCITY_CEILING = 100
