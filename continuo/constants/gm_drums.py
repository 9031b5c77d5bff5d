"""General MIDI percussion pitches used by the drum generator.

Drum hits are stored as pitch names like every other note event, so these are
the GM Level 1 key assignments spelled in the engine's pitch grammar
(C4 = 60, so C2 = 36 is the bass drum).

Drums always play on the reserved GM percussion channel (0-indexed 9).
"""

DRUM_CHANNEL = 9

KICK = "C2"				# 36 Bass Drum 1
SNARE = "D2"			# 38 Acoustic Snare
LOW_TOM = "G2"			# 43 High Floor Tom
CLOSED_HI_HAT = "F#2"	# 42 Closed Hi-Hat
OPEN_HI_HAT = "A#2"		# 46 Open Hi-Hat
RIDE = "D#3"			# 51 Ride Cymbal 1
