"""Constants for Continuo.

This package contains three sets of constants:

- ``continuo.constants.ticks`` - Tick-based timing for the fixed 4/4, 16-step grid
- ``continuo.constants.velocity`` - MIDI velocity limits used by the engine
- ``continuo.constants.gm_drums`` - General MIDI percussion pitches and the drum channel
"""
