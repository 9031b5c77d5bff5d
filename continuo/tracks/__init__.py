"""Per-bar track generators.

Each generator appends :class:`~continuo.events.NoteEvent` values for one bar
to its own track, reading a shared :class:`~continuo.tracks.bar.BarContext`:

- ``continuo.tracks.drums`` - style drum grids with fills, ghost notes and hi-hat colour
- ``continuo.tracks.pad`` - one held chord per bar
- ``continuo.tracks.chords`` - arpeggios, syncopated stabs or block chords by style
- ``continuo.tracks.bass`` - walking, groove, offbeat, Alberti or sustained lines
- ``continuo.tracks.melody`` - motif-driven phrases with tension and resolution
"""
