"""
Continuo - a procedural composition engine that writes music in segments.

Give it a key, a mode, a tempo, a style and a bar count, and Continuo
composes a multi-track segment: melody, chords, bass, pad and drums,
arranged into song sections with their own density and loudness. Hand the
segment's ending state back in and the next segment carries on where the
last one stopped - same place in the chord progression, same motif, same
loudness trend - so an endless piece can be generated one stretch at a time.

What it does:

- **Music theory.** Scales in eight modes, triads, sevenths and suspended
  chords, per-style progressions, and a weighted random melodic walk that
  favours chord tones and stepwise motion.
- **Five styles.** Ambient, lo-fi, electronic, classical and jazz, each
  with its own drum grid, bass archetype (sustained, groove, offbeat,
  Alberti, walking), chord voicing, register and GM instruments.
- **Song form.** Intro, verse, build, climax and outro over a first
  segment; continuations can continue, build, peak, wind down or contrast.
  Melodies move in two-bar question and answer phrases.
- **Motifs.** A short scale-degree motif is transposed, reversed and
  inverted as the harmony moves, and survives from segment to segment.
- **Dynamics.** A loudness trend swells and fades across each segment,
  with phrase-level shaping and humanised timing and velocity throughout.
- **MIDI out.** Segments encode to standard type 1 MIDI files via ``mido``.
- **Reproducible.** Pass ``seed=`` or your own ``random.Random`` and every
  decision repeats exactly.

Minimal example:

    ```python
    import continuo

    options = continuo.GenerationOptions(bars=16, key="A", mode="minor", style="lofi", seed=1)
    first = continuo.generate_segment(options)
    first.to_midi_file().save("part-1.mid")

    context = continuo.ContinuationContext.from_segment_info(first.segment_info, options)
    second = continuo.generate_segment(
        continuo.GenerationOptions(bars=16, key="A", mode="minor", style="lofi",
            total_bars_offset=16, extension_direction="build", seed=2),
        context,
    )
    second.to_midi_file().save("part-2.mid")
    ```

Package-level exports: ``GenerationOptions``, ``Segment``, ``generate_segment``,
``ContinuationContext``, ``SegmentInfo``.
"""

import continuo.context
import continuo.engine


ContinuationContext = continuo.context.ContinuationContext
GenerationOptions = continuo.engine.GenerationOptions
Segment = continuo.engine.Segment
SegmentInfo = continuo.context.SegmentInfo
generate_segment = continuo.engine.generate_segment
