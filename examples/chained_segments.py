import logging

import continuo
import continuo.context


logging.basicConfig(level=logging.INFO)

KEY = "E"
MODE = "minor"
STYLE = "electronic"
TEMPO = 124

# Each segment reshapes the energy of the piece while the harmony and motif carry on.
DIRECTIONS = ["continue", "build", "peak", "contrast", "wind_down"]

context = None
total_bars = 0

for index, direction in enumerate(DIRECTIONS):

	options = continuo.GenerationOptions(
		bars = 16,
		key = KEY,
		mode = MODE,
		tempo = TEMPO,
		style = STYLE,
		total_bars_offset = total_bars,
		extension_direction = direction,
		seed = index,
	)

	segment = continuo.generate_segment(options, context)
	total_bars += segment.segment_info.bars

	sections = " ".join(s.value for s in segment.sections)
	logging.info(f"Segment {index + 1} ({direction}): {sections}")

	segment.to_midi_file().save(f"chained-{index + 1}.mid")

	context = continuo.context.ContinuationContext.from_segment_info(segment.segment_info, options, total_bars)
