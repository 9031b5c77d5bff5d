import argparse
import logging
import os
import sys
import typing

import yaml

import continuo.context
import continuo.engine


logger = logging.getLogger(__name__)


DEFAULTS: typing.Dict[str, typing.Any] = {
	"bars": 16,
	"key": "C",
	"mode": "major",
	"tempo": 90,
	"style": "ambient",
	"seed": None,
	"extension_direction": "continue",
	"segments": 1,
	"output_dir": ".",
	"prefix": "continuo",
}


def load_config (config_path: str = 'config.yaml') -> typing.Dict[str, typing.Any]:

	"""
	Read generation settings from a YAML file.

	A missing or empty file, or one whose top level is not a mapping of
	setting names, yields no settings; defaults and flags then apply.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"No config file at {config_path}, using defaults")
		return {}

	with open(config_path, 'r') as f:
		config = yaml.safe_load(f)

	if config is None:
		return {}

	if not isinstance(config, dict):
		logger.warning(f"Ignoring {config_path}: expected a mapping of settings, found {type(config).__name__}")
		return {}

	return config


def parse_args (argv: typing.Optional[typing.Sequence[str]] = None) -> argparse.Namespace:

	"""
	Parse command-line flags. Flags left unset fall back to the config file.
	"""

	parser = argparse.ArgumentParser(prog="continuo", description="Generate chained MIDI segments.")

	parser.add_argument("--config", default="config.yaml", help="YAML configuration file")
	parser.add_argument("--bars", type=int, help="bars per segment")
	parser.add_argument("--key", help="tonic, e.g. C, F#, Bb")
	parser.add_argument("--mode", help="scale mode, e.g. major, dorian")
	parser.add_argument("--tempo", type=float, help="tempo in BPM")
	parser.add_argument("--style", help="ambient, lofi, electronic, classical or jazz")
	parser.add_argument("--seed", type=int, help="seed for reproducible output")
	parser.add_argument("--extension-direction", dest="extension_direction", help="shape of continuing segments")
	parser.add_argument("--segments", type=int, help="number of segments to chain")
	parser.add_argument("--output-dir", dest="output_dir", help="directory for the MIDI files")
	parser.add_argument("--prefix", help="file name prefix")
	parser.add_argument("--verbose", action="store_true", help="log every bar")

	return parser.parse_args(argv)


def resolve_settings (config: typing.Mapping[str, typing.Any], args: argparse.Namespace) -> typing.Dict[str, typing.Any]:

	"""
	Merge defaults, the config file and command-line flags, later winning.
	"""

	settings = dict(DEFAULTS)
	settings.update({k: v for k, v in config.items() if k in DEFAULTS})
	settings.update({k: v for k, v in vars(args).items() if k in DEFAULTS and v is not None})

	return settings


def generate_files (settings: typing.Mapping[str, typing.Any]) -> typing.List[str]:

	"""
	Generate ``segments`` chained segments and write one MIDI file for each.

	Each segment after the first continues from the previous one's ending
	state, with the bar offset advanced by the bars already written.
	"""

	os.makedirs(settings["output_dir"], exist_ok=True)

	context: typing.Optional[continuo.context.ContinuationContext] = None
	total_bars = 0
	paths: typing.List[str] = []
	seed = settings["seed"]

	for index in range(int(settings["segments"])):

		options = continuo.engine.GenerationOptions(
			bars = int(settings["bars"]),
			key = settings["key"],
			mode = settings["mode"],
			tempo = settings["tempo"],
			style = settings["style"],
			total_bars_offset = total_bars,
			extension_direction = settings["extension_direction"],
			seed = None if seed is None else int(seed) + index,
		)

		segment = continuo.engine.generate_segment(options, context)
		total_bars += segment.segment_info.bars

		path = os.path.join(settings["output_dir"], f"{settings['prefix']}-{index + 1:03d}.mid")
		segment.to_midi_file().save(path)
		paths.append(path)

		logger.info(f"Wrote {path}")

		context = continuo.context.ContinuationContext.from_segment_info(segment.segment_info, options, total_bars)

	return paths


def main (argv: typing.Optional[typing.Sequence[str]] = None) -> int:

	"""
	Main entry point for the continuo command.
	"""

	args = parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	logger.info("Continuo starting...")

	try:
		config = load_config(args.config)
		settings = resolve_settings(config, args)
		paths = generate_files(settings)
	except (OSError, ValueError, yaml.YAMLError) as e:
		logger.error(f"Generation failed: {e}")
		return 1

	logger.info(f"Finished {len(paths)} segment(s)")

	return 0


if __name__ == "__main__":
	sys.exit(main())
