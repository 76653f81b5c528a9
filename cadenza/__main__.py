import argparse
import logging
import os
import sys
import typing

import yaml

import cadenza.midi_file
import cadenza.orchestrator
import cadenza.producer
import cadenza.styling


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def load_command (command_path: str) -> cadenza.producer.ProducerCommand:

	"""
	Load a producer command from a YAML (or JSON) file.
	"""

	with open(command_path, 'r') as f:
		data = yaml.safe_load(f)

	if not isinstance(data, dict):
		raise ValueError(f"{command_path} does not contain a producer command mapping")

	return cadenza.producer.ProducerCommand.from_dict(data)


def parse_args (argv: typing.Optional[typing.List[str]] = None) -> argparse.Namespace:

	parser = argparse.ArgumentParser(prog="cadenza", description="Render a producer command to a MIDI file.")

	parser.add_argument("command", nargs="?", help="YAML or JSON producer command; a genre preset is used when omitted")
	parser.add_argument("--genre", default=cadenza.styling.DEFAULT_GENRE, choices=sorted(cadenza.styling.GENRE_INSTRUMENTS), help="instrument and effect styling")
	parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible segment")
	parser.add_argument("--output", default=None, help="MIDI file to write (default: <segment id>.mid)")

	return parser.parse_args(argv)


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the cadenza command-line renderer.
	"""

	args = parse_args(argv)

	if args.command:

		if not os.path.exists(args.command):
			logger.error(f"Command file {args.command} not found.")
			return 1

		try:
			command = load_command(args.command)
		except ValueError as e:
			logger.error(f"Invalid producer command: {e}")
			return 1

	else:
		logger.info(f"No command file given. Using the {args.genre} preset.")
		command = cadenza.orchestrator.preset_command(args.genre)

	segment = cadenza.orchestrator.Orchestrator(genre=args.genre, seed=args.seed).process(command)

	for track in segment.tracks:
		logger.info(f"  {track.role}: {len(track.events)} events ({track.instrument})")

	output = args.output or f"{segment.id}.mid"
	cadenza.midi_file.write_segment(segment, output)

	return 0


if __name__ == "__main__":
	sys.exit(main())
