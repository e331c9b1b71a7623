from __future__ import annotations

import argparse
import sys
import typing

from . import Automata
from . import Config
from . import Description
from . import Exceptions
from . import Loader
from . import Logger


def build_parser() -> argparse.ArgumentParser:
	parser: argparse.ArgumentParser = argparse.ArgumentParser(prog='automata-vi', description='Tests whether a finite automaton accepts a string')
	parser.add_argument('file', help='The .json or .kvp file describing the automaton to run')
	parser.add_argument('-a', '--automaton', required=True, choices=['dfa', 'nfa'], type=str.lower, help='The type of automaton to run')
	parser.add_argument('-s', '--string', required=True, help='The string to test')
	parser.add_argument('--strategy', default=None, choices=list(Config.Config.STRATEGIES), help='NFA evaluation strategy (overrides the configuration file; ignored for DFAs)')
	parser.add_argument('--strict', action='store_true', default=None, help='Refuse DFA descriptions with several destinations for one state and symbol (ignored for NFAs)')
	parser.add_argument('--config', default=None, help='Path to a KVP engine configuration file')
	parser.add_argument('--log-level', default=None, type=str.upper, choices=list(Logger.Logger.LEVELS), help='Lowest level logged to stderr')
	return parser


def main(argv: typing.Optional[typing.Sequence[str]] = None) -> int:
	"""
	Runs the command line front end
	Prints 'Accepted' or 'Rejected' to stdout
	:param argv: The arguments, or None to read them from the command line
	:return: The exit status; 0 on a verdict, 1 if the description or configuration is invalid
	"""

	args: argparse.Namespace = build_parser().parse_args(argv)

	try:
		config: Config.Config = Config.Config() if args.config is None else Config.Config.load(args.config)
		config = config.replace(nfa_strategy=args.strategy, strict_deterministic=args.strict, log_level=args.log_level)
	except (Exceptions.ConfigurationException, OSError) as err:
		sys.stderr.write(f'Error reading configuration: {err}\n')
		return 1

	logger: Logger.Logger = Logger.Logger(sys.stderr, config.log_level, banner=False)

	if args.automaton == 'dfa' and args.strategy is not None:
		logger.warn('Option --strategy only applies to NFAs and is ignored')
	elif args.automaton == 'nfa' and args.strict:
		logger.warn('Option --strict only applies to DFAs and is ignored')

	try:
		description: Description.AutomatonDescription = Loader.load(args.file)
		machine: Automata.Acceptor = Automata.create(args.automaton, description, config, logger)
		accepted: bool = machine.test_string(args.string)
	except (Exceptions.DescriptionFormatException, OSError) as err:
		logger.error(f'Error reading description: {err}')
		return 1
	except Exceptions.AutomatonConstructionException as err:
		logger.error(f'Error reading configuration: {err}')
		return 1
	except Exceptions.EvaluationLimitException as err:
		logger.error(str(err))
		return 1
	finally:
		logger.detach()

	sys.stdout.write('Accepted\n' if accepted else 'Rejected\n')
	return 0


if __name__ == '__main__':
	sys.exit(main())
