from __future__ import annotations

import os
import typing

from . import Config
from . import Description
from . import Evaluation
from . import Exceptions
from . import Loader
from . import Logger
from . import Misc
from . import Table


class Acceptor:
	"""
	Base class of every automaton able to decide whether it accepts an input
	"""

	KIND: str = ...

	def __init__(self, table: Table.TransitionTable, logger: typing.Optional[Logger.Logger] = None):
		Misc.raise_ifn(isinstance(table, Table.TransitionTable), Exceptions.InvalidArgumentException(Acceptor.__init__, 'table', type(table), (Table.TransitionTable,)))
		Misc.raise_ifn(logger is None or isinstance(logger, Logger.Logger), Exceptions.InvalidArgumentException(Acceptor.__init__, 'logger', type(logger), (Logger.Logger, 'None')))
		self.__table__: Table.TransitionTable = table
		self.__logger__: typing.Optional[Logger.Logger] = logger

	def __repr__(self) -> str:
		return f'<{type(self).__name__}[{self.KIND}] states={self.__table__.state_count} @ {hex(id(self)).upper()}>'

	def __accepts__(self, symbols: typing.Sequence[typing.Hashable]) -> bool:
		raise NotImplementedError()

	def test_string(self, input_: typing.Iterable[typing.Hashable]) -> bool:
		"""
		Checks whether this automaton accepts the given input
		Symbols outside the alphabet never match a transition; they lead toward rejection rather than an error
		:param input_: The input sequence; a string is read one character per symbol
		:return: Whether the input is accepted
		:raises InvalidArgumentException: If 'input_' is not iterable
		"""

		Misc.raise_ifn(hasattr(input_, '__iter__'), Exceptions.InvalidArgumentException(Acceptor.test_string, 'input_', type(input_), ('Iterable',)))
		symbols: tuple[typing.Hashable, ...] = tuple(input_)
		accepted: bool = self.__accepts__(symbols)

		if self.__logger__ is not None:
			self.__logger__.debug(f'{self.KIND} {"accepted" if accepted else "rejected"} input of length {len(symbols)}: {symbols!r}')

		return accepted

	@property
	def table(self) -> Table.TransitionTable:
		return self.__table__

	@property
	def kind(self) -> str:
		return self.KIND


class DeterministicAutomaton(Acceptor):
	"""
	Class representing a deterministic finite automaton (DFA)
	Evaluation walks a single path; a missing transition keeps the current state, and when a non-strict table
	holds several destinations for one symbol the last one in state order is taken
	"""

	KIND: str = 'DFA'

	@classmethod
	def from_file(cls, path: str | os.PathLike, *, strict: bool = False, logger: typing.Optional[Logger.Logger] = None) -> DeterministicAutomaton:
		"""
		Creates a DFA from a description file
		:param path: The '.json' or '.kvp' description file
		:param strict: Whether to refuse several destinations for one state and symbol
		:param logger: The optional logger
		:return: The automaton
		"""

		return cls(Loader.load(path), strict=strict, logger=logger)

	@classmethod
	def from_config(cls, description: Description.AutomatonDescription, config: Config.Config, logger: typing.Optional[Logger.Logger] = None) -> DeterministicAutomaton:
		return cls(description, strict=config.strict_deterministic, logger=logger)

	def __init__(self, description: Description.AutomatonDescription, *, strict: bool = False, logger: typing.Optional[Logger.Logger] = None):
		"""
		Class representing a deterministic finite automaton (DFA)
		- Constructor -
		:param description: The automaton description
		:param strict: Whether to refuse several destinations for one state and symbol
		:param logger: The optional logger
		:raises AutomatonConstructionException: If the description is invalid
		"""

		super().__init__(Table.build(description, deterministic=True, strict=strict, logger=logger), logger)

	def __accepts__(self, symbols: typing.Sequence[typing.Hashable]) -> bool:
		return Evaluation.accepts_deterministic(self.table, symbols)


class NonDeterministicAutomaton(Acceptor):
	"""
	Class representing a non-deterministic finite automaton (NFA) with optional null transitions
	The 'closure' strategy tracks every reachable state at once and is linear in the input length
	The 'backtrack' strategy explores paths one at a time and serves as a reference for the former
	"""

	KIND: str = 'NFA'

	@classmethod
	def from_file(cls, path: str | os.PathLike, *, strategy: str = 'closure', backtrack_limit: typing.Optional[int] = None, logger: typing.Optional[Logger.Logger] = None) -> NonDeterministicAutomaton:
		"""
		Creates an NFA from a description file
		:param path: The '.json' or '.kvp' description file
		:param strategy: The evaluation strategy, either 'closure' or 'backtrack'
		:param backtrack_limit: The maximum number of configurations a backtracking search may explore
		:param logger: The optional logger
		:return: The automaton
		"""

		return cls(Loader.load(path), strategy=strategy, backtrack_limit=backtrack_limit, logger=logger)

	@classmethod
	def from_config(cls, description: Description.AutomatonDescription, config: Config.Config, logger: typing.Optional[Logger.Logger] = None) -> NonDeterministicAutomaton:
		return cls(description, strategy=config.nfa_strategy, backtrack_limit=config.backtrack_limit, logger=logger)

	def __init__(self, description: Description.AutomatonDescription, *, strategy: str = 'closure', backtrack_limit: typing.Optional[int] = None, logger: typing.Optional[Logger.Logger] = None):
		"""
		Class representing a non-deterministic finite automaton (NFA) with optional null transitions
		- Constructor -
		:param description: The automaton description
		:param strategy: The evaluation strategy, either 'closure' or 'backtrack'
		:param backtrack_limit: The maximum number of configurations a backtracking search may explore or None for no limit
		:param logger: The optional logger
		:raises ValueError: If 'strategy' is unknown
		:raises AutomatonConstructionException: If the description is invalid
		"""

		Misc.raise_ifn(strategy in Config.Config.STRATEGIES, ValueError(f'Unknown NFA strategy \'{strategy}\'; expected one of [ {", ".join(Config.Config.STRATEGIES)} ]'))
		Misc.raise_ifn(backtrack_limit is None or (isinstance(backtrack_limit, int) and backtrack_limit > 0), ValueError('Backtrack limit must be a positive integer or None'))
		super().__init__(Table.build(description, deterministic=False, logger=logger), logger)
		self.__strategy__: str = strategy
		self.__backtrack_limit__: typing.Optional[int] = backtrack_limit

	def __accepts__(self, symbols: typing.Sequence[typing.Hashable]) -> bool:
		if self.__strategy__ == 'backtrack':
			return self.accepts_backtrack(symbols)
		else:
			return self.accepts_closure(symbols)

	def accepts_closure(self, input_: typing.Iterable[typing.Hashable]) -> bool:
		"""
		:param input_: The input sequence
		:return: Whether the input is accepted, using the state set simulation
		"""

		return Evaluation.accepts_closure(self.table, input_)

	def accepts_backtrack(self, input_: typing.Iterable[typing.Hashable]) -> bool:
		"""
		:param input_: The input sequence
		:return: Whether the input is accepted, using the depth first path search
		:raises EvaluationLimitException: If the search explores more configurations than this automaton's limit
		"""

		return Evaluation.accepts_backtrack(self.table, self.table.initial, 0, tuple(input_), limit=self.__backtrack_limit__)

	def closure(self, states: typing.Iterable[str]) -> frozenset[str]:
		"""
		:param states: The names of the starting states
		:return: The names of every state reachable from them through null transitions only
		:raises KeyError: If a state does not exist
		"""

		indices: tuple[int, ...] = tuple(self.table.index_of(name) for name in states)
		return frozenset(self.table.state(i).name for i in Evaluation.epsilon_closure(self.table, indices))

	@property
	def strategy(self) -> str:
		return self.__strategy__


def create(kind: str, description: Description.AutomatonDescription, config: typing.Optional[Config.Config] = None, logger: typing.Optional[Logger.Logger] = None) -> Acceptor:
	"""
	Creates an automaton of the requested kind
	:param kind: Either 'dfa' or 'nfa'
	:param description: The automaton description
	:param config: The engine settings or None for defaults
	:param logger: The optional logger
	:return: The automaton
	:raises ValueError: If 'kind' is unknown
	"""

	kinds: dict[str, type[DeterministicAutomaton] | type[NonDeterministicAutomaton]] = {'dfa': DeterministicAutomaton, 'nfa': NonDeterministicAutomaton}
	Misc.raise_ifn(str(kind).lower() in kinds, ValueError(f'Unknown automaton kind \'{kind}\'; expected one of [ {", ".join(kinds)} ]'))
	return kinds[str(kind).lower()].from_config(description, Config.Config() if config is None else config, logger)


DFA = DeterministicAutomaton
NFA = NonDeterministicAutomaton
