from __future__ import annotations

import numpy
import typing

from . import Description
from . import Exceptions
from . import Logger
from . import Misc


EPSILON_SYMBOL: str = 'ϵ'


class __EpsilonLabel__:
	"""
	INTERNAL CLASS; DO NOT USE
	Edge label of a null transition; use the 'Epsilon' singleton
	"""

	__SINGLETON: __EpsilonLabel__ = ...

	def __new__(cls) -> __EpsilonLabel__:
		if __EpsilonLabel__.__SINGLETON is ...:
			__EpsilonLabel__.__SINGLETON = super().__new__(cls)

		return __EpsilonLabel__.__SINGLETON

	def __repr__(self) -> str:
		return 'Epsilon'

	def __str__(self) -> str:
		return EPSILON_SYMBOL

	def __reduce__(self) -> str:
		return 'Epsilon'


Epsilon: __EpsilonLabel__ = __EpsilonLabel__()


class State:
	"""
	Class representing one state of a built automaton
	"""

	def __init__(self, name: str, index: int):
		self.__name__: str = str(name)
		self.__index__: int = int(index)

	def __eq__(self, other: State) -> bool:
		return isinstance(other, State) and self.__index__ == other.__index__ and self.__name__ == other.__name__

	def __hash__(self) -> int:
		return hash((self.__name__, self.__index__))

	def __repr__(self) -> str:
		return f'<State[{self.__index__}] {self.__name__}>'

	@property
	def name(self) -> str:
		return self.__name__

	@property
	def index(self) -> int:
		return self.__index__


class TransitionTable:
	"""
	Class representing the immutable adjacency-by-symbol table of an automaton
	Cell (i, j) holds the set of labels moving state i to state j
	Use 'build' to create instances
	"""

	def __init__(self, states: tuple[State, ...], initial: int, finals: frozenset[int], alphabet: frozenset[typing.Hashable], cells: numpy.ndarray, masks: dict[typing.Hashable, numpy.ndarray], deterministic: bool):
		"""
		Class representing the immutable adjacency-by-symbol table of an automaton
		- Constructor -
		SHOULD NOT BE CALLED DIRECTLY; USE 'Table.build'
		"""

		self.__states__: tuple[State, ...] = states
		self.__indices__: dict[str, int] = {state.name: state.index for state in states}
		self.__initial__: int = initial
		self.__finals__: frozenset[int] = finals
		self.__alphabet__: frozenset[typing.Hashable] = alphabet
		self.__cells__: numpy.ndarray = cells
		self.__masks__: dict[typing.Hashable, numpy.ndarray] = masks
		self.__deterministic__: bool = deterministic
		self.__cells__.flags.writeable = False

		for mask in self.__masks__.values():
			mask.flags.writeable = False

	def __repr__(self) -> str:
		return f'<TransitionTable[{"DFA" if self.__deterministic__ else "NFA"}] states={len(self.__states__)} initial={self.__states__[self.__initial__].name}>'

	def __str__(self) -> str:
		lines: list[str] = [repr(self)]

		for state in self.__states__:
			marker: str = ('>' if state.index == self.__initial__ else ' ') + ('*' if state.index in self.__finals__ else ' ')
			edges: list[str] = [f'{self.__states__[j].name}: {{{", ".join(sorted(str(x) for x in self.labels(state.index, j)))}}}' for j in range(len(self.__states__)) if len(self.__cells__[state.index, j]) > 0]
			lines.append(f'  {marker} {state.name} --- {", ".join(edges)}')

		return '\n'.join(lines)

	def index_of(self, name: str) -> int:
		"""
		:param name: The state name
		:return: The dense index of the named state
		:raises KeyError: If no such state exists
		"""

		if name not in self.__indices__:
			raise KeyError(f'No such state: \'{name}\'')

		return self.__indices__[name]

	def state(self, index: int) -> State:
		"""
		:param index: The state index
		:return: The state at that index
		"""

		return self.__states__[index]

	def labels(self, source: int, destination: int) -> frozenset[typing.Hashable]:
		"""
		:param source: The index of the state the edges leave
		:param destination: The index of the state the edges enter
		:return: The labels (symbols and possibly 'Epsilon') on the edges between both states
		"""

		return self.__cells__[source, destination]

	def destinations(self, source: int, symbol: typing.Hashable) -> tuple[int, ...]:
		"""
		Scans one row of this table for a symbol
		:param source: The index of the state to leave
		:param symbol: The input symbol
		:return: The indices of all states reached by consuming 'symbol', in index order
		"""

		if symbol is Epsilon:
			return ()

		mask: typing.Optional[numpy.ndarray] = self.__masks__.get(symbol)
		return () if mask is None else tuple(int(x) for x in numpy.flatnonzero(mask[source]))

	def epsilon_destinations(self, source: int) -> tuple[int, ...]:
		"""
		:param source: The index of the state to leave
		:return: The indices of all states reached through a null transition, in index order
		"""

		mask: typing.Optional[numpy.ndarray] = self.__masks__.get(Epsilon)
		return () if mask is None else tuple(int(x) for x in numpy.flatnonzero(mask[source]))

	def is_final(self, index: int) -> bool:
		return index in self.__finals__

	@property
	def states(self) -> tuple[State, ...]:
		return self.__states__

	@property
	def state_count(self) -> int:
		return len(self.__states__)

	@property
	def initial(self) -> int:
		return self.__initial__

	@property
	def finals(self) -> frozenset[int]:
		return self.__finals__

	@property
	def alphabet(self) -> frozenset[typing.Hashable]:
		return self.__alphabet__

	@property
	def cells(self) -> numpy.ndarray:
		"""
		:return: The read-only n x n object array of label sets
		"""

		return self.__cells__

	@property
	def deterministic(self) -> bool:
		return self.__deterministic__

	@property
	def has_epsilon(self) -> bool:
		"""
		:return: Whether any cell of this table holds a null transition
		"""

		return Epsilon in self.__masks__


def build(description: Description.AutomatonDescription, *, deterministic: bool, strict: bool = False, logger: typing.Optional[Logger.Logger] = None) -> TransitionTable:
	"""
	Builds and validates the transition table of a description
	Fails on the first violation; a partially valid table is never returned
	:param description: The automaton description
	:param deterministic: Whether to build a DFA table (null transitions are refused)
	:param strict: Whether a DFA table may hold at most one destination per state and symbol
	:param logger: The optional logger receiving construction messages
	:return: The immutable transition table
	:raises InvalidArgumentException: If 'description' is not an AutomatonDescription
	:raises ReservedSymbolInAlphabetException: If an NFA alphabet contains the epsilon marker
	:raises UnknownInitialStateException: If the initial state is not declared
	:raises UnknownFinalStateException: If a final state is not declared
	:raises SymbolNotInAlphabetException: If a transition symbol is not declared
	:raises UnknownTransitionStateException: If a transition names an undeclared state
	:raises NullTransitionNotAllowedException: If a DFA transition has no symbol
	:raises AmbiguousTransitionException: If 'strict' and a DFA state has several destinations for one symbol
	"""

	Misc.raise_ifn(isinstance(description, Description.AutomatonDescription), Exceptions.InvalidArgumentException(build, 'description', type(description), (Description.AutomatonDescription,)))
	deterministic = bool(deterministic)
	kind: str = 'DFA' if deterministic else 'NFA'
	alphabet: frozenset[typing.Hashable] = description.alphabet

	if not deterministic:
		for reserved in (EPSILON_SYMBOL, Epsilon):
			Misc.raise_if(reserved in alphabet, Exceptions.ReservedSymbolInAlphabetException(reserved))

	states: tuple[State, ...] = tuple(State(name, index) for index, name in enumerate(description.states))
	indices: dict[str, int] = {}

	for state in states:
		indices.setdefault(state.name, state.index)

	Misc.raise_ifn(description.initial_state in indices, Exceptions.UnknownInitialStateException(description.initial_state))
	initial: int = indices[description.initial_state]
	finals: set[int] = set()

	for name in description.final_states:
		Misc.raise_ifn(name in indices, Exceptions.UnknownFinalStateException(name))
		finals.add(indices[name])

	size: int = len(states)
	cells: numpy.ndarray = numpy.empty((size, size), dtype=object)
	masks: dict[typing.Hashable, numpy.ndarray] = {}

	for i in range(size):
		for j in range(size):
			cells[i, j] = set()

	def resolve(name: str, ordinal: int) -> int:
		Misc.raise_ifn(name in indices, Exceptions.UnknownTransitionStateException(name, ordinal))
		return indices[name]

	for ordinal, transition in enumerate(description.transitions, 1):
		label: typing.Hashable

		if not transition.is_null:
			Misc.raise_ifn(transition.symbol in alphabet, Exceptions.SymbolNotInAlphabetException(transition.symbol, ordinal))
			label = transition.symbol
		elif deterministic:
			raise Exceptions.NullTransitionNotAllowedException(ordinal)
		else:
			label = Epsilon

		source: int = resolve(transition.source, ordinal)
		destination: int = resolve(transition.destination, ordinal)
		cells[source, destination].add(label)

		if label not in masks:
			masks[label] = numpy.zeros((size, size), dtype=bool)

		masks[label][source, destination] = True

		if logger is not None:
			logger.debug(f'{kind} transition {ordinal}: {transition.source} --{label}--> {transition.destination}')

	if deterministic and strict:
		for state in states:
			for symbol, mask in masks.items():
				if numpy.count_nonzero(mask[state.index]) > 1:
					raise Exceptions.AmbiguousTransitionException(state.name, symbol, (states[int(j)].name for j in numpy.flatnonzero(mask[state.index])))

	frozen: numpy.ndarray = numpy.frompyfunc(frozenset, 1, 1)(cells)
	table: TransitionTable = TransitionTable(states, initial, frozenset(finals), alphabet, frozen, masks, deterministic)

	if logger is not None:
		logger.info(f'Built {kind} table: {size} state(s), {len(alphabet)} symbol(s), {len(description.transitions)} transition(s)')

	return table
