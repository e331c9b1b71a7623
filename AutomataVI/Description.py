from __future__ import annotations

import typing

from . import Exceptions
from . import Misc


class Transition:
	"""
	Class representing one declared edge of an automaton description
	A transition without a symbol is a null (epsilon) transition
	"""

	def __init__(self, source: str, destination: str, symbol: typing.Optional[typing.Hashable] = None):
		"""
		Class representing one declared edge of an automaton description
		- Constructor -
		:param source: The name of the state the edge leaves
		:param destination: The name of the state the edge enters
		:param symbol: The symbol consumed by this edge or None for a null transition
		:raises InvalidArgumentException: If 'source' or 'destination' is not a string
		"""

		Misc.raise_ifn(isinstance(source, str), Exceptions.InvalidArgumentException(Transition.__init__, 'source', type(source), (str,)))
		Misc.raise_ifn(isinstance(destination, str), Exceptions.InvalidArgumentException(Transition.__init__, 'destination', type(destination), (str,)))
		Misc.raise_ifn(symbol is None or isinstance(symbol, typing.Hashable), Exceptions.InvalidArgumentException(Transition.__init__, 'symbol', type(symbol), ('Hashable', 'None')))
		self.__source__: str = source
		self.__destination__: str = destination
		self.__symbol__: typing.Optional[typing.Hashable] = symbol

	def __eq__(self, other: Transition) -> bool:
		return isinstance(other, Transition) and (self.__source__, self.__destination__, self.__symbol__) == (other.__source__, other.__destination__, other.__symbol__)

	def __hash__(self) -> int:
		return hash((self.__source__, self.__destination__, self.__symbol__))

	def __repr__(self) -> str:
		return f'<Transition {self.__source__} --{"ϵ" if self.is_null else repr(self.__symbol__)}--> {self.__destination__}>'

	@property
	def source(self) -> str:
		return self.__source__

	@property
	def destination(self) -> str:
		return self.__destination__

	@property
	def symbol(self) -> typing.Optional[typing.Hashable]:
		return self.__symbol__

	@property
	def is_null(self) -> bool:
		"""
		:return: Whether this transition consumes no symbol
		"""

		return self.__symbol__ is None


class AutomatonDescription:
	"""
	Class representing the declarative description of a finite automaton
	Structural checks (undeclared names, foreign symbols) happen when a transition table is built from it
	"""

	@classmethod
	def from_mapping(cls, mapping: typing.Mapping[str, typing.Any]) -> AutomatonDescription:
		"""
		Creates a description from a decoded document
		Expected keys are 'states', 'initial_state', 'final_states', 'alphabet' and 'transitions'
		Each transition is a mapping with keys 'from', 'to' and an optional 'on'
		Alphabet entries and 'on' labels are single characters
		:param mapping: The decoded document
		:return: The description
		:raises DescriptionFormatException: If a key is missing or holds a value of the wrong shape
		"""

		Misc.raise_ifn(isinstance(mapping, typing.Mapping), Exceptions.DescriptionFormatException(f'Expected a mapping at the document root, got \'{type(mapping).__name__}\''))
		layout: dict[str, typing.Any] = {
			'states': list[str],
			'initial_state': str,
			'final_states': list[str],
			'alphabet': list[str],
			'transitions': list[typing.Mapping[str, typing.Optional[str]]],
		}

		for key, annotation in layout.items():
			Misc.raise_ifn(key in mapping, Exceptions.DescriptionFormatException(f'Missing required key \'{key}\''))
			Misc.raise_ifn(Misc.matches_type(mapping[key], annotation), Exceptions.DescriptionFormatException(f'Key \'{key}\' must be of shape \'{annotation}\''))

		# Input strings are read one character at a time
		for symbol in mapping['alphabet']:
			Misc.raise_ifn(len(symbol) == 1, Exceptions.DescriptionFormatException(f'Alphabet symbol \'{symbol}\' must be exactly one character'))

		transitions: list[Transition] = []

		for ordinal, entry in enumerate(mapping['transitions'], 1):
			Misc.raise_ifn('from' in entry and 'to' in entry, Exceptions.DescriptionFormatException(f'Transition {ordinal} requires both \'from\' and \'to\''))
			Misc.raise_if(len(unknown := set(entry.keys()).difference(('from', 'to', 'on'))) > 0, Exceptions.DescriptionFormatException(f'Transition {ordinal} has unknown keys: {", ".join(sorted(unknown))}'))
			Misc.raise_ifn(isinstance(entry['from'], str) and isinstance(entry['to'], str), Exceptions.DescriptionFormatException(f'Transition {ordinal} state names must be strings'))
			Misc.raise_if(entry.get('on') is not None and len(entry['on']) != 1, Exceptions.DescriptionFormatException(f'Transition {ordinal} symbol \'{entry.get("on")}\' must be exactly one character'))
			transitions.append(Transition(entry['from'], entry['to'], entry.get('on')))

		return cls(mapping['states'], mapping['initial_state'], mapping['final_states'], mapping['alphabet'], transitions)

	def __init__(self, states: typing.Iterable[str], initial_state: str, final_states: typing.Iterable[str], alphabet: typing.Iterable[typing.Hashable], transitions: typing.Iterable[Transition | tuple[str, str, typing.Optional[typing.Hashable]]]):
		"""
		Class representing the declarative description of a finite automaton
		- Constructor -
		:param states: The ordered state names
		:param initial_state: The name of the starting state
		:param final_states: The names of the accepting states
		:param alphabet: The symbols this automaton reads
		:param transitions: The ordered transitions, either Transition instances or (source, destination, symbol) tuples
		:raises InvalidArgumentException: If an argument is of the wrong type
		"""

		Misc.raise_ifn(hasattr(states, '__iter__') and not isinstance(states, str), Exceptions.InvalidArgumentException(AutomatonDescription.__init__, 'states', type(states)))
		Misc.raise_ifn(isinstance(initial_state, str), Exceptions.InvalidArgumentException(AutomatonDescription.__init__, 'initial_state', type(initial_state), (str,)))
		Misc.raise_ifn(hasattr(final_states, '__iter__') and not isinstance(final_states, str), Exceptions.InvalidArgumentException(AutomatonDescription.__init__, 'final_states', type(final_states)))
		Misc.raise_ifn(hasattr(alphabet, '__iter__'), Exceptions.InvalidArgumentException(AutomatonDescription.__init__, 'alphabet', type(alphabet)))
		Misc.raise_ifn(hasattr(transitions, '__iter__'), Exceptions.InvalidArgumentException(AutomatonDescription.__init__, 'transitions', type(transitions)))

		self.__states__: tuple[str, ...] = tuple(states)
		self.__initial_state__: str = initial_state
		self.__final_states__: tuple[str, ...] = tuple(final_states)
		self.__alphabet__: frozenset[typing.Hashable] = frozenset(alphabet)
		self.__transitions__: tuple[Transition, ...] = tuple(x if isinstance(x, Transition) else Transition(*x) for x in transitions)
		Misc.raise_ifn(all(isinstance(x, str) for x in self.__states__), Exceptions.InvalidArgumentException(AutomatonDescription.__init__, 'states', type(states), ('Iterable[str]',)))
		Misc.raise_ifn(all(isinstance(x, str) for x in self.__final_states__), Exceptions.InvalidArgumentException(AutomatonDescription.__init__, 'final_states', type(final_states), ('Iterable[str]',)))

	def __repr__(self) -> str:
		return f'<AutomatonDescription states={len(self.__states__)} symbols={len(self.__alphabet__)} transitions={len(self.__transitions__)}>'

	@property
	def states(self) -> tuple[str, ...]:
		return self.__states__

	@property
	def initial_state(self) -> str:
		return self.__initial_state__

	@property
	def final_states(self) -> tuple[str, ...]:
		return self.__final_states__

	@property
	def alphabet(self) -> frozenset[typing.Hashable]:
		return self.__alphabet__

	@property
	def transitions(self) -> tuple[Transition, ...]:
		return self.__transitions__

	@property
	def has_null_transitions(self) -> bool:
		"""
		:return: Whether any declared transition consumes no symbol
		"""

		return any(x.is_null for x in self.__transitions__)
