from __future__ import annotations

import collections
import typing

from . import Exceptions
from . import Table


def accepts_deterministic(table: Table.TransitionTable, input_: typing.Iterable[typing.Hashable]) -> bool:
	"""
	Walks a single path through the table
	When several destinations carry a symbol the last one in index order is taken
	When none carries it the current state is kept
	:param table: The transition table
	:param input_: The input symbols
	:return: Whether the state reached after all input is final
	"""

	current: int = table.initial

	for symbol in input_:
		destinations: tuple[int, ...] = table.destinations(current, symbol)

		if len(destinations) > 0:
			current = destinations[-1]

	return table.is_final(current)


def epsilon_closure(table: Table.TransitionTable, states: typing.Iterable[int]) -> frozenset[int]:
	"""
	Computes the fixpoint of null transitions from a set of states
	:param table: The transition table
	:param states: The starting state indices
	:return: The starting states plus every state reachable through null transitions only
	"""

	closure: set[int] = set(states)
	queue: collections.deque[int] = collections.deque(closure)

	while len(queue) > 0:
		current: int = queue.popleft()

		for destination in table.epsilon_destinations(current):
			if destination not in closure:
				closure.add(destination)
				queue.append(destination)

	return frozenset(closure)


def step(table: Table.TransitionTable, states: typing.Iterable[int], symbol: typing.Hashable) -> frozenset[int]:
	"""
	Advances a closed set of states by one symbol
	:param table: The transition table
	:param states: The current state indices
	:param symbol: The consumed symbol
	:return: The closure of every state reached by consuming 'symbol'
	"""

	reached: set[int] = set()

	for state in states:
		reached.update(table.destinations(state, symbol))

	return epsilon_closure(table, reached)


def accepts_closure(table: Table.TransitionTable, input_: typing.Iterable[typing.Hashable]) -> bool:
	"""
	Simulates every path at once by tracking the set of reachable states
	:param table: The transition table
	:param input_: The input symbols
	:return: Whether any state reached after all input is final
	"""

	current: frozenset[int] = epsilon_closure(table, (table.initial,))

	for symbol in input_:
		if len(current) == 0:
			return False

		current = step(table, current, symbol)

	return not current.isdisjoint(table.finals)


def accepts_backtrack(table: Table.TransitionTable, state: int, position: int, input_: typing.Sequence[typing.Hashable], *, limit: typing.Optional[int] = None) -> bool:
	"""
	Explores every path one at a time, depth first
	Each configuration (state, position) is visited at most once so null transition cycles terminate
	:param table: The transition table
	:param state: The index of the state to start from
	:param position: The index of the next input symbol
	:param input_: The input symbols
	:param limit: The maximum number of explored configurations or None for no limit
	:return: Whether any path consumes all input and ends in a final state
	:raises EvaluationLimitException: If more than 'limit' configurations are explored
	"""

	length: int = len(input_)
	pending: list[tuple[int, int]] = [(state, position)]
	visited: set[tuple[int, int]] = set()

	while len(pending) > 0:
		configuration: tuple[int, int] = pending.pop()

		if configuration in visited:
			continue
		elif limit is not None and len(visited) >= limit:
			raise Exceptions.EvaluationLimitException(limit)

		visited.add(configuration)
		current, consumed = configuration

		if consumed == length and table.is_final(current):
			return True

		for destination in range(table.state_count - 1, -1, -1):
			labels: frozenset[typing.Hashable] = table.labels(current, destination)

			if len(labels) == 0:
				continue

			# Both branches; a destination may be reachable by symbol and by null transition
			if Table.Epsilon in labels:
				pending.append((destination, consumed))

			if consumed < length and input_[consumed] is not Table.Epsilon and input_[consumed] in labels:
				pending.append((destination, consumed + 1))

	return False
