from __future__ import annotations

import typing
import types


class InvalidArgumentException(TypeError):
	"""
	[InvalidArgumentException(TypeError)] - Exception representing an invalid type passed to a parameter
	"""

	def __init__(self, caller: typing.Callable | types.FunctionType | types.MethodType = None, parameter_name: str = None, argument_type: type = None, parameter_types: typing.Iterable[type | str] = None):
		"""
		[InvalidArgumentException(TypeError)] - Exception representing an invalid type passed to a parameter
		- Constructor -
		:param caller: (CALLABLE) The callable that raised this exception
		:param parameter_name: (str) The name of the parameter
		:param argument_type: (type) The type of the argument passed in
		:param parameter_types: (ITERABLE[type]) The types this parameter accepts or '<UNKNOWN>' if None
		"""

		if caller is None or parameter_name is None or argument_type is None:
			super().__init__()
		else:
			if parameter_types is None:
				type_list: str = '<UNKNOWN>'
			else:
				names: tuple[str, ...] = tuple(f"'{x.__name__ if isinstance(x, type) else x}'" for x in parameter_types)
				type_list: str = f'either {", ".join(names[:-1])} or {names[-1]}' if len(names) > 1 else names[0]

			callable_type: str = 'Method' if '.' in caller.__qualname__ else 'Function'
			super().__init__(f'{callable_type} {caller.__qualname__.replace(".", "::")} - parameter \'{parameter_name}\' must be {type_list}; got \'{argument_type}\'')


class AutomatonException(RuntimeError):
	pass


class AutomatonConstructionException(AutomatonException):
	"""
	[AutomatonConstructionException(AutomatonException)] - Base of every error raised while building a transition table
	"""

	pass


class UnknownInitialStateException(AutomatonConstructionException):
	def __init__(self, name: str):
		self.name: str = name
		super().__init__(f'Initial state \'{name}\' not present in set of all states')


class UnknownFinalStateException(AutomatonConstructionException):
	def __init__(self, name: str):
		self.name: str = name
		super().__init__(f'Final state \'{name}\' not present in set of all states')


class UnknownTransitionStateException(AutomatonConstructionException):
	def __init__(self, name: str, ordinal: int):
		self.name: str = name
		self.ordinal: int = ordinal
		super().__init__(f'State \'{name}\' not found in set of all states while parsing transition {ordinal}')


class SymbolNotInAlphabetException(AutomatonConstructionException):
	def __init__(self, symbol: typing.Hashable, ordinal: int):
		self.symbol: typing.Hashable = symbol
		self.ordinal: int = ordinal
		super().__init__(f'Symbol {symbol!r} of transition {ordinal} not present in given alphabet')


class NullTransitionNotAllowedException(AutomatonConstructionException):
	def __init__(self, ordinal: int):
		self.ordinal: int = ordinal
		super().__init__(f'Null transition {ordinal} not allowed in deterministic automata')


class ReservedSymbolInAlphabetException(AutomatonConstructionException):
	def __init__(self, symbol: typing.Any):
		self.symbol: typing.Any = symbol
		super().__init__(f'Alphabet cannot contain {symbol!r} as it is reserved for null transitions')


class AmbiguousTransitionException(AutomatonConstructionException):
	def __init__(self, state: str, symbol: typing.Hashable, destinations: typing.Iterable[str]):
		self.state: str = state
		self.symbol: typing.Hashable = symbol
		self.destinations: tuple[str, ...] = tuple(destinations)
		super().__init__(f'State \'{state}\' has {len(self.destinations)} destinations on symbol {symbol!r}: {", ".join(self.destinations)}')


class EvaluationLimitException(AutomatonException):
	"""
	[EvaluationLimitException(AutomatonException)] - Exception raised when a search explores more configurations than allowed
	"""

	def __init__(self, limit: int):
		self.limit: int = limit
		super().__init__(f'Backtracking search exceeded {limit} explored configurations')


class DescriptionFormatException(ValueError):
	"""
	[DescriptionFormatException(ValueError)] - Exception representing a malformed automaton description
	"""

	def __init__(self, what: str = ''):
		super().__init__(what)


class ConfigurationException(ValueError):
	"""
	[ConfigurationException(ValueError)] - Exception representing an invalid engine setting
	"""

	def __init__(self, what: str = ''):
		super().__init__(what)
