from __future__ import annotations

import os
import typing

from . import Exceptions
from . import Logger
from . import Misc
from .Parser import KVP


class Config:
	"""
	Class holding the engine settings used when automata are created from files or the console

	KVP layout (every key optional):
		>>automaton
			nfa_strategy=closure
			strict_deterministic=false&B
			backtrack_limit=100000&I
		<<
		>>logging
			level=WARN
		<<
	"""

	STRATEGIES: tuple[str, ...] = ('closure', 'backtrack')

	@classmethod
	def decode(cls, data: str) -> Config:
		"""
		Parses engine settings from KVP text
		:param data: The KVP text
		:return: The settings
		:raises ConfigurationException: If the text is malformed or a setting is invalid
		"""

		try:
			document: KVP.KVP = KVP.KVP.decode(data, 'config')
		except KVP.KVPDecodeError as err:
			raise Exceptions.ConfigurationException(f'Malformed configuration: {err}') from err

		unknown: set[str] = set(document.keys()).difference(('automaton', 'logging'))
		Misc.raise_if(len(unknown) > 0, Exceptions.ConfigurationException(f'Unknown configuration section(s): {", ".join(sorted(unknown))}'))
		settings: dict[str, typing.Any] = {}

		for section, keys in (('automaton', ('nfa_strategy', 'strict_deterministic', 'backtrack_limit')), ('logging', ('level',))):
			if section not in document:
				continue

			namespace: KVP.KVP | list = document[section]
			Misc.raise_ifn(isinstance(namespace, KVP.KVP), Exceptions.ConfigurationException(f'\'{section}\' must be a namespace'))
			unknown = set(namespace.keys()).difference(keys)
			Misc.raise_if(len(unknown) > 0, Exceptions.ConfigurationException(f'Unknown key(s) in \'{section}\': {", ".join(sorted(unknown))}'))

			for key in keys:
				if key not in namespace:
					continue

				try:
					value: KVP.Scalar = namespace.scalar(key)
				except ValueError as err:
					raise Exceptions.ConfigurationException(str(err)) from err

				if value is not None:
					settings['log_level' if key == 'level' else key] = value

		return cls(**settings)

	@classmethod
	def load(cls, path: str | os.PathLike) -> Config:
		"""
		Reads engine settings from a KVP file
		:param path: The file path
		:return: The settings
		:raises ConfigurationException: If the file is not UTF-8, is malformed or a setting is invalid
		:raises OSError: If the file cannot be read
		"""

		try:
			with open(path, 'r', encoding='utf-8') as f:
				data: str = f.read()
		except UnicodeDecodeError as err:
			raise Exceptions.ConfigurationException(f'Configuration file is not valid UTF-8: {err}') from err

		return cls.decode(data)

	def __init__(self, *, nfa_strategy: str = 'closure', strict_deterministic: bool = False, backtrack_limit: typing.Optional[int] = None, log_level: str = 'WARN'):
		"""
		Class holding the engine settings used when automata are created from files or the console
		- Constructor -
		:param nfa_strategy: The NFA evaluation strategy, either 'closure' or 'backtrack'
		:param strict_deterministic: Whether DFA tables may hold at most one destination per state and symbol
		:param backtrack_limit: The maximum number of configurations a backtracking search may explore or None for no limit
		:param log_level: The lowest level logged
		:raises ConfigurationException: If a setting is invalid
		"""

		Misc.raise_ifn(Misc.matches_type(nfa_strategy, str) and nfa_strategy in Config.STRATEGIES, Exceptions.ConfigurationException(f'Unknown NFA strategy \'{nfa_strategy}\'; expected one of [ {", ".join(Config.STRATEGIES)} ]'))
		Misc.raise_ifn(Misc.matches_type(strict_deterministic, bool), Exceptions.ConfigurationException(f'\'strict_deterministic\' must be a boolean, got \'{strict_deterministic}\''))
		Misc.raise_ifn(backtrack_limit is None or (Misc.matches_type(backtrack_limit, int) and not isinstance(backtrack_limit, bool) and backtrack_limit > 0), Exceptions.ConfigurationException(f'\'backtrack_limit\' must be a positive integer, got \'{backtrack_limit}\''))
		Misc.raise_ifn(Misc.matches_type(log_level, str) and log_level.upper() in Logger.Logger.LEVELS, Exceptions.ConfigurationException(f'Unknown log level \'{log_level}\'; expected one of [ {", ".join(Logger.Logger.LEVELS)} ]'))

		self.__nfa_strategy__: str = nfa_strategy
		self.__strict_deterministic__: bool = strict_deterministic
		self.__backtrack_limit__: typing.Optional[int] = backtrack_limit
		self.__log_level__: str = log_level.upper()

	def __repr__(self) -> str:
		return f'<Config nfa_strategy={self.__nfa_strategy__} strict_deterministic={self.__strict_deterministic__} backtrack_limit={self.__backtrack_limit__} log_level={self.__log_level__}>'

	def replace(self, **overrides: typing.Any) -> Config:
		"""
		:param overrides: The settings to change; None values are ignored
		:return: A copy of these settings with the given overrides applied
		:raises ConfigurationException: If an override is invalid
		"""

		settings: dict[str, typing.Any] = {
			'nfa_strategy': self.__nfa_strategy__,
			'strict_deterministic': self.__strict_deterministic__,
			'backtrack_limit': self.__backtrack_limit__,
			'log_level': self.__log_level__,
		}
		unknown: set[str] = set(overrides).difference(settings)
		Misc.raise_if(len(unknown) > 0, Exceptions.ConfigurationException(f'Unknown setting(s): {", ".join(sorted(unknown))}'))
		settings.update({key: value for key, value in overrides.items() if value is not None})
		return Config(**settings)

	@property
	def nfa_strategy(self) -> str:
		return self.__nfa_strategy__

	@property
	def strict_deterministic(self) -> bool:
		return self.__strict_deterministic__

	@property
	def backtrack_limit(self) -> typing.Optional[int]:
		return self.__backtrack_limit__

	@property
	def log_level(self) -> str:
		return self.__log_level__
