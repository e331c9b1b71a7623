from __future__ import annotations

import datetime
import io
import typing

from . import Exceptions


class Logger:
	"""
	Class representing a leveled log writer
	Messages below the logger's level are discarded
	"""

	LEVELS: tuple[str, ...] = ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL')

	def __init__(self, stream: io.IOBase, level: str = 'INFO', timezone: datetime.timezone = datetime.timezone.utc, *, banner: bool = True):
		"""
		Class representing a leveled log writer
		- Constructor -
		:param stream: The stream to write results to
		:param level: The lowest level written to the stream
		:param timezone: The timezone to log with
		:param banner: Whether to write the open and close banners
		:raises InvalidArgumentException: If 'stream' is not a stream or 'timezone' is not a timezone
		:raises ValueError: If 'level' is not a known level
		:raises IOError: If the stream is closed or not writable
		"""

		if not isinstance(stream, io.IOBase):
			raise Exceptions.InvalidArgumentException(Logger.__init__, 'stream', type(stream), (io.IOBase,))
		elif not isinstance(timezone, datetime.timezone):
			raise Exceptions.InvalidArgumentException(Logger.__init__, 'timezone', type(timezone), (datetime.timezone,))
		elif str(level).upper() not in Logger.LEVELS:
			raise ValueError(f'Unknown log level \'{level}\'; expected one of [ {", ".join(Logger.LEVELS)} ]')

		if stream.closed:
			raise IOError('Stream is closed')
		elif not stream.writable():
			raise IOError('Target stream is not writable')

		self.__stream__: typing.Optional[io.IOBase] = stream
		self.__timezone__: datetime.timezone = timezone
		self.__level__: int = Logger.LEVELS.index(str(level).upper())
		self.__banner__: bool = bool(banner)
		self.__state__: bool = True

		if self.__banner__:
			self.__stream__.write('==========[ Log Opened ]==========\n\n')

	def __write__(self, level: str, msg: typing.Any) -> Logger:
		"""
		INTERNAL METHOD; DO NOT USE
		Writes a message if 'level' passes this logger's threshold
		:param level: The message level
		:param msg: The message to write
		:return: This log writer instance
		:raises IOError: If log is closed
		"""

		if self.__state__ is False:
			raise IOError('Log is closed')
		elif Logger.LEVELS.index(level) < self.__level__:
			return self

		timestamp: str = datetime.datetime.now(self.__timezone__).strftime("%m/%d/%Y %H:%M:%S.%f")
		self.__stream__.write(f'{timestamp} [ {self.__timezone__} ] [ {level} ]: {str(msg).strip()}\n')
		return self

	def close(self) -> None:
		"""
		Closes the log writer and its stream
		Any further write is erroneous
		:raises IOError: If log is already closed
		"""

		self.detach().close()

	def detach(self) -> io.IOBase:
		"""
		Detaches the log writer
		The underlying stream is not closed
		Any further write is erroneous
		:return: The detached stream
		:raises IOError: If log is already closed
		"""

		if self.__state__ is False:
			raise IOError('Log is closed')

		if self.__banner__:
			self.__stream__.write('\n==========[ Log Closed ]==========\n')

		stream: io.IOBase = self.__stream__
		stream.flush()
		self.__state__ = False
		self.__stream__ = None
		return stream

	def debug(self, msg: typing.Any) -> Logger:
		return self.__write__('DEBUG', msg)

	def info(self, msg: typing.Any) -> Logger:
		return self.__write__('INFO', msg)

	def warn(self, msg: typing.Any) -> Logger:
		return self.__write__('WARN', msg)

	def error(self, msg: typing.Any) -> Logger:
		return self.__write__('ERROR', msg)

	def critical(self, msg: typing.Any) -> Logger:
		return self.__write__('CRITICAL', msg)

	@property
	def closed(self) -> bool:
		"""
		:return: Whether this log writer is closed
		"""

		return not self.__state__

	@property
	def level(self) -> str:
		"""
		:return: The lowest level this log writer records
		"""

		return Logger.LEVELS[self.__level__]
