from __future__ import annotations

import typing

import typeguard


Scalar = bool | int | float | str | None


class KVP:
	"""
	Class providing parsing capabilities for the KeyValuePair (KVP) configuration format

	Syntax (one entry per line, surrounding whitespace ignored):
		key=value;value;...     a key holding one or more values
		>>name ... <<           a nested namespace
		# text                  a comment

	Values are strings unless suffixed with a formatter:
		&B (boolean: true, false or an integer), &I (integer), &F (float), &S (string)
	An empty value is None. Double quotes keep whitespace and ';' literal; '%;' and '%&' escape ';' and '&'
	"""

	FORMATTERS: tuple[str, ...] = ('B', 'I', 'F', 'S')

	@classmethod
	def decode(cls, data: str, root_name: str = None) -> KVP:
		"""
		Parses a string into a KVP object
		:param data: The data to parse
		:param root_name: The name of the root namespace
		:return: A new KVP object
		:raises KVPDecodeError: If the data is malformed
		"""

		if not isinstance(data, str):
			raise KVPDecodeError(f'Expected a string, got \'{type(data).__name__}\'')

		root: dict[str, list[Scalar] | dict] = {}
		stack: list[tuple[str, dict[str, list[Scalar] | dict], int]] = [(root_name, root, 0)]

		for line_number, raw in enumerate(data.splitlines(), 1):
			line: str = raw.strip()
			namespace: dict[str, list[Scalar] | dict] = stack[-1][1]

			if len(line) == 0 or line.startswith('#'):
				continue
			elif line.startswith('>>'):
				name: str = line[2:].strip()

				if len(name) == 0:
					raise KVPDecodeError(f'Unnamed namespace - LINE.{line_number} {line}')
				elif name in namespace:
					raise KVPDecodeError(f'Duplicate key \'{name}\' - LINE.{line_number} {line}')

				inner: dict[str, list[Scalar] | dict] = {}
				namespace[name] = inner
				stack.append((name, inner, line_number))
			elif line.startswith('<<'):
				if len(stack) == 1:
					raise KVPDecodeError(f'No matching namespace to close - LINE.{line_number} {line}')

				stack.pop()
			elif '=' in line:
				key, value = line.split('=', 1)
				key = key.strip()

				if len(key) == 0:
					raise KVPDecodeError(f'Empty key - LINE.{line_number} {line}')
				elif key in namespace:
					raise KVPDecodeError(f'Duplicate key \'{key}\' - LINE.{line_number} {line}')

				namespace[key] = [KVP.__decode_value__(line_number, line, token, quoted) for token, quoted in KVP.__split_values__(line_number, line, value.strip())]
			else:
				raise KVPDecodeError(f'Line is neither a namespace declaration nor a key value pair - LINE.{line_number} {line}')

		if len(stack) > 1:
			name, _, line_number = stack[-1]
			raise KVPDecodeError(f'Unclosed namespace: \'{name}\' - LINE.{line_number}')

		return cls(root_name, root)

	@staticmethod
	def __split_values__(line_number: int, line: str, value: str) -> list[tuple[str, bool]]:
		"""
		INTERNAL METHOD; DO NOT USE
		Splits the right hand side of a key value pair on unescaped, unquoted ';'
		:return: The raw tokens and whether each was quoted
		"""

		tokens: list[tuple[str, bool]] = []
		token: list[str] = []
		quoted: bool = False
		in_string: bool = False
		index: int = 0

		while index < len(value):
			char: str = value[index]

			if in_string and char == '\\' and index + 1 < len(value) and value[index + 1] == '"':
				token.append('"')
				index += 1
			elif char == '"':
				in_string = not in_string
				quoted = True
			elif not in_string and char == '%' and index + 1 < len(value) and value[index + 1] in ';&':
				token.append('%' + value[index + 1])
				index += 1
			elif char == ';' and not in_string:
				tokens.append((''.join(token), quoted))
				token.clear()
				quoted = False
			else:
				token.append(char)

			index += 1

		if in_string:
			raise KVPDecodeError(f'Unclosed string: \'{"".join(token)}\' - LINE.{line_number} {line}')

		tokens.append((''.join(token), quoted))
		return tokens

	@staticmethod
	def __decode_value__(line_number: int, line: str, token: str, quoted: bool) -> Scalar:
		"""
		INTERNAL METHOD; DO NOT USE
		Converts one raw token into its value
		"""

		if quoted:
			return token.replace('%;', ';').replace('%&', '&')

		token = token.strip()
		format_start: int = -1

		for i, char in enumerate(token):
			if char == '&' and (i == 0 or token[i - 1] != '%'):
				format_start = i

		if format_start < 0:
			value: str = token.replace('%;', ';').replace('%&', '&')
			return None if len(value) == 0 else value

		formatter: str = token[format_start + 1:]
		value: str = token[:format_start].replace('%;', ';').replace('%&', '&')

		if formatter not in KVP.FORMATTERS:
			raise KVPDecodeError(f'Formatter is invalid: \'&{formatter}\'; expected one of [ {", ".join(KVP.FORMATTERS)} ] - LINE.{line_number} {line}')
		elif len(value) == 0:
			return None
		elif formatter == 'B':
			if value.lower() in ('true', 'false'):
				return value.lower() == 'true'

			try:
				return int(value) != 0
			except ValueError:
				raise KVPDecodeError(f'Failed to format value \'{value}\' as boolean - LINE.{line_number} {line}')
		elif formatter == 'I':
			try:
				return int(value)
			except ValueError:
				raise KVPDecodeError(f'Failed to format value \'{value}\' as integer - LINE.{line_number} {line}')
		elif formatter == 'F':
			try:
				return float(value)
			except ValueError:
				raise KVPDecodeError(f'Failed to format value \'{value}\' as float - LINE.{line_number} {line}')
		else:
			return value

	def __init__(self, namespace_name: typing.Optional[str], data: dict[str, list[Scalar] | dict]):
		"""
		Class providing parsing capabilities for the KeyValuePair (KVP) configuration format
		- Constructor -
		SHOULD NOT BE CALLED DIRECTLY; USE 'KVP::decode'
		:param namespace_name: The namespace name or None for the root
		:param data: The decoded mapping
		:raises TypeError: If the data holds an unstorable value
		"""

		try:
			typeguard.check_type(data, dict[str, list[Scalar] | dict], collection_check_strategy=typeguard.CollectionCheckStrategy.ALL_ITEMS)
		except typeguard.TypeCheckError as err:
			raise TypeError(f'Unstorable KVP data: {err}') from err

		self.__namespace__: str = 'ROOT' if namespace_name is None else str(namespace_name)
		self.__mapping__: dict[str, list[Scalar] | KVP] = {key: type(self)(key, value) if isinstance(value, dict) else list(value) for key, value in data.items()}

	def __len__(self) -> int:
		return len(self.__mapping__)

	def __repr__(self) -> str:
		return f'<KVP[{self.__namespace__}] keys={list(self.__mapping__)}>'

	def __contains__(self, item: str) -> bool:
		"""
		:param item: The mapping key
		:return: Whether the specified key exists
		"""

		return item in self.__mapping__

	def __getitem__(self, item: str) -> list[Scalar] | KVP:
		"""
		Gets the specified mapping value
		:param item: The mapping key
		:return: A copy of the key's values or the nested namespace
		:raises KeyError: If the key does not exist
		"""

		if item not in self.__mapping__:
			raise KeyError(f'No such key in namespace \'{self.__namespace__}\': \'{item}\'')

		value: list[Scalar] | KVP = self.__mapping__[item]
		return value if isinstance(value, KVP) else list(value)

	def __iter__(self) -> typing.Iterator[tuple[str, list[Scalar] | KVP]]:
		for key in self.__mapping__:
			yield key, self[key]

	def keys(self) -> tuple[str, ...]:
		"""
		:return: The keys of this namespace in declaration order
		"""

		return tuple(self.__mapping__.keys())

	def scalar(self, key: str, default: Scalar = ...) -> Scalar:
		"""
		Gets the single value held by a key
		:param key: The mapping key
		:param default: The value returned if the key does not exist; if omitted a KeyError is raised instead
		:return: The key's only value
		:raises KeyError: If the key does not exist and no default is given
		:raises ValueError: If the key is a namespace or holds more than one value
		"""

		if key not in self.__mapping__ and default is not ...:
			return default

		value: list[Scalar] | KVP = self[key]

		if isinstance(value, KVP):
			raise ValueError(f'Key \'{key}\' is a namespace, not a value')
		elif len(value) != 1:
			raise ValueError(f'Key \'{key}\' holds {len(value)} values, expected one')

		return value[0]

	def to_dict(self) -> dict[str, list[Scalar] | dict]:
		"""
		:return: This namespace as nested built-in dictionaries
		"""

		return {key: value.to_dict() if isinstance(value, KVP) else list(value) for key, value in self.__mapping__.items()}

	@property
	def name(self) -> str:
		return self.__namespace__


class KVPDecodeError(ValueError):
	pass
