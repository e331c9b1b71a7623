from __future__ import annotations

import json
import os
import typing

from . import Description
from . import Exceptions
from . import Misc
from .Parser import KVP


def decode_json(data: str) -> Description.AutomatonDescription:
	"""
	Parses a JSON automaton description
	The document is an object with keys 'states', 'initial_state', 'final_states', 'alphabet' and 'transitions'
	:param data: The JSON text
	:return: The description
	:raises DescriptionFormatException: If the text is not valid JSON or the document is malformed
	"""

	try:
		document: typing.Any = json.JSONDecoder().decode(data)
	except json.JSONDecodeError as err:
		raise Exceptions.DescriptionFormatException(f'Invalid JSON description: {err}') from err

	return Description.AutomatonDescription.from_mapping(document)


def decode_kvp(data: str) -> Description.AutomatonDescription:
	"""
	Parses a KVP automaton description

		states=S0;S1
		initial_state=S0
		final_states=S1
		alphabet=a;b
		>>transitions
			>>1
				from=S0
				to=S1
				on=a
			<<
		<<

	Each namespace inside 'transitions' is one transition, in declaration order; omitting 'on' declares a null transition
	:param data: The KVP text
	:return: The description
	:raises DescriptionFormatException: If the text is malformed
	"""

	try:
		document: KVP.KVP = KVP.KVP.decode(data, 'automaton')
	except KVP.KVPDecodeError as err:
		raise Exceptions.DescriptionFormatException(f'Invalid KVP description: {err}') from err

	def values(key: str) -> list[str]:
		Misc.raise_ifn(key in document, Exceptions.DescriptionFormatException(f'Missing required key \'{key}\''))
		found: list[KVP.Scalar] | KVP.KVP = document[key]
		Misc.raise_if(isinstance(found, KVP.KVP), Exceptions.DescriptionFormatException(f'Key \'{key}\' must hold values, not a namespace'))
		return [x for x in found if x is not None]

	def scalar(namespace: KVP.KVP, key: str, ordinal: int) -> typing.Optional[str]:
		try:
			return namespace.scalar(key, None)
		except ValueError as err:
			raise Exceptions.DescriptionFormatException(f'Transition {ordinal}: {err}') from err

	Misc.raise_ifn('transitions' in document, Exceptions.DescriptionFormatException('Missing required key \'transitions\''))
	namespace: KVP.KVP | list = document['transitions']
	Misc.raise_ifn(isinstance(namespace, KVP.KVP), Exceptions.DescriptionFormatException('Key \'transitions\' must be a namespace'))
	transitions: list[dict[str, typing.Optional[str]]] = []

	for ordinal, (name, entry) in enumerate(namespace, 1):
		Misc.raise_ifn(isinstance(entry, KVP.KVP), Exceptions.DescriptionFormatException(f'Transition {ordinal} (\'{name}\') must be a namespace'))
		transition: dict[str, typing.Optional[str]] = {key: scalar(entry, key, ordinal) for key in entry.keys()}

		if transition.get('on', ...) is None:
			del transition['on']

		transitions.append(transition)

	initial: list[str] = values('initial_state')
	Misc.raise_ifn(len(initial) == 1, Exceptions.DescriptionFormatException(f'Key \'initial_state\' must hold exactly one state, got {len(initial)}'))

	return Description.AutomatonDescription.from_mapping({
		'states': values('states'),
		'initial_state': initial[0],
		'final_states': values('final_states'),
		'alphabet': values('alphabet'),
		'transitions': transitions,
	})


def load(path: str | os.PathLike) -> Description.AutomatonDescription:
	"""
	Reads an automaton description file
	The format is chosen by extension: '.json' or '.kvp'
	:param path: The file path
	:return: The description
	:raises DescriptionFormatException: If the extension is unknown, the file is not UTF-8 or the file is malformed
	:raises OSError: If the file cannot be read
	"""

	extension: str = os.path.splitext(os.fspath(path))[1].lower()
	decoders: dict[str, typing.Callable[[str], Description.AutomatonDescription]] = {'.json': decode_json, '.kvp': decode_kvp}
	Misc.raise_ifn(extension in decoders, Exceptions.DescriptionFormatException(f'Unsupported description format \'{extension}\'; expected one of [ {", ".join(decoders)} ]'))

	try:
		with open(path, 'r', encoding='utf-8') as f:
			data: str = f.read()
	except UnicodeDecodeError as err:
		raise Exceptions.DescriptionFormatException(f'Description file is not valid UTF-8: {err}') from err

	return decoders[extension](data)
