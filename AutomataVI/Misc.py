import typing

import typeguard

from . import Exceptions


def raise_if(expression: bool, exception: BaseException = AssertionError('Assertion Failed')) -> None:
	"""
	Raises an exception if the expression evaluates to True
	:param expression: The expression to evaluate
	:param exception: The exception to raise
	"""

	if not isinstance(exception, BaseException):
		raise Exceptions.InvalidArgumentException(raise_if, 'exception', type(exception), (BaseException,))
	elif expression:
		raise exception


def raise_ifn(expression: bool, exception: BaseException = AssertionError('Assertion Failed')) -> None:
	"""
	Raises an exception if the expression evaluates to False
	:param expression: The expression to evaluate
	:param exception: The exception to raise
	"""

	if not isinstance(exception, BaseException):
		raise Exceptions.InvalidArgumentException(raise_ifn, 'exception', type(exception), (BaseException,))
	elif not expression:
		raise exception


def matches_type(value: typing.Any, annotation: typing.Any) -> bool:
	"""
	:param value: The value to check
	:param annotation: The type hint to check against
	:return: Whether the value satisfies the type hint
	"""

	try:
		typeguard.check_type(value, annotation, collection_check_strategy=typeguard.CollectionCheckStrategy.ALL_ITEMS)
		return True
	except typeguard.TypeCheckError:
		return False
