import itertools
import os

import pytest

from AutomataVI import Description


DESCRIPTIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'run', 'descriptions')


def all_strings(alphabet, max_length):
	for length in range(max_length + 1):
		for letters in itertools.product(sorted(alphabet), repeat=length):
			yield ''.join(letters)


@pytest.fixture
def ends_in_a():
	return Description.AutomatonDescription(
		['S0', 'S1'], 'S0', ['S1'], {'a', 'b'},
		[('S0', 'S1', 'a'), ('S1', 'S1', 'a'), ('S1', 'S0', 'b'), ('S0', 'S0', 'b')],
	)


@pytest.fixture
def ends_in_ab():
	return Description.AutomatonDescription(
		['S0', 'S1', 'S2'], 'S0', ['S2'], {'a', 'b'},
		[('S0', 'S0', 'a'), ('S0', 'S0', 'b'), ('S0', 'S1', 'a'), ('S1', 'S2', 'b')],
	)


@pytest.fixture
def null_to_final():
	return Description.AutomatonDescription(['S0', 'S1'], 'S0', ['S1'], {'a'}, [('S0', 'S1', None)])


@pytest.fixture
def null_cycle():
	# S0 <-> S1 on null transitions, S1 -a-> S2, S2 -> S0 on null, S2 final
	return Description.AutomatonDescription(
		['S0', 'S1', 'S2', 'S3'], 'S0', ['S2'], {'a', 'b'},
		[('S0', 'S1', None), ('S1', 'S0', None), ('S1', 'S2', 'a'), ('S2', 'S0', None), ('S0', 'S3', 'b'), ('S3', 'S3', 'b')],
	)
