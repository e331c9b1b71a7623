import json
import os

import pytest

from AutomataVI import Automata
from AutomataVI import Description
from AutomataVI import Exceptions
from AutomataVI import Loader

from conftest import DESCRIPTIONS_DIR


def test_json_file_layout():
	description = Loader.load(os.path.join(DESCRIPTIONS_DIR, 'ends_in_a.json'))

	assert description.states == ('S0', 'S1')
	assert description.initial_state == 'S0'
	assert description.final_states == ('S1',)
	assert description.alphabet == frozenset({'a', 'b'})
	assert description.transitions[0] == Description.Transition('S0', 'S1', 'a')
	assert len(description.transitions) == 4


def test_json_null_transition():
	description = Loader.load(os.path.join(DESCRIPTIONS_DIR, 'null_to_final.json'))

	assert description.transitions[0].is_null
	assert description.has_null_transitions


def test_kvp_file():
	description = Loader.load(os.path.join(DESCRIPTIONS_DIR, 'ends_in_ab.kvp'))

	assert description.states == ('S0', 'S1', 'S2')
	assert description.final_states == ('S2',)
	assert [(t.source, t.destination, t.symbol) for t in description.transitions] == [('S0', 'S0', 'a'), ('S0', 'S0', 'b'), ('S0', 'S1', 'a'), ('S1', 'S2', 'b')]


def test_kvp_null_transition_and_empty_finals():
	description = Loader.decode_kvp('states=S0;S1\ninitial_state=S0\nfinal_states=\nalphabet=a\n>>transitions\n>>t\nfrom=S0\nto=S1\n<<\n<<')

	assert description.final_states == ()
	assert description.transitions[0].is_null


def test_from_file(tmp_path):
	path = tmp_path / 'machine.json'
	path.write_text(json.dumps({
		'states': ['A', 'B'], 'initial_state': 'A', 'final_states': ['B'], 'alphabet': ['x'],
		'transitions': [{'from': 'A', 'to': 'B', 'on': 'x'}, {'from': 'B', 'to': 'A'}],
	}), encoding='utf-8')

	assert Automata.NFA.from_file(path).test_string('xx')

	with pytest.raises(Exceptions.NullTransitionNotAllowedException):
		Automata.DFA.from_file(path)


@pytest.mark.parametrize('document', [
	'[]',
	'{"states": ["S0"], "initial_state": "S0", "final_states": [], "alphabet": []}',
	'{"states": "S0", "initial_state": "S0", "final_states": [], "alphabet": [], "transitions": []}',
	'{"states": ["S0", 1], "initial_state": "S0", "final_states": [], "alphabet": [], "transitions": []}',
	'{"states": ["S0"], "initial_state": "S0", "final_states": [], "alphabet": [], "transitions": [{"from": "S0"}]}',
	'{"states": ["S0"], "initial_state": "S0", "final_states": [], "alphabet": [], "transitions": [{"from": "S0", "to": "S0", "via": "a"}]}',
	'{"states": ["S0"], "initial_state": "S0", "final_states": [], "alphabet": [], "transitions": [{"from": "S0", "to": "S0", "on": 3}]}',
	'{"states": ["S0"], "initial_state": "S0", "final_states": [], "alphabet": ["ab"], "transitions": []}',
	'{"states": ["S0"], "initial_state": "S0", "final_states": [], "alphabet": [""], "transitions": []}',
	'{"states": ["S0"], "initial_state": "S0", "final_states": [], "alphabet": ["a"], "transitions": [{"from": "S0", "to": "S0", "on": "ab"}]}',
	'{"states": [',
])
def test_malformed_json(document):
	with pytest.raises(Exceptions.DescriptionFormatException):
		Loader.decode_json(document)


@pytest.mark.parametrize('document', [
	'states=S0\nfinal_states=\nalphabet=a\n>>transitions\n<<',
	'states=S0\ninitial_state=S0;S1\nfinal_states=\nalphabet=a\n>>transitions\n<<',
	'states=S0\ninitial_state=S0\nfinal_states=\nalphabet=a\ntransitions=none',
	'states=S0\ninitial_state=S0\nfinal_states=\nalphabet=a\n>>transitions\nloose=1\n<<',
	'states=S0\ninitial_state=S0\nfinal_states=\nalphabet=1&I\n>>transitions\n<<',
	'states=S0\ninitial_state=S0\nfinal_states=\nalphabet=a\n>>transitions\n>>1\nfrom=S0\n<<\n<<',
	'states=S0\ninitial_state=S0\nfinal_states=\nalphabet=ab;c\n>>transitions\n<<',
	'states=S0\ninitial_state=S0\nfinal_states=\nalphabet=a\n>>transitions\n>>1\nfrom=S0\nto=S0\non=aa\n<<\n<<',
	'states=S0\n>>transitions',
])
def test_malformed_kvp(document):
	with pytest.raises(Exceptions.DescriptionFormatException):
		Loader.decode_kvp(document)


def test_unknown_extension(tmp_path):
	path = tmp_path / 'machine.yaml'
	path.write_text('states: []', encoding='utf-8')

	with pytest.raises(Exceptions.DescriptionFormatException):
		Loader.load(path)


def test_missing_file(tmp_path):
	with pytest.raises(OSError):
		Loader.load(tmp_path / 'absent.json')


def test_multi_character_label_names_transition():
	with pytest.raises(Exceptions.DescriptionFormatException, match='Transition 2 symbol'):
		Loader.decode_json('{"states": ["S0"], "initial_state": "S0", "final_states": [], "alphabet": ["a"], "transitions": [{"from": "S0", "to": "S0", "on": "a"}, {"from": "S0", "to": "S0", "on": "ab"}]}')


def test_multi_character_tokens_through_api():
	description = Description.AutomatonDescription(['S0', 'S1'], 'S0', ['S1'], ['ab'], [('S0', 'S1', 'ab')])

	assert Automata.DFA(description).test_string(['ab'])


def test_load_rejects_non_utf8(tmp_path):
	path = tmp_path / 'machine.kvp'
	path.write_bytes(b'states=S\xff0\n')

	with pytest.raises(Exceptions.DescriptionFormatException):
		Loader.load(path)
