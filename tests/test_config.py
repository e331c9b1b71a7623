import os

import pytest

from AutomataVI import Config
from AutomataVI import Exceptions


def test_defaults():
	config = Config.Config()

	assert config.nfa_strategy == 'closure'
	assert config.strict_deterministic is False
	assert config.backtrack_limit is None
	assert config.log_level == 'WARN'


def test_decode_all_settings():
	config = Config.Config.decode('>>automaton\nnfa_strategy=backtrack\nstrict_deterministic=true&B\nbacktrack_limit=500&I\n<<\n>>logging\nlevel=debug\n<<')

	assert config.nfa_strategy == 'backtrack'
	assert config.strict_deterministic is True
	assert config.backtrack_limit == 500
	assert config.log_level == 'DEBUG'


def test_empty_values_keep_defaults():
	config = Config.Config.decode('>>automaton\nbacktrack_limit=&I\nnfa_strategy=\n<<')

	assert config.backtrack_limit is None
	assert config.nfa_strategy == 'closure'


def test_shipped_engine_file():
	config = Config.Config.load(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'run', 'engine.kvp'))

	assert config.backtrack_limit == 100000
	assert config.log_level == 'INFO'


@pytest.mark.parametrize('text', [
	'>>automaton\nnfa_strategy=guess\n<<',
	'>>automaton\nstrict_deterministic=yes\n<<',
	'>>automaton\nbacktrack_limit=0&I\n<<',
	'>>automaton\nbacktrack_limit=ten\n<<',
	'>>automaton\nnfa_strategy=closure;backtrack\n<<',
	'>>automaton\ncolour=blue\n<<',
	'>>logging\nlevel=LOUD\n<<',
	'>>network\n<<',
	'automaton=closure',
	'>>automaton',
])
def test_invalid_settings(text):
	with pytest.raises(Exceptions.ConfigurationException):
		Config.Config.decode(text)


def test_replace_ignores_unset_overrides():
	config = Config.Config(nfa_strategy='backtrack').replace(nfa_strategy=None, strict_deterministic=True)

	assert config.nfa_strategy == 'backtrack'
	assert config.strict_deterministic is True

	with pytest.raises(Exceptions.ConfigurationException):
		config.replace(verbose=True)


def test_load_rejects_non_utf8(tmp_path):
	path = tmp_path / 'engine.kvp'
	path.write_bytes(b'>>logging\nlevel=\xff\n<<\n')

	with pytest.raises(Exceptions.ConfigurationException):
		Config.Config.load(path)
