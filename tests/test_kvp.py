import pytest

from AutomataVI.Parser import KVP


def test_values_and_formatters():
	kvp = KVP.KVP.decode('''
		# engine settings
		name=closure
		flags=true&B;0&B;1&B
		limit=42&I
		ratio=0.5&F
		text=12&S
		empty=
	''')

	assert kvp['name'] == ['closure']
	assert kvp['flags'] == [True, False, True]
	assert kvp.scalar('limit') == 42
	assert kvp.scalar('ratio') == 0.5
	assert kvp.scalar('text') == '12'
	assert kvp.scalar('empty') is None
	assert kvp.keys() == ('name', 'flags', 'limit', 'ratio', 'text', 'empty')


def test_namespaces_nest():
	kvp = KVP.KVP.decode('>>outer\n\tkey=1&I\n\t>>inner\n\t\tleaf=x;y\n\t<<\n<<\ntop=z')

	assert isinstance(kvp['outer'], KVP.KVP)
	assert kvp['outer']['inner']['leaf'] == ['x', 'y']
	assert kvp.to_dict() == {'outer': {'key': [1], 'inner': {'leaf': ['x', 'y']}}, 'top': ['z']}
	assert [key for key, _ in kvp] == ['outer', 'top']


def test_quotes_and_escapes():
	kvp = KVP.KVP.decode('symbols=" ";";";a%;b;c%&I;"say \\"hi\\""')

	assert kvp['symbols'] == [' ', ';', 'a;b', 'c&I', 'say "hi"']


def test_scalar_rules():
	kvp = KVP.KVP.decode('many=a;b\n>>space\n<<')

	assert kvp.scalar('missing', 'fallback') == 'fallback'

	with pytest.raises(KeyError):
		kvp.scalar('missing')

	with pytest.raises(ValueError):
		kvp.scalar('many')

	with pytest.raises(ValueError):
		kvp.scalar('space')


def test_returned_lists_are_copies():
	kvp = KVP.KVP.decode('states=S0;S1')
	kvp['states'].append('S2')

	assert kvp['states'] == ['S0', 'S1']


@pytest.mark.parametrize('text', [
	'>>open\nkey=1',
	'<<',
	'key=1&Q',
	'key=x&I',
	'key=maybe&B',
	'key=1.5.2&F',
	'just words',
	'key="unterminated',
	'key=1\nkey=2',
	'=value',
	'>>',
])
def test_malformed_documents(text):
	with pytest.raises(KVP.KVPDecodeError):
		KVP.KVP.decode(text)
