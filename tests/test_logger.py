import io

import pytest

from AutomataVI import Exceptions
from AutomataVI import Logger


def test_level_threshold_and_banners():
	stream = io.StringIO()
	log = Logger.Logger(stream, 'warn')
	log.debug('hidden').info('hidden').warn('shown').error('  padded  ')
	log.detach()
	text = stream.getvalue()

	assert text.startswith('==========[ Log Opened ]==========')
	assert text.rstrip().endswith('==========[ Log Closed ]==========')
	assert 'hidden' not in text
	assert '[ WARN ]: shown\n' in text
	assert '[ ERROR ]: padded\n' in text
	assert log.level == 'WARN'


def test_closed_logger_refuses_writes():
	stream = io.StringIO()
	log = Logger.Logger(stream, banner=False)
	log.close()

	assert log.closed
	assert stream.closed

	with pytest.raises(IOError):
		log.info('late')

	with pytest.raises(IOError):
		log.detach()


def test_invalid_arguments():
	with pytest.raises(Exceptions.InvalidArgumentException):
		Logger.Logger('not a stream')

	with pytest.raises(ValueError):
		Logger.Logger(io.StringIO(), 'LOUD')

	closed = io.StringIO()
	closed.close()

	with pytest.raises(IOError):
		Logger.Logger(closed)
