import os
import sys

from AutomataVI import Automata
from AutomataVI import Config
from AutomataVI import Loader
from AutomataVI import Logger


if __name__ == '__main__':
	here: str = os.path.dirname(os.path.abspath(__file__))
	config: Config.Config = Config.Config.load(os.path.join(here, 'engine.kvp'))
	log: Logger.Logger = Logger.Logger(sys.stderr, config.log_level)

	dfa: Automata.Acceptor = Automata.create('dfa', Loader.load(os.path.join(here, 'descriptions', 'ends_in_a.json')), config, log)
	nfa: Automata.Acceptor = Automata.create('nfa', Loader.load(os.path.join(here, 'descriptions', 'ends_in_ab.kvp')), config, log)
	null: Automata.Acceptor = Automata.create('nfa', Loader.load(os.path.join(here, 'descriptions', 'null_to_final.json')), config, log)

	print(dfa.table)
	print(nfa.table)

	for machine, strings in ((dfa, ('aab', 'aa', '')), (nfa, ('bbbab', 'ba', 'ab')), (null, ('', 'a'))):
		for string in strings:
			print(f'{machine.kind} {string!r} -> {"Accepted" if machine.test_string(string) else "Rejected"}')

	log.detach()
	sys.exit(0)
