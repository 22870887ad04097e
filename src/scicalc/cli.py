from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory

from .util import CalcError
from .lexer import Lexer
from .converter import to_postfix
from .machine import AngleMode
from .session import Session
from .table import CONSTANTS, MEMORY, Function


logger = logging.getLogger(__name__)


class InteractiveInput:
    COMMANDS = ['help', 'mode', 'rad', 'deg', 'mr', 'mc', 'exit', 'quit']

    def __init__(self, prompt, history_file=None):
        self.prompt = prompt
        self.history_file = history_file

    def _completer(self):
        words = [f.value for f in Function
                 if f not in {Function.UPLUS, Function.UMINUS}]
        words += list(CONSTANTS) + [MEMORY.upper()]
        return WordCompleter(words + self.COMMANDS, ignore_case=True)

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Persistent line editing history, not
                                    # the calculator's own h/!n history.
                                    history=(FileHistory(self.history_file)
                                             if self.history_file
                                             else None),
                                    completer=self._completer(),
                                    complete_while_typing=False,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.scicalc_history'
    BANNER = 'Scientific calculator - Type ? or help for help'

    def dumper(self):
        '''
        Dump tokens and RPN of every line, without evaluating.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(text)>')
        for line in self.args.expressions:
            try:
                tokens = lexer.tokenize(line.strip())
                for token in tokens:
                    print(token.kind.value, repr(token.text), sep='\t')
                print('rpn', ' '.join(map(str, to_postfix(tokens))),
                      sep='\t')
            except CalcError as e:
                logger.debug('dump failed', exc_info=True)
                print(e.args[0], file=stderr)

    def executor(self):
        '''
        Run calculator session over the input lines.
        '''
        angle_mode = AngleMode.DEGREES if self.args.degrees else None
        session = Session(angle_mode=angle_mode)
        if self._interactive():
            print(self.BANNER)
        for line in self.args.expressions:
            # Abort entire rest of line, makes sense anyway
            try:
                output = session.feed(line)
            except CalcError as e:
                logger.debug('bad line %r', line, exc_info=True)
                print(e.args[0], file=stderr)
                continue
            if output is not None:
                print(output)
            if session.done:
                break
        if self._interactive():
            print('Goodbye!')

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history_file=path.expanduser(
                                        self.HISTORY_FILE))
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Scientific expression calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log pipeline stages and '
                                               'tracebacks of bad lines')
        self.argument_parser.add_argument('-d', '--degrees',
                                          action='store_true',
                                          help='start in degree angle mode')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def _configure_logging(self):
        logging.basicConfig(level=(logging.DEBUG
                                   if self.args.verbose
                                   else logging.WARNING),
                            format='%(levelname)s %(name)s: %(message)s',
                            stream=stderr)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        self._configure_logging()
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
