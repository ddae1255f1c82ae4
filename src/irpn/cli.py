from os import isatty
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .util import RPNError
from .machine import Machine
from .lexer import Lexer


class InteractiveInput:
    '''
    Lines read from a prompt_toolkit session, until end of file.
    '''

    def __init__(self, prompt, rprompt=None):
        self.prompt = prompt
        self.rprompt = rprompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Not persistent: nothing outlives a run
                                    history=InMemoryHistory(),
                                    rprompt=self.rprompt,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to RPN system.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump all tokens and what they parse to.
        '''
        lexer = Lexer()
        print('<token>\t<operation>')
        for line in self.args.expressions:
            for token in lexer.lex(line):
                try:
                    parsed = lexer.parse(token)
                except RPNError as e:
                    parsed = e.args[0]
                print(token, parsed, sep='\t')

    def executor(self):
        '''
        Run machine (RPN calculator).

        Errors are reported per token; the rest of the line still runs.
        '''
        machine = Machine()
        lexer = Lexer()
        if self._interactive():
            self.args.expressions.rprompt = lambda: self._rprompt(machine)
        for line in self.args.expressions:
            for token in lexer.lex(line):
                try:
                    if machine.feed(token):
                        return
                except RPNError as e:
                    if self.args.verbose:
                        traceback.print_exc()
                    print('Error:', e.args[0], file=stderr)

    def _rprompt(self, machine):
        '''
        Top of stack, in the machine's output radix, for the right prompt.
        '''
        if not machine.stack:
            return ''
        return machine.radix.format(machine.top()).strip()

    def raw_grammar(self):
        '''
        Print current internally defined literal grammar.
        '''
        lexer = Lexer()
        print(lexer.LITERAL)

    def _prompting_input(self):
        '''
        Return prompting input if either:

        - prompt explicitly specified.
        - both stdin/out are a tty

        Otherwise plain stdin.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Integer RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='show tracebacks of errors')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions',
                                       help='evaluate these lines instead')
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

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
