# minilang package
# This package provides a lexer, parser, semantic checker and evaluator for
# a small statically typed language with int and string variables.
from .errors import ErrorReporter, MiniError, ParseError
from .interpreter import Interpreter, RunResult, check_and_run, run_file, run_program
from .parser import parse_program
from .checker import SemanticChecker
from .environment import Environment

__all__ = [
    'run_program',
    'run_file',
    'check_and_run',
    'parse_program',
    'Interpreter',
    'SemanticChecker',
    'Environment',
    'ErrorReporter',
    'MiniError',
    'ParseError',
    'RunResult',
]
