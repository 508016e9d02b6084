# IAM language package
# This package provides the lexer and token-stream interpreter for the IAM language.
from .interpreter import run_program, run_file, Interpreter
from .lexer import tokenize
from .errors import IamError

__all__ = [
    'run_program',
    'run_file',
    'Interpreter',
    'tokenize',
    'IamError',
]
