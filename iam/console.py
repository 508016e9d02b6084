import builtins
import sys
from typing import Callable, List, Optional, TextIO


class Console:
    """Output, input and diagnostics channels used by a running program.

    Streams default to whatever `sys.stdout` / `sys.stderr` are at the time
    of each write, and input defaults to `builtins.input`, so redirecting
    the standard streams (or patching `input`) redirects the program too.
    """
    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None,
                 input_func: Optional[Callable[[], str]] = None):
        self.stdout = stdout
        self.stderr = stderr
        self.input_func = input_func
        self.warnings: List[str] = []

    def write_line(self, text: str):
        print(text, file=self.stdout or sys.stdout, flush=True)

    def read_line(self) -> str:
        try:
            if self.input_func is not None:
                return self.input_func().rstrip('\r\n')
            return builtins.input()
        except EOFError:
            return ''

    def warn(self, message: str, line: int = 0):
        text = f"line {line}: {message}" if line else message
        self.warnings.append(text)
        print(f"Warning: {text}", file=self.stderr or sys.stderr, flush=True)
