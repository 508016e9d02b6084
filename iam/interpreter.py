"""Interpreter for the IAM language.

IAM programs are never parsed into a tree. The interpreter tokenizes the
whole source once and then walks the flat token stream with a cursor,
one source line per statement. The statement at the cursor is chosen by
its leading keyword; whatever the handler leaves unconsumed on the line
is skipped.

`for` loops replay the token stream. Every iteration rewinds the cursor
to the first token of the loop body and executes statements until one
starts with `end`. Before a run starts, each `for` token is paired with
the nearest `end` loop keyword that follows it; that is where the cursor
goes once the loop is finished.

Malformed programs degrade instead of failing: unknown names read as 0,
bad indexes resolve to 0 and invalid writes are dropped, each with a
warning on the diagnostics channel. Only `EXIT` ends a run early.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from .lexer import (
    Token, tokenize,
    NUMBER, IDENTIFIER, KEYWORD, ARRAY_DECL, LOOP_KEYWORD, SPECIAL_CHAR, STRING, EOL,
)
from .types import IntVal, TextVal, ArrayVal, Value, copy_value, parse_integer, to_string, type_name
from .errors import ExitSignal, IamError
from .environment import Environment
from .console import Console

# Returned by `current()` once the cursor runs off the token stream
END_OF_INPUT = Token(EOL, '', 0)


def index_loops(tokens: List[Token]) -> Dict[int, int]:
    """Map the position of every `for` token to its matching `end`.

    A loop ends at the nearest `end` after its `for`; loops without one
    run to the end of the token stream.
    """
    loop_ends: Dict[int, int] = {}
    next_end = len(tokens)
    for position in range(len(tokens) - 1, -1, -1):
        token = tokens[position]
        if token.is_(LOOP_KEYWORD, 'end'):
            next_end = position
        elif token.is_(LOOP_KEYWORD, 'for'):
            loop_ends[position] = next_end
    return loop_ends


class Interpreter:
    """Core interpreter that executes an IAM token stream."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 console: Optional[Console] = None):
        self.env = Environment()
        self.console = console if console is not None else Console()
        self.tokens: List[Token] = []
        self.position = 0
        self.loop_ends: Dict[int, int] = {}
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.statements: Dict[str, Callable[[], None]] = {
            'print': self.execute_print,
            'PRINT': self.execute_print,
            'set': self.execute_set,
            'LET': self.execute_set,
            'input': self.execute_input,
            'array': self.execute_array,
            'for': self.execute_for,
            'EXIT': self.execute_exit,
        }

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    @property
    def diagnostics(self) -> List[str]:
        return self.console.warnings

    def warn(self, msg: str, token: Optional[Token] = None):
        self.console.warn(msg, token.line if token is not None else 0)

    # Public API
    def run(self, tokens: List[Token]) -> Environment:
        """Execute a token stream from its first token.

        Every run starts from an empty environment. The environment of the
        finished run is returned so callers can inspect the final bindings.
        """
        self.env = Environment()
        self.tokens = list(tokens)
        self.position = 0
        self.loop_ends = index_loops(self.tokens)
        if self.debug_level > 0:
            self.debug_fp = open(self.debug_file, 'w')
        self.debug(f"run: {len(self.tokens)} tokens, {len(self.loop_ends)} loops")
        try:
            while self.position < len(self.tokens):
                self.execute_statement()
        except ExitSignal as signal:
            self.debug(f"EXIT at line {signal.line}")
        finally:
            self.debug(f"run finished with {len(self.env)} bindings")
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None
        return self.env

    # Cursor
    def current(self) -> Token:
        if self.position >= len(self.tokens):
            return END_OF_INPUT
        return self.tokens[self.position]

    def peek(self, offset: int = 1) -> Token:
        index = self.position + offset
        if index >= len(self.tokens):
            return END_OF_INPUT
        return self.tokens[index]

    def advance(self):
        self.position += 1

    def skip_line(self):
        """Move the cursor past the next EOL token."""
        while self.position < len(self.tokens) and self.tokens[self.position].kind != EOL:
            self.position += 1
        if self.position < len(self.tokens):
            self.position += 1

    # Statements
    def execute_statement(self):
        token = self.current()
        handler = None
        if token.kind in (KEYWORD, ARRAY_DECL, LOOP_KEYWORD):
            handler = self.statements.get(token.text)
        if handler is not None:
            if self.debug_level >= 2:
                self.debug(f"line {token.line}: {token.text}")
            handler()
        elif token.kind != EOL:
            self.advance()
        self.skip_line()

    def execute_print(self):
        self.advance()
        value = self.evaluate_expression()
        self.console.write_line(to_string(value))

    def execute_set(self):
        keyword = self.current()
        self.advance()
        target = self.current()
        if target.kind != IDENTIFIER:
            self.warn(f"{keyword.text} expects a variable name, got {target.text!r}", keyword)
            return
        if self.peek().is_(SPECIAL_CHAR, '['):
            name, index = self.resolve_array_ref()
            array = self.env.get(name)
            if not isinstance(array, ArrayVal):
                self.warn(f"array {name!r} not found", target)
                return
            if not array.in_bounds(index):
                self.warn(f"index {index} out of bounds for array {name!r} of length {len(array)}", target)
                return
            value = self.evaluate_expression()
            array.store(index, copy_value(value))
            if self.debug_level >= 2:
                self.debug(f"set {name}[{index}] = {value!r}")
            return
        self.advance()
        value = self.evaluate_expression()
        self.env.set(target.text, copy_value(value))
        if self.debug_level >= 2:
            self.debug(f"set {target.text} = {value!r}")

    def execute_input(self):
        keyword = self.current()
        self.advance()
        target = self.current()
        if target.kind != IDENTIFIER:
            self.warn(f"input expects a variable name, got {target.text!r}", keyword)
            return
        self.advance()
        line = self.console.read_line()
        number = parse_integer(line)
        value: Value = IntVal(number) if number is not None else TextVal(line)
        self.env.set(target.text, value)
        if self.debug_level >= 2:
            self.debug(f"input {target.text} = {value!r}")

    def execute_array(self):
        keyword = self.current()
        self.advance()
        target = self.current()
        if target.kind != IDENTIFIER:
            self.warn(f"array expects a variable name, got {target.text!r}", keyword)
            return
        self.advance()
        size = self.current()
        length = 0
        if size.kind == NUMBER:
            self.advance()
            parsed = parse_integer(size.text)
            if parsed is None or parsed < 0:
                self.warn(f"invalid array size {size.text!r}, using 0", size)
            else:
                length = parsed
        self.env.set(target.text, ArrayVal.zeros(length))
        if self.debug_level >= 2:
            self.debug(f"array {target.text}[{length}]")

    def execute_exit(self):
        raise ExitSignal(self.current().line)

    def execute_for(self):
        header = self.current()
        end_index = self.loop_ends.get(self.position, len(self.tokens))
        self.advance()
        counter = self.current()
        if counter.kind != IDENTIFIER:
            self.warn(f"for expects a counter variable, got {counter.text!r}", header)
            self.skip_loop(end_index)
            return
        self.advance()
        start = self.evaluate_expression()
        stop = self.evaluate_expression()
        if not isinstance(start, IntVal) or not isinstance(stop, IntVal):
            self.debug(f"line {header.line}: loop bounds {start!r}, {stop!r} are not integers; loop skipped")
            self.skip_loop(end_index)
            return
        self.env.set(counter.text, start)
        self.skip_line()
        body_start = self.position
        while self.loop_continues(counter.text, stop.value):
            while not self.at_loop_end():
                self.execute_statement()
            value = self.env.get(counter.text)
            if isinstance(value, IntVal):
                self.env.set(counter.text, IntVal(value.value + 1))
            self.position = body_start
        self.skip_loop(end_index)

    def at_loop_end(self) -> bool:
        return self.position >= len(self.tokens) or self.current().is_(LOOP_KEYWORD, 'end')

    def loop_continues(self, counter: str, stop: int) -> bool:
        value = self.env.get(counter)
        result = isinstance(value, IntVal) and value.value < stop
        if self.debug_level >= 3:
            self.debug(f"loop check {counter} = {value!r} < {stop} -> {result}")
        return result

    def skip_loop(self, end_index: int):
        self.position = min(end_index + 1, len(self.tokens))

    # Expressions
    def evaluate_expression(self) -> Value:
        token = self.current()
        if token.kind == NUMBER:
            self.advance()
            number = parse_integer(token.text)
            if number is None:
                self.warn(f"invalid number {token.text!r}, using 0", token)
                value: Value = IntVal(0)
            else:
                value = IntVal(number)
        elif token.kind == STRING:
            self.advance()
            value = TextVal(token.text)
        elif token.kind == IDENTIFIER and self.peek().is_(SPECIAL_CHAR, '['):
            value = self.read_element()
        elif token.kind == IDENTIFIER:
            self.advance()
            bound = self.env.get(token.text)
            if bound is None:
                self.warn(f"undefined variable {token.text!r}, using 0", token)
                value = IntVal(0)
            else:
                value = copy_value(bound)
        elif token.kind == EOL:
            # A missing operand never consumes the end of the line
            value = IntVal(0)
        else:
            self.advance()
            value = IntVal(0)
        if self.debug_level >= 4:
            self.debug(f"expression {token.text!r} -> {value!r}")
        return value

    def resolve_array_ref(self) -> Tuple[str, int]:
        """Consume `name [ index ]` and return the name and resolved index."""
        name = self.current().text
        self.advance()
        self.advance()
        index = self.resolve_index()
        if self.current().is_(SPECIAL_CHAR, ']'):
            self.advance()
        return name, index

    def resolve_index(self) -> int:
        token = self.current()
        if token.kind == NUMBER:
            self.advance()
            number = parse_integer(token.text)
            if number is not None:
                return number
            self.warn(f"invalid array index {token.text!r}, using 0", token)
            return 0
        if token.kind == IDENTIFIER:
            self.advance()
            value = self.env.get(token.text)
            if isinstance(value, IntVal):
                return value.value
            if value is None:
                self.warn(f"index variable {token.text!r} is not defined, using 0", token)
            else:
                self.warn(f"index variable {token.text!r} is {type_name(value)}, not Integer, using 0", token)
            return 0
        if token.kind != EOL and not token.is_(SPECIAL_CHAR, ']'):
            self.advance()
        self.warn(f"invalid array index {token.text!r}, using 0", token)
        return 0

    def read_element(self) -> Value:
        token = self.current()
        name, index = self.resolve_array_ref()
        array = self.env.get(name)
        if not isinstance(array, ArrayVal):
            self.warn(f"array {name!r} not found, using 0", token)
            return IntVal(0)
        if not array.in_bounds(index):
            self.warn(f"index {index} out of bounds for array {name!r} of length {len(array)}, using 0", token)
            return IntVal(0)
        return copy_value(array.load(index))


def run_program(source: str, debug_level: int = 0, console: Optional[Console] = None) -> Environment:
    """Convenience function to tokenize and run an IAM program from source string."""
    tokens = tokenize(source)
    interpreter = Interpreter(debug_level=debug_level, console=console)
    return interpreter.run(tokens)


def read_source(file_path: str) -> str:
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise IamError('file not found', file_path)
    except (OSError, UnicodeDecodeError) as e:
        raise IamError(f'cannot read program: {e}', file_path)


def run_file(file_path: str, debug_level: int = 0, console: Optional[Console] = None) -> Interpreter:
    """Tokenize and execute an IAM file, returning the interpreter instance."""
    tokens = tokenize(read_source(file_path))
    interpreter = Interpreter(debug_level=debug_level, console=console)
    interpreter.run(tokens)
    return interpreter
