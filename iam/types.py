"""Runtime values for the IAM interpreter.

Every binding in an IAM program holds one of three value kinds:

* `IntVal`  - a signed 64-bit integer,
* `TextVal` - a string,
* `ArrayVal` - a fixed-length list of values.

The helpers in this module render values for `print`, name their kinds
for diagnostics and parse integers the way the `input` statement and
number literals require.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union
import re


INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

_INTEGER_RE = re.compile(r'[+-]?[0-9]+')


@dataclass(frozen=True)
class IntVal:
    value: int = 0

    def __repr__(self) -> str:
        return f"Integer({self.value})"


@dataclass(frozen=True)
class TextVal:
    value: str = ''

    def __repr__(self) -> str:
        return f"Text({self.value!r})"


@dataclass
class ArrayVal:
    """Represents an IAM array value.

    The length is fixed when the array is declared. Elements can be
    replaced by index through `store`, but the list itself never grows or
    shrinks.
    """
    items: List['Value']

    def __len__(self) -> int:
        return len(self.items)

    def in_bounds(self, index: int) -> bool:
        return 0 <= index < len(self.items)

    def load(self, index: int) -> 'Value':
        return self.items[index]

    def store(self, index: int, value: 'Value'):
        self.items[index] = value

    @staticmethod
    def zeros(length: int) -> 'ArrayVal':
        return ArrayVal([IntVal(0) for _ in range(length)])

    def __repr__(self) -> str:
        return f"Array({self.items!r})"


Value = Union[IntVal, TextVal, ArrayVal]


def parse_integer(text: str) -> Optional[int]:
    """Parse an optionally signed decimal integer.

    Surrounding whitespace is ignored. Returns None when the text is not
    a plain integer or falls outside the signed 64-bit range.
    """
    text = text.strip()
    if not _INTEGER_RE.fullmatch(text):
        return None
    number = int(text)
    if number < INT_MIN or number > INT_MAX:
        return None
    return number


def type_name(value: Value) -> str:
    """Return the IAM kind name of a runtime value."""
    if isinstance(value, IntVal):
        return 'Integer'
    if isinstance(value, TextVal):
        return 'Text'
    if isinstance(value, ArrayVal):
        return f"Array[{len(value.items)}]"
    raise TypeError(f"not an IAM value: {value!r}")


def to_string(value: Value) -> str:
    """Convert an IAM value to its printed form.

    Integers print in decimal, text prints as is, arrays print their
    elements comma separated inside brackets, e.g. `[0, 5, 0]`.
    """
    if isinstance(value, IntVal):
        return str(value.value)
    if isinstance(value, TextVal):
        return value.value
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(to_string(item) for item in value.items) + ']'
    raise TypeError(f"not an IAM value: {value!r}")


def copy_value(value: Value) -> Value:
    """Return a value that shares no mutable state with `value`.

    Integers and text are immutable and returned as is; arrays are copied
    element by element so that assignment behaves like a copy.
    """
    if isinstance(value, (IntVal, TextVal)):
        return value
    if isinstance(value, ArrayVal):
        return ArrayVal([copy_value(item) for item in value.items])
    raise TypeError(f"not an IAM value: {value!r}")
