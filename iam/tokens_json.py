"""JSON serialization/deserialization for IAM token streams.

A tokenized program can be written out with `tokens_to_obj` and executed
later without the original source. The document shape is::

    {"type": "TokenStream", "tokens": [{"kind": ..., "text": ..., "line": ...}, ...]}
"""

from __future__ import annotations

from typing import Any, Dict, List

from .errors import IamError
from .lexer import Token, TOKEN_KINDS


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {"kind": token.kind, "text": token.text, "line": token.line}


def token_from_obj(o: Any) -> Token:
    if not isinstance(o, dict):
        raise IamError(f"token entry must be an object, got {type(o).__name__}")
    kind = o.get("kind")
    if kind not in TOKEN_KINDS:
        raise IamError(f"unknown token kind {kind!r}")
    text = o.get("text", "")
    if not isinstance(text, str):
        raise IamError(f"token text must be a string, got {type(text).__name__}")
    line = o.get("line", 0)
    if not isinstance(line, int):
        raise IamError(f"token line must be an integer, got {type(line).__name__}")
    return Token(kind, text, line)


def tokens_to_obj(tokens: List[Token]) -> Dict[str, Any]:
    return {"type": "TokenStream", "tokens": [token_to_obj(t) for t in tokens]}


def tokens_from_obj(obj: Any) -> List[Token]:
    if not isinstance(obj, dict) or obj.get("type") != "TokenStream":
        raise IamError("not a TokenStream document")
    entries = obj.get("tokens", [])
    if not isinstance(entries, list):
        raise IamError("TokenStream tokens must be a list")
    return [token_from_obj(entry) for entry in entries]
