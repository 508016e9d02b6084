"""CLI entry point for the IAM interpreter.

Usage:
    python -m iam [-v|-vv|-vvv|-vvvv] [-q] [program_file]
    python -m iam [-v...] --emit-tokens <program_file>
    python -m iam [-v...] --tokens <tokens_json_file>

Options:
  -v              Increase debug verbosity (can be repeated)
  -q, --quiet     Do not print the startup banner
  --emit-tokens   Tokenize the given .iam file and emit a token JSON file
  --tokens        Execute a previously emitted token JSON file

Without a program file the program is read from standard input. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .errors import IamError
from .interpreter import Interpreter, read_source
from .lexer import Token, tokenize
from .tokens_json import tokens_to_obj, tokens_from_obj

BANNER = 'IAM Language Interpreter (Python Version)'


def load_tokens(json_path: Path) -> List[Token]:
    if not json_path.exists():
        raise IamError('file not found', str(json_path))
    with open(json_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise IamError(f'invalid JSON: {e}', str(json_path))
    return tokens_from_obj(data)


def emit_tokens(program_file: Path) -> Path:
    tokens = tokenize(read_source(str(program_file)))
    out_path = program_file.with_name(program_file.name + '.tokens.json')
    with open(out_path, 'w', encoding='utf-8') as out:
        json.dump(tokens_to_obj(tokens), out, ensure_ascii=False, indent=2)
    return out_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='iam', description="IAM language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('-q', '--quiet', action='store_true', help='do not print the startup banner')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-tokens', metavar='IAM_FILE', help='emit token JSON for the given .iam file')
    group.add_argument('--tokens', metavar='TOKENS_JSON_FILE', help='execute tokens from a JSON file')
    parser.add_argument('program', nargs='?', help='IAM program file (.iam); read from stdin when omitted')
    args = parser.parse_args(argv)

    try:
        # Emit tokens mode
        if args.emit_tokens:
            print(str(emit_tokens(Path(args.emit_tokens))))
            return

        if args.tokens:
            tokens = load_tokens(Path(args.tokens))
        elif args.program:
            tokens = tokenize(read_source(args.program))
        else:
            tokens = tokenize(sys.stdin.read())
    except IamError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not args.quiet:
        print(BANNER)
    interpreter = Interpreter(debug_level=args.v)
    try:
        interpreter.run(tokens)
    except Exception as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
