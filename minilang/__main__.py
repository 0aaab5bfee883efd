"""CLI entry point for the minilang interpreter.

Usage:
    python -m minilang [-v|-vv|-vvv] [program_file]
    python -m minilang --tokens [program_file]
    python -m minilang --emit-ast [program_file]
    python -m minilang --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Where debug output is written (default: debug.txt)
  --tokens      Print the token stream instead of running the program
  --emit-ast    Parse the program and emit its AST as JSON
  --ast         Check and execute a previously emitted AST JSON file

The program is read from standard input when no file is given.
Diagnostics are printed as `[filename:]line:message`. The exit status is
1 for usage errors, unreadable input, malformed AST files and syntax
errors, and 0 otherwise.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast_json import ast_to_obj, ast_from_obj
from .errors import ErrorReporter
from .interpreter import check_and_run, run_program
from .lexer import tokenize
from .parser import parse_program


def read_source(program: Optional[str]) -> str:
    if program is None:
        return sys.stdin.read()
    try:
        with open(program, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError:
        print(f"{program} FILE NOT FOUND")
        sys.exit(1)


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(prog='minilang', description="minilang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', default='debug.txt', help='file receiving debug output')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', action='store_true', help='print the token stream and exit')
    group.add_argument('--emit-ast', action='store_true', help='emit AST JSON for the program')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='*', help='program file to execute (default: stdin)')
    args = parser.parse_args(argv)

    if len(args.program) > 1:
        print("TOO MANY FILES")
        sys.exit(1)
    program = args.program[0] if args.program else None

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"{ast_path} FILE NOT FOUND")
            sys.exit(1)
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                tree = ast_from_obj(json.load(f))
        except (KeyError, TypeError, ValueError) as e:
            print(f"{ast_path} INVALID AST: {e!r}")
            sys.exit(1)
        check_and_run(tree, reporter=ErrorReporter(str(ast_path)),
                      debug_level=args.v, debug_file=args.debug_file)
        return

    source = read_source(program)

    # Token dump mode
    if args.tokens:
        for token in tokenize(source):
            if token.type == 'DONE':
                break
            print(token)
        return

    # Emit AST mode
    if args.emit_ast:
        parsed = parse_program(source, ErrorReporter(program))
        if parsed.has_errors:
            sys.exit(1)
        obj = ast_to_obj(parsed.tree)
        if program is None:
            json.dump(obj, sys.stdout, ensure_ascii=False, indent=2)
            print()
            return
        program_file = Path(program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Default: execute source
    result = run_program(source, filename=program, debug_level=args.v, debug_file=args.debug_file)
    if result.parse_errors:
        sys.exit(1)


if __name__ == '__main__':
    main()
