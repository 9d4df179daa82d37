from __future__ import annotations

import argparse
import sys

from brainfuck import BrainfuckError
from interpreter import DEFAULT_TAPE_SIZE, BrainfuckInterpreter, PointerPolicy

arg_parser = argparse.ArgumentParser(description="Run a Brainfuck program.")
arg_parser.add_argument("file", help="Program file", nargs="?")
arg_parser.add_argument("-c", "--code", help="Program text, instead of a file")
arg_parser.add_argument("-s", "--tape-size", help="Number of tape cells", type=int, default=DEFAULT_TAPE_SIZE)
arg_parser.add_argument("--wrap", help="Wrap the data pointer around the tape ends", action="store_true")
arg_parser.add_argument("-d", "--debug", help="Print trace lines to stderr", action="store_true")


def load_file(filename: str) -> str:
    with open(filename, encoding="latin-1") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    args = arg_parser.parse_args(argv)
    if args.code is not None:
        code = args.code
    elif args.file is not None:
        code = load_file(args.file)
    else:
        arg_parser.print_usage(sys.stderr)
        return 2
    try:
        interpreter = BrainfuckInterpreter(
            args.tape_size, args.debug, policy=PointerPolicy.WRAP if args.wrap else PointerPolicy.BOUNDED)
    except ValueError as e:
        arg_parser.error(str(e))
    try:
        interpreter.interpret(code)
    except BrainfuckError as e:
        print(f"\nerror: {e}", file=sys.stderr)
        return 1
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
