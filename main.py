"""
main.py

Entry point for the Dirac notation evaluator.
Evaluates a single expression, a stream of expressions from stdin, or
launches the interactive console.
"""

import argparse
import logging
import sys

import cli
from qdirac import DiracError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="qdirac",
        description="Evaluate quantum-state expressions written in Dirac notation.",
    )
    parser.add_argument("-e", "--expr", help="evaluate EXPR, print the result and exit")
    parser.add_argument("--shape", action="store_true", help="print the result shape first")
    parser.add_argument("--basis", action="store_true",
                        help="also print kets expanded over the computational basis")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level (default: WARNING)")
    parser.add_argument("--no-color", action="store_true", help="disable ANSI colours")
    return parser.parse_args(argv)


def main(argv=None):
    """
    Run the evaluator.

    Ensures:
         Exit status 0 on success, 1 if any expression failed.
    """
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    console = cli.DiracConsole(
        show_shape=args.shape, show_basis=args.basis, color=not args.no_color
    )

    if args.expr is not None:
        try:
            print(console.evaluate(args.expr))
        except DiracError as e:
            print(cli.error_message(args.expr, e), file=sys.stderr)
            return 1
        return 0

    if sys.stdin.isatty():
        print("=== Starting Dirac Notation Console ===")
        cli.interactive_cli(console)
        return 0

    return 1 if cli.run_stream(sys.stdin, sys.stdout, console) else 0


if __name__ == '__main__':
    sys.exit(main())
