"""
Command-line interface for CalcPipe.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

import yaml

from calcpipe.calcpipe import CalcPipe
from calcpipe.calcpipe_error import CalcPipeError
from calcpipe.config import CalcPipeConfig


logger = logging.getLogger(__name__)

EXIT_COMMANDS = {'quit', 'exit'}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='calcpipe',
        description="Evaluate arithmetic expressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "2 + 3 * 4"                # Evaluate one expression
  %(prog)s "sin(pi / 2)" "16 |> sqrt" # Evaluate several expressions
  %(prog)s --config calc.yaml "g * 2" # Use constants from a config file
  %(prog)s                            # Interactive mode
        """
    )

    parser.add_argument('expressions', nargs='*', help='Expressions to evaluate')
    parser.add_argument('--config', '-c', help='YAML configuration file path')
    parser.add_argument('--max-depth', type=int, help='Maximum expression nesting depth')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    return parser


def main(argv: Optional[List[str]] = None, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args.config)

    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=stdout)
        return 1

    if args.max_depth is not None:
        config.max_depth = args.max_depth

    errors = config.validate()
    if errors:
        print("Configuration errors found:", file=stdout)
        for error in errors:
            print(f"  - {error}", file=stdout)

        return 1

    calculator = CalcPipe(context=config.create_context(), max_depth=config.max_depth)

    if args.expressions:
        return handle_expressions(calculator, args.expressions, stdout)

    return handle_interactive(calculator, stdin, stdout)


def load_config(config_path: Optional[str]) -> CalcPipeConfig:
    """Load the configuration file if one was given, otherwise use defaults."""
    if config_path is None:
        return CalcPipeConfig()

    logger.debug("Loading configuration from %s", config_path)
    return CalcPipeConfig.load_from_file(config_path)


def evaluate_line(calculator: CalcPipe, expression: str, stdout: TextIO) -> bool:
    """Evaluate one expression and print the result or the error."""
    try:
        print(calculator.evaluate_and_format(expression), file=stdout)
        return True

    except CalcPipeError as e:
        logger.debug("Evaluation of %r failed: %s", expression, e.reason)
        print(str(e), file=stdout)
        return False


def handle_expressions(calculator: CalcPipe, expressions: List[str], stdout: TextIO) -> int:
    """Handle expressions given on the command line."""
    failed = 0
    for expression in expressions:
        if not evaluate_line(calculator, expression, stdout):
            failed += 1

    return 1 if failed else 0


def handle_interactive(calculator: CalcPipe, stdin: TextIO, stdout: TextIO) -> int:
    """Read and evaluate expressions until end of input or an exit command."""
    for line in stdin:
        expression = line.strip()
        if not expression:
            continue

        if expression.lower() in EXIT_COMMANDS:
            break

        evaluate_line(calculator, expression, stdout)

    return 0
