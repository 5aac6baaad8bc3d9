#!/usr/bin/env python3
"""URM-Sim Command Line Interface.

Run Unlimited Register Machine programs.

Usage:
    python main.py programs/add.urm 5 3
    python main.py programs/add.urm 5 3 --debug
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from urm_sim import URMError, URMSimulator
from urm_sim.debug import run_debugger


def _natural(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid input value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"input values must be non-negative: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="URM-Sim: Unlimited Register Machine simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Add two numbers
    python main.py programs/add.urm 5 3

    # Step through the program interactively
    python main.py programs/add.urm 5 3 --debug

    # Run inline source and show the execution trace
    python main.py --inline "in(R1) R1++; out(R1)" 41 --trace
        """
    )

    parser.add_argument(
        "program",
        nargs="?",
        help="Path to URM program file"
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        type=_natural,
        help="Input values, one per input register"
    )
    parser.add_argument(
        "--inline", "-i",
        type=str,
        help="Inline URM source (all positionals are then input values)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Step through execution in the interactive debugger"
    )
    parser.add_argument(
        "--trace", "-t",
        action="store_true",
        help="Print full execution trace after the result"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    inputs = list(args.inputs)
    if args.inline is not None:
        source = args.inline
        if args.program is not None:
            try:
                inputs.insert(0, _natural(args.program))
            except argparse.ArgumentTypeError as e:
                parser.error(str(e))
    elif args.program is None:
        parser.error("Either a program path or --inline is required")
    else:
        try:
            source = Path(args.program).read_text()
        except OSError as e:
            print(f"Failed to read {args.program}: {e}", file=sys.stderr)
            return 1

    simulator = URMSimulator(record_trace=args.trace)

    try:
        program = simulator.load_program(source)
        if args.debug:
            result = run_debugger(program, inputs)
            if result is not None:
                print(f"Program result: {result}")
            return 0
        simulator.start(inputs)
        result = simulator.run()
    except URMError as e:
        print(f"Failed to run: {e}", file=sys.stderr)
        return 1

    print(result)
    if args.trace:
        simulator.print_trace()
    return 0


if __name__ == "__main__":
    sys.exit(main())
