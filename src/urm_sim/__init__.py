"""URM-Sim: Unlimited Register Machine parser and simulator.

The Unlimited Register Machine is a minimal model of computation: named,
unbounded natural-number registers driven by increment, saturating
decrement, zero assignment and (conditional) jumps.

Pipeline:
    TEXT -> PARSER -> PROGRAM -> VALIDATOR -> ENGINE (step ... step) -> OUTPUT

Modules:
    instructions: Immutable program model and canonical rendering
    parser: Lark grammar and parse-tree transformer
    validator: Checks a program against a concrete input vector
    state: ExecutionState (registers, pc) and read-only snapshots
    engine: Single-step transition and run-to-completion
    simulator: URMSimulator orchestrator with execution trace
    debug: Step-driven debugger (manual / timed auto-advance)
    errors: Error hierarchy
"""

__version__ = "0.1.0"
__author__ = "URM-Sim Project"

from .errors import ExecutionDefect, URMError, URMSemanticError, URMSyntaxError, ValidationError
from .instructions import (
    Condition,
    ConditionalGoto,
    Decrement,
    Goto,
    Increment,
    Program,
    Statement,
    ZeroAssignment,
)
from .parser import parse_program, parse_statement
from .validator import validate
from .state import ExecutionState, Snapshot
from .engine import Continuing, Terminated, init_state, run_to_completion, simulate, step
from .simulator import URMSimulator

__all__ = [
    "URMError", "URMSyntaxError", "URMSemanticError", "ValidationError", "ExecutionDefect",
    "Condition", "Statement", "Increment", "Decrement", "ZeroAssignment", "Goto",
    "ConditionalGoto", "Program",
    "parse_program", "parse_statement", "validate",
    "ExecutionState", "Snapshot",
    "Continuing", "Terminated", "init_state", "step", "run_to_completion", "simulate",
    "URMSimulator",
]
