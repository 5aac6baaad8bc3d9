"""Execution engine: the program-counter state machine.

Transitions, for the statement at position pc:

    Increment{r}            r <- read(r) + 1             pc + 1
    Decrement{r}            r <- max(read(r) - 1, 0)     pc + 1
    ZeroAssignment{r}       r <- 0                       pc + 1
    Goto{t}                 (unchanged)                  t
    ConditionalGoto{r,c,t}  (unchanged)                  t if c holds for read(r), else pc + 1

Execution terminates as soon as pc exceeds the statement count; the result
is then read(output_register). There is no step limit: a program that loops
forever runs forever.

step() is the primitive an interactive driver calls between pauses;
run_to_completion() simply loops it.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from .errors import ExecutionDefect
from .instructions import (
    ConditionalGoto,
    Decrement,
    Goto,
    Increment,
    Program,
    ZeroAssignment,
)
from .state import ExecutionState, create_initial_state
from .validator import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Continuing:
    """Step outcome: more statements remain to execute."""
    pc: int


@dataclass(frozen=True)
class Terminated:
    """Step outcome: pc moved past the end; output is the result."""
    output: int


StepResult = Union[Continuing, Terminated]


def init_state(program: Program, input_values: Sequence[int]) -> ExecutionState:
    """Validate inputs and create a fresh execution state.

    Args:
        program: Parsed program
        input_values: Values bound positionally to program.input_registers

    Returns:
        ExecutionState at pc = 1

    Raises:
        ValidationError: If the inputs do not fit the program
    """
    validate(program, input_values)
    state = create_initial_state(program, input_values)
    logger.debug("Initialized run: %s", state)
    return state


def step(state: ExecutionState) -> StepResult:
    """Apply exactly one transition to the state.

    Args:
        state: State of the run (mutated in place)

    Returns:
        Terminated(output) if pc is now past the last statement,
        otherwise Continuing(pc)

    Raises:
        RuntimeError: If the run has already terminated
        ExecutionDefect: If pc points before the first statement
    """
    if state.terminated:
        raise RuntimeError("Program has already terminated")

    pc = state.pc
    try:
        statement = state.program.statement_at(pc)
    except IndexError:
        raise ExecutionDefect(f"Program counter out of bounds: {pc}") from None

    next_pc = pc + 1
    if isinstance(statement, Increment):
        state.write(statement.register, state.read(statement.register) + 1)
    elif isinstance(statement, Decrement):
        state.write(statement.register, max(state.read(statement.register) - 1, 0))
    elif isinstance(statement, ZeroAssignment):
        state.write(statement.register, 0)
    elif isinstance(statement, Goto):
        next_pc = statement.target
    elif isinstance(statement, ConditionalGoto):
        if statement.condition.holds(state.read(statement.register)):
            next_pc = statement.target
    else:
        raise ExecutionDefect(f"Unknown statement type: {type(statement).__name__}")

    state.pc = next_pc
    state.step_count += 1

    if state.terminated:
        logger.debug("Terminated after %d steps, output %d", state.step_count, state.output)
        return Terminated(state.output)
    return Continuing(state.pc)


def run_to_completion(state: ExecutionState) -> int:
    """Step until the program terminates.

    Returns:
        Final value of the output register (0 if never written)
    """
    while not state.terminated:
        step(state)
    return state.output


def simulate(program: Program, input_values: Sequence[int]) -> int:
    """Run a program on the given inputs and return its output.

    Raises:
        ValidationError: If the inputs do not fit the program
    """
    return run_to_completion(init_state(program, input_values))
