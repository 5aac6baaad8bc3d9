"""Static checks of a parsed program against a concrete input vector.

Checks, in order:
    1. Input register names are pairwise distinct
    2. The number of input values matches the number of input registers
    3. Every input value is a natural number (register cells hold no negatives)

Nothing else is checked: output registers and jump targets are taken as
written.
"""

import logging
from typing import Optional, Sequence

from .errors import ValidationError
from .instructions import Program

logger = logging.getLogger(__name__)


def find_validation_error(program: Program, input_values: Sequence[int]) -> Optional[ValidationError]:
    """Return the first validation failure, or None if the program may run.

    Args:
        program: Parsed program
        input_values: Values to bind to the input registers

    Returns:
        ValidationError describing the failure, or None
    """
    registers = program.input_registers
    if len(set(registers)) != len(registers):
        return ValidationError("Input registers must be unique")

    if len(registers) != len(input_values):
        return ValidationError(
            "Input vector length does not match input register length. "
            f"Program expects {len(registers)} inputs, but {len(input_values)} were provided",
            expected=len(registers),
            actual=len(input_values)
        )

    for value in input_values:
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            return ValidationError(f"Input values must be natural numbers, got {value!r}")

    return None


def validate(program: Program, input_values: Sequence[int]) -> None:
    """Check that a program can be run with the given inputs.

    Raises:
        ValidationError: If the program and input vector are incompatible
    """
    error = find_validation_error(program, input_values)
    if error is not None:
        logger.debug("Validation failed: %s", error)
        raise error
