"""Tests for static validation against an input vector."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from urm_sim.errors import URMError, ValidationError
from urm_sim.instructions import Goto, Increment, Program
from urm_sim.validator import find_validation_error, validate


def make_program(*inputs):
    return Program(tuple(inputs), (Increment("R1"),), "R1")


class TestUniqueInputs:
    """Input register names must be pairwise distinct."""

    @pytest.mark.parametrize("values", [[], [1], [1, 2], [1, 2, 3]])
    def test_duplicate_names_rejected_for_any_inputs(self, values):
        with pytest.raises(ValidationError, match="unique"):
            validate(make_program("R1", "R1"), values)

    def test_uniqueness_checked_before_arity(self):
        error = find_validation_error(make_program("R1", "R2", "R1"), [1])
        assert "unique" in str(error)
        assert error.expected is None


class TestArity:
    """Number of inputs must match the declaration."""

    def test_too_few_inputs(self):
        with pytest.raises(ValidationError) as exc:
            validate(make_program("R1", "R2"), [5])
        assert exc.value.expected == 2
        assert exc.value.actual == 1
        assert "expects 2 inputs, but 1 were provided" in str(exc.value)

    def test_too_many_inputs(self):
        error = find_validation_error(make_program("R1"), [1, 2, 3])
        assert (error.expected, error.actual) == (1, 3)

    def test_no_inputs_declared(self):
        assert find_validation_error(make_program(), []) is None


class TestAcceptedPrograms:
    """Validation does not look past the input declaration."""

    def test_valid(self):
        validate(make_program("R1", "R2"), [5, 3])

    def test_targets_and_output_unchecked(self):
        program = Program(("A",), (Goto(99),), "never_written")
        assert find_validation_error(program, [0]) is None

    def test_negative_input_rejected(self):
        with pytest.raises(ValidationError, match="natural"):
            validate(make_program("R1"), [-1])

    def test_validation_error_is_recoverable(self):
        """ValidationError belongs to the recoverable URMError family."""
        assert issubclass(ValidationError, URMError)


class TestInputTypes:
    """Inputs that are not natural numbers are a validation error, not a crash."""

    @pytest.mark.parametrize("value", ["3", 1.5, None, True])
    def test_non_integer_rejected(self, value):
        with pytest.raises(ValidationError, match="natural"):
            validate(make_program("R1"), [value])

    def test_returned_as_value(self):
        error = find_validation_error(make_program("R1", "R2"), [1, "2"])
        assert isinstance(error, ValidationError)
        assert "'2'" in str(error)
