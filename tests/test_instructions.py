"""Tests for the instruction model and its rendering."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from urm_sim.instructions import (
    Condition,
    ConditionalGoto,
    Decrement,
    Goto,
    Increment,
    Program,
    ZeroAssignment,
)
from urm_sim.parser import parse_program, parse_statement


class TestStatementRendering:
    """Statements render as numbered source lines."""

    @pytest.mark.parametrize("statement, expected", [
        (Increment("R1"), "3: R1++;"),
        (Decrement("R1"), "3: R1--;"),
        (ZeroAssignment("X"), "3: X = 0;"),
        (Goto(7), "3: goto 7;"),
        (ConditionalGoto("R2", Condition.EQUAL, 5), "3: if R2 == 0 goto 5;"),
        (ConditionalGoto("R2", Condition.NOT_EQUAL, 1), "3: if R2 != 0 goto 1;"),
    ])
    def test_to_string(self, statement, expected):
        assert statement.to_string(3) == expected

    def test_str_has_no_index(self):
        assert str(Increment("R1")) == "R1++;"


class TestRoundTrip:
    """Rendered statements re-parse to equal statements."""

    @pytest.mark.parametrize("statement", [
        Increment("R1"),
        Decrement("count"),
        ZeroAssignment("_tmp9"),
        Goto(12),
        ConditionalGoto("R2", Condition.EQUAL, 5),
        ConditionalGoto("R2", Condition.NOT_EQUAL, 1),
    ])
    def test_statement_round_trip(self, statement):
        assert parse_statement(str(statement)) == statement

    def test_program_round_trip(self):
        source = """
            in(R1, R2)
            if R2 == 0 goto 5;
            R2--;
            R1++;
            goto 1;
            out(R1)
        """
        program = parse_program(source)
        assert parse_program(program.to_source()) == program


class TestCondition:
    """Conditions compare a value against zero."""

    def test_equal(self):
        assert Condition.EQUAL.holds(0) is True
        assert Condition.EQUAL.holds(4) is False

    def test_not_equal(self):
        assert Condition.NOT_EQUAL.holds(0) is False
        assert Condition.NOT_EQUAL.holds(4) is True


class TestProgram:
    """Program envelope behavior."""

    def test_statement_at_is_one_based(self):
        program = Program(("R1",), (Increment("R1"), Goto(1)), "R1")
        assert program.statement_at(1) == Increment("R1")
        assert program.statement_at(2) == Goto(1)
        assert len(program) == 2

    def test_statement_at_out_of_range(self):
        program = Program((), (Increment("R1"),), "R1")
        with pytest.raises(IndexError):
            program.statement_at(0)
        with pytest.raises(IndexError):
            program.statement_at(2)

    def test_statements_are_immutable(self):
        statement = Increment("R1")
        with pytest.raises(AttributeError):
            statement.register = "R2"
