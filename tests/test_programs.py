"""Integration tests for example programs."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from urm_sim import URMSimulator

PROGRAMS_DIR = Path(__file__).parent.parent / "programs"


def load(name: str) -> str:
    return (PROGRAMS_DIR / name).read_text()


class TestAddProgram:
    """Test add.urm - R1 + R2."""

    @pytest.fixture
    def sim(self):
        return URMSimulator()

    @pytest.mark.parametrize("a, b", [(5, 3), (0, 0), (0, 7), (12, 0)])
    def test_add_result(self, sim, a, b):
        assert sim.run_program(load("add.urm"), [a, b]) == a + b

    def test_add_step_count(self, sim):
        """Each unit of R2 costs 4 steps, plus the final test."""
        sim.run_program(load("add.urm"), [5, 3])
        assert sim.get_summary()["steps"] == 3 * 4 + 1


class TestMultiplyProgram:
    """Test multiply.urm - R1 * R2."""

    @pytest.fixture
    def sim(self):
        return URMSimulator(record_trace=False)

    @pytest.mark.parametrize("a, b", [(3, 4), (0, 5), (5, 0), (1, 1), (7, 6)])
    def test_multiply_result(self, sim, a, b):
        assert sim.run_program(load("multiply.urm"), [a, b]) == a * b

    def test_no_trace_recorded(self, sim):
        sim.run_program(load("multiply.urm"), [2, 2])
        assert len(sim.trace) == 0


class TestMonusProgram:
    """Test monus.urm - truncated subtraction."""

    @pytest.mark.parametrize("a, b, expected", [(5, 3, 2), (3, 5, 0), (4, 4, 0)])
    def test_monus_result(self, a, b, expected):
        assert URMSimulator().run_program(load("monus.urm"), [a, b]) == expected


class TestSimulatorTrace:
    """Trace entries record every step."""

    @pytest.fixture
    def sim(self):
        sim = URMSimulator()
        sim.load_program("in(R1) R1++; goto 4; R1++; R1 = 0; out(R1)")
        sim.start([1])
        return sim

    def test_trace_entries(self, sim):
        sim.run()
        assert [e.pc for e in sim.trace] == [1, 2, 4]
        assert [e.step for e in sim.trace] == [1, 2, 3]
        assert sim.trace[0].register_changes() == {"R1": (1, 2)}
        assert sim.trace[1].register_changes() == {}
        assert sim.trace[2].post_state.terminated is True
        assert sim.get_output() == 0

    def test_step_by_step(self, sim):
        entry = sim.step()
        assert entry.statement.to_string(entry.pc) == "1: R1++;"
        assert sim.snapshot().pc == 2
        assert sim.is_terminated() is False

    def test_summary(self, sim):
        sim.run()
        summary = sim.get_summary()
        assert summary["steps"] == 3
        assert summary["terminated"] is True
        assert summary["output"] == 0
        assert summary["trace_length"] == 3
        assert summary["pc"] == 5

    def test_format_trace(self, sim):
        sim.run()
        text = sim.format_trace()
        assert "[Step 1] 1: R1++;" in text
        assert "R1: 1 -> 2" in text
        assert "PC: 2 -> 4" in text
        assert "Output: 0" in text

    def test_step_after_termination(self, sim):
        sim.run()
        with pytest.raises(RuntimeError):
            sim.step()

    def test_restart_clears_trace(self, sim):
        sim.run()
        sim.start([3])
        assert len(sim.trace) == 0
        assert sim.run() == 0


class TestSimulatorMisuse:
    """Operations that need a loaded program or active run."""

    def test_start_without_program(self):
        with pytest.raises(RuntimeError, match="No program loaded"):
            URMSimulator().start([])

    def test_step_without_run(self):
        sim = URMSimulator()
        sim.load_program("out(R1)")
        with pytest.raises(RuntimeError, match="No run started"):
            sim.step()


class TestTraceLimit:
    """A bounded trace keeps only the most recent entries."""

    def test_trace_capped_at_limit(self):
        sim = URMSimulator(trace_limit=10)
        assert sim.run_program(load("add.urm"), [0, 50]) == 50
        assert len(sim.trace) == 10
        assert sim.get_summary()["steps"] == 50 * 4 + 1

    def test_oldest_entries_dropped(self):
        sim = URMSimulator(trace_limit=10)
        sim.run_program(load("add.urm"), [0, 50])
        assert [e.step for e in sim.trace] == list(range(192, 202))
        assert sim.trace[-1].post_state.terminated is True

    def test_unbounded_by_default(self):
        sim = URMSimulator()
        sim.run_program(load("add.urm"), [0, 50])
        assert len(sim.trace) == 201

    def test_limit_survives_restart(self):
        sim = URMSimulator(trace_limit=3)
        sim.run_program(load("add.urm"), [0, 5])
        sim.start([0, 5])
        sim.run()
        assert len(sim.trace) == 3


class TestTraceStatements:
    """Each trace entry names the statement executed at its pc."""

    def test_entries_match_program(self):
        sim = URMSimulator()
        sim.run_program(load("monus.urm"), [3, 2])
        program = sim.program
        assert len(sim.trace) > 0
        for entry in sim.trace:
            assert entry.statement == program.statement_at(entry.pc)
