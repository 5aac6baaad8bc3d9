"""URM-Sim Interactive Demo.

A Gradio web interface for running and stepping through URM programs.

Usage:
    cd /path/to/urm-sim
    python demo/gradio_app.py

Features:
    - Write or load URM programs
    - Run to completion or execute one statement at a time
    - See the statements around the program counter
    - Visualize register state changes in the execution trace
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import gradio as gr
from urm_sim import URMError, URMSimulator
from urm_sim.debug import render_window


# =============================================================================
# Example Programs
# =============================================================================

EXAMPLE_PROGRAMS = {
    "Addition": ("""in(R1, R2)
    if R2 == 0 goto 5;
    R2--;
    R1++;
    goto 1;
out(R1)""", "5 3"),

    "Monus (truncated subtraction)": ("""in(R1, R2)
    if R2 == 0 goto 5;
    R1--;
    R2--;
    goto 1;
out(R1)""", "3 5"),

    "Multiplication": ("""in(R1, R2)
    if R2 == 0 goto 12;
    if R1 == 0 goto 7;
    R1--;
    R3++;
    R4++;
    goto 2;
    R2--;
    if R3 == 0 goto 1;
    R3--;
    R1++;
    goto 8;
out(R4)""", "3 4"),

    "Constant 2": ("""in()
    R1++;
    R1++;
out(R1)""", ""),

    "Custom": ("", ""),
}

MAX_TRACE_ENTRIES = 200


# =============================================================================
# Formatting
# =============================================================================

def parse_inputs(text: str) -> list:
    """Parse whitespace or comma separated natural numbers."""
    values = []
    for part in text.replace(",", " ").split():
        value = int(part)
        if value < 0:
            raise ValueError(f"Input values must be non-negative: {part}")
        values.append(value)
    return values


def format_registers(simulator: URMSimulator) -> str:
    summary = simulator.get_summary()
    lines = [
        "REGISTERS",
        "=" * 30,
    ]
    for reg, value in summary["registers"].items():
        lines.append(f"  {reg}: {value:>10}")
    lines.append("")
    lines.append(f"PC:     {summary['pc']}")
    lines.append(f"Steps:  {summary['steps']}")
    if summary["terminated"]:
        lines.append(f"Output: {summary['output']}")
    return "\n".join(lines)


def format_window(simulator: URMSimulator) -> str:
    return "\n".join(render_window(simulator.state))


def format_trace(simulator: URMSimulator) -> str:
    lines = ["EXECUTION TRACE", "=" * 60]
    for entry in simulator.trace:
        lines.append(f"[Step {entry.step}] {entry.statement.to_string(entry.pc)}")
        changes = [f"{reg}: {a} -> {b}" for reg, (a, b) in entry.register_changes().items()]
        if changes:
            lines.append(f"    Changes: {', '.join(changes)}")
    dropped = simulator.state.step_count - len(simulator.trace)
    if dropped > 0:
        lines.insert(2, f"... ({dropped} earlier entries)")
    return "\n".join(lines)


# =============================================================================
# Execution Functions
# =============================================================================

def start_program(source: str, inputs: str):
    """Parse the program and start a paused run.

    Returns:
        Tuple of (simulator, status, window, registers, trace)
    """
    if not source.strip():
        return None, "Error: No program provided", "", "", ""

    simulator = URMSimulator(trace_limit=MAX_TRACE_ENTRIES)
    try:
        simulator.load_program(source)
        simulator.start(parse_inputs(inputs))
    except (URMError, ValueError) as e:
        return None, f"Error: {e}", "", "", ""

    return simulator, "Ready", format_window(simulator), format_registers(simulator), ""


def step_program(simulator):
    """Execute one statement of the current run."""
    if simulator is None:
        return None, "Error: Press Start first", "", "", ""
    if not simulator.is_terminated():
        simulator.step()
    status = "Terminated" if simulator.is_terminated() else "Paused"
    return simulator, status, format_window(simulator), format_registers(simulator), format_trace(simulator)


def run_program(source: str, inputs: str):
    """Run a program to completion in one go."""
    simulator, status, window, registers, trace = start_program(source, inputs)
    if simulator is None:
        return simulator, status, window, registers, trace
    simulator.run()
    return simulator, "Terminated", format_window(simulator), format_registers(simulator), format_trace(simulator)


def load_example(example_name: str):
    """Load an example program and its inputs."""
    return EXAMPLE_PROGRAMS.get(example_name, ("", ""))


# =============================================================================
# Gradio Interface
# =============================================================================

def create_demo():
    """Create and return the Gradio demo interface."""

    with gr.Blocks(title="URM-Sim Demo", theme=gr.themes.Soft()) as demo:
        gr.Markdown("""
        # URM-Sim: Unlimited Register Machine

        Named natural-number registers, saturating decrement and explicit jumps.
        Start a run to step through it one statement at a time, or run it to completion.
        """)

        simulator_state = gr.State(None)

        with gr.Row():
            with gr.Column(scale=2):
                gr.Markdown("### Program")

                example_dropdown = gr.Dropdown(
                    choices=list(EXAMPLE_PROGRAMS.keys()),
                    value="Addition",
                    label="Load Example"
                )

                program_input = gr.Textbox(
                    value=EXAMPLE_PROGRAMS["Addition"][0],
                    label="Source Code",
                    lines=15,
                    placeholder="in(R1)\n    R1++;\nout(R1)"
                )

                inputs_box = gr.Textbox(
                    value=EXAMPLE_PROGRAMS["Addition"][1],
                    label="Inputs (space separated)"
                )

                with gr.Row():
                    start_button = gr.Button("Start")
                    step_button = gr.Button("Step")
                    run_button = gr.Button("Run", variant="primary")

            with gr.Column(scale=3):
                status_output = gr.Textbox(label="Status", interactive=False)
                with gr.Row():
                    window_output = gr.Textbox(
                        label="Instructions",
                        lines=6,
                        interactive=False
                    )
                    registers_output = gr.Textbox(
                        label="Registers",
                        lines=10,
                        interactive=False
                    )

                trace_output = gr.Textbox(
                    label="Execution Trace",
                    lines=20,
                    interactive=False
                )

        with gr.Accordion("Language Reference", open=False):
            gr.Markdown("""
            | Statement | Effect |
            |-----------|--------|
            | `R++;` | Increment R |
            | `R--;` | Decrement R (stays at 0) |
            | `R = 0;` | Set R to 0 |
            | `goto N;` | Continue at statement N |
            | `if R == 0 goto N;` | Jump if R is zero |
            | `if R != 0 goto N;` | Jump if R is not zero |

            **Declarations**: `in(R1, R2, ...)` first, `out(R)` last
            **Registers**: any identifier, unset registers read as 0
            **Termination**: when the next statement number exceeds the program length
            """)

        outputs = [simulator_state, status_output, window_output, registers_output, trace_output]

        example_dropdown.change(
            fn=load_example,
            inputs=[example_dropdown],
            outputs=[program_input, inputs_box]
        )

        start_button.click(
            fn=start_program,
            inputs=[program_input, inputs_box],
            outputs=outputs
        )

        step_button.click(
            fn=step_program,
            inputs=[simulator_state],
            outputs=outputs
        )

        run_button.click(
            fn=run_program,
            inputs=[program_input, inputs_box],
            outputs=outputs
        )

    return demo


# =============================================================================
# Main
# =============================================================================

if __name__ == "__main__":
    demo = create_demo()
    demo.launch(
        share=False,
        server_name="0.0.0.0",
        server_port=7861,
        show_error=True
    )
