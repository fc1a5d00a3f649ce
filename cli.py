# cli.py

"""
Interactive console for Dirac-notation expressions.

Each line is parsed and evaluated independently; the resulting tensor is
printed one element per line (row-major) as re±|im|i. Errors are reported
and the loop carries on with the next line.
"""

import logging
import sys

from qdirac import DiracError, format_complex, interpret

_LOGGER = logging.getLogger(__name__)

# ANSI colors
COLORS = {
    "reset": "\033[0m",
    "red":   "\033[31m",
    "green": "\033[32m",
    "yellow":"\033[33m",
    "blue":  "\033[34m",
    "magenta":"\033[35m",
    "cyan":  "\033[36m"
}

def color_text(text, color, enabled=True):
    if not enabled:
        return text
    return f"{COLORS.get(color, COLORS['reset'])}{text}{COLORS['reset']}"


def print_help(color=True):
    print(f"""
{color_text('=== Dirac Notation Console ===','yellow', color)}

{color_text('Expressions','cyan', color)}
  |0>  |101>  |+>  |->        kets; |+> = (|0>+|1>)/sqrt2, |-> = (|0>-i|1>)/sqrt2
  <0|  <01|                   bras
  <0|1>   |1><0|   3|0>       juxtaposition: inner, outer, scaling
  |0> x |1>                   kronecker product
  a + b   a - b   a / 2       arithmetic; '*' and '.' are explicit juxtaposition
  |expr|   expr'   -expr      norm, conjugate transpose, negation

{color_text('Commands','cyan', color)}
  SHAPE      toggle printing of the result shape
  BASIS      toggle ket expansion over the computational basis
  HISTORY    list evaluated expressions
  HELP, EXIT
""")


class DiracConsole:
    def __init__(self, show_shape=False, show_basis=False, color=True):
        self.show_shape = show_shape
        self.show_basis = show_basis
        self.color = color
        self.history = []

    def paint(self, text, color):
        return color_text(text, color, self.color)

    def render(self, tensor) -> str:
        lines = []
        if self.show_shape:
            lines.append(f"shape {tensor.rows}x{tensor.cols}")
        lines.append(tensor.render())
        if self.show_basis and tensor.cols == 1:
            lines.append(tensor.format_state())
        return "\n".join(lines)

    def evaluate(self, line: str) -> str:
        """Evaluate one expression and return its printed form. Raises DiracError."""
        tensor = interpret(line)
        self.history.append((line, tensor))
        return self.render(tensor)

    def command(self, word: str):
        """Handle a console command; returns its output, or None if ``word`` is not one."""
        if word == "SHAPE":
            self.show_shape = not self.show_shape
            return f"shape display {'on' if self.show_shape else 'off'}"
        if word == "BASIS":
            self.show_basis = not self.show_basis
            return f"basis display {'on' if self.show_basis else 'off'}"
        if word == "HISTORY":
            if not self.history:
                return "no expressions evaluated yet"
            return "\n".join(
                f"[{i}] {expr}  ->  {tensor.rows}x{tensor.cols}"
                + (f" = {format_complex(tensor.item())}" if tensor.shape == (1, 1) else "")
                for i, (expr, tensor) in enumerate(self.history, 1)
            )
        return None


def error_message(line, err) -> str:
    return f"Cannot interpret '{line}' as dirac notation: {err}"


def run_stream(lines, out=None, console=None) -> int:
    """
    Non-interactive mode: evaluate each non-blank line of ``lines`` and
    write the result (or the error) to ``out``. Returns the number of lines
    that failed.
    """
    out = out or sys.stdout
    console = console or DiracConsole()
    failures = 0
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        try:
            out.write(console.evaluate(line) + "\n")
        except DiracError as e:
            _LOGGER.info("rejected %r: %s", line, e)
            out.write(error_message(line, e) + "\n")
            failures += 1
    return failures


# ——— interactive loop —————————————————————————————————————————————
def interactive_cli(console=None):
    console = console or DiracConsole()

    print(console.paint("Welcome to the Dirac notation console!", "green"))
    print_help(console.color)

    while True:
        try:
            inp = input(console.paint(">> ", "yellow")).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not inp:
            continue

        cmd = inp.upper()
        if cmd == "EXIT":
            break
        if cmd == "HELP":
            print_help(console.color)
            continue
        reply = console.command(cmd)
        if reply is not None:
            print(console.paint(reply, "cyan"))
            continue

        try:
            print(console.evaluate(inp))
        except DiracError as e:
            print(console.paint(error_message(inp, e), "red"))


if __name__ == "__main__":
    interactive_cli()
