"""Console output formatting utilities for actionflow."""

from __future__ import annotations

import sys
from typing import Dict, Iterable, List, Optional

from ..model import LintError


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))

    def print_lint_started(self, file_count: int) -> None:
        """Print lint run information."""
        print("\nLINT STARTED")
        print(f"Files: {file_count}")

    def print_file_result(self, filename: str, diagnostics: List[LintError]) -> None:
        """
        Print the diagnostics for one workflow file.

        Args:
            filename: Name shown in the header line
            diagnostics: Lint errors in report order
        """
        self.print_header(filename)
        if not diagnostics:
            print("OK")
            return
        for d in diagnostics:
            where = f" ({d.path})" if d.path else ""
            print(f"{d.severity.upper()}: {d.message}{where}")

    def print_summary(self, counts: Dict[str, int]) -> None:
        """Print final lint summary."""
        print("\n" + "=" * 40)
        print("RESULTS")
        print("=" * 40)
        print(f"  errors: {counts.get('error', 0)}")
        print(f"  warnings: {counts.get('warning', 0)}")

    def print_matrix(self, job_id: str, combinations: Iterable[dict]) -> None:
        """Print the expanded matrix of a job."""
        combos = list(combinations)
        print(f"\nJOB: {job_id} ({len(combos)} combination(s))")
        for combo in combos:
            print("  " + ", ".join(f"{k}={v}" for k, v in combo.items()))

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print a problem that stopped actionflow before any workflow was linted.

        Shown on stderr as `actionflow: <title>: <message>`, followed by
        indented detail lines and a `hint:` block.
        """
        print(f"actionflow: {title}: {message}", file=sys.stderr)
        for detail in details or ():
            print(f"    {detail}", file=sys.stderr)
        if suggestion:
            lines = suggestion.splitlines()
            print(f"hint: {lines[0]}", file=sys.stderr)
            for line in lines[1:]:
                print(f"      {line}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
