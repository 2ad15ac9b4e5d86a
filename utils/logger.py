"""
Logger utility for the OS Resource Policy Simulator.

Prints simulation traces and reports to the console and, optionally, mirrors
them to a log file. Debug output is shown only in verbose mode.
"""

from datetime import datetime
from typing import IO, Iterable, Optional

LEVEL_PREFIXES = {
    "error": "[ERROR] ",
    "warning": "[WARNING] ",
    "debug": "[DEBUG] ",
    "info": "",
}


class SimulatorLogger:
    """
    Console/file logger for simulation traces.

    Trace entries are written as "Step <n>: <entry>", where the entry is the
    str() of a trace record (a Gantt segment, frame snapshot, head movement,
    allocation step or safety admission).

    Usable as a context manager; the log file is closed on exit.
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Args:
            verbose: Show debug-level messages
            log_file: Optional path; the file is truncated and receives a copy of every line
        """
        self.verbose = verbose
        self.log_file = log_file
        self._sink: Optional[IO[str]] = None

        if log_file:
            self._sink = open(log_file, 'w', encoding='utf-8')
            started = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self._sink.write(f"Simulation Log - {started}\n{'='*60}\n\n")

    def __enter__(self) -> "SimulatorLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message at the given level (info, debug, warning, error).

        Raises:
            ValueError: On an unknown level
        """
        if level not in LEVEL_PREFIXES:
            raise ValueError(f"Unknown log level: {level!r}")
        if level == "debug" and not self.verbose:
            return

        line = LEVEL_PREFIXES[level] + message
        print(line)
        if self._sink:
            self._sink.write(line + "\n")
            self._sink.flush()

    def log_section(self, title: str) -> None:
        """Log a title between two rules."""
        rule = "=" * 60
        self.log(f"\n{rule}\n{title}\n{rule}")

    def log_step(self, step: int, message: str) -> None:
        self.log(f"Step {step}: {message}")

    def log_trace(self, items: Iterable) -> None:
        """Log every trace record as a numbered step, starting at 0."""
        for step, item in enumerate(items):
            self.log_step(step, str(item))

    def log_state(self, state_str: str) -> None:
        """Log a formatted state snapshot (verbose only)."""
        self.log(f"State:\n{state_str}", "debug")

    def close(self) -> None:
        """Close the log file if one is open."""
        if self._sink:
            self._sink.close()
            self._sink = None
