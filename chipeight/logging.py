"""Console logging utilities for the CHIP-8 engine.

``ConsoleLogger`` is a small levelled logger with optional colours and
elapsed-time stamps. ``TraceLogger`` builds on it to report program loads,
executed instructions and faults in a uniform format.
"""

import sys
import time
from typing import Optional, TextIO

from chipeight.decode import disassemble
from chipeight.errors import Chip8Error


class ConsoleLogger:
    """Flexible console logger with level filtering and colours."""

    level_order = {
        "DEBUG": 0,
        "INFO": 1,
        "WARNING": 2,
        "ERROR": 3,
        "CRITICAL": 4,
    }

    def __init__(
        self,
        name: str = "chipeight",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        if self.log_level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order.keys())}"
            )
        self.stream = stream
        target = stream or sys.stdout
        self.use_colors = (
            use_colors and hasattr(target, "isatty") and target.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in [*self.level_order, "RESET"]}
        )

    def is_enabled(self, level: str) -> bool:
        """Check if messages at ``level`` would be printed."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        if log_level.upper() not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order.keys())}"
            )
        self.log_level = log_level.upper()

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled(level):
            formatted = self._format_message(level.upper(), message)
            print(formatted, file=self.stream or sys.stdout, flush=True)

    def debug(self, message: str):
        """Log debug message."""
        self.log("DEBUG", message)

    def info(self, message: str):
        """Log info message."""
        self.log("INFO", message)

    def warning(self, message: str):
        """Log warning message."""
        self.log("WARNING", message)

    def error(self, message: str):
        """Log error message."""
        self.log("ERROR", message)

    def critical(self, message: str):
        """Log critical message."""
        self.log("CRITICAL", message)


class TraceLogger(ConsoleLogger):
    """Logger for instruction traces and engine faults."""

    def __init__(self, name: str = "chipeight", **kwargs):
        super().__init__(name, **kwargs)
        self.instruction_count = 0

    def log_load(self, size: int, start: int):
        """Report a program copied into memory."""
        self.info(f"Loaded {size} bytes at 0x{start:03X}")

    def log_instruction(self, pc: int, instruction: int, status: str):
        """Trace one executed instruction."""
        self.instruction_count += 1
        if self.is_enabled("DEBUG"):
            self.debug(
                f"#{self.instruction_count:6d} {pc:03X}: {instruction:04X}  "
                f"{disassemble(instruction):<16s} {status}"
            )

    def log_fault(self, error: Chip8Error):
        """Report a fault raised by the engine."""
        self.error(f"{type(error).__name__}: {error}")
