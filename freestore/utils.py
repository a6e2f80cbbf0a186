"""
Utility functions for the freestore library.
"""

from __future__ import annotations

import linecache
import os
import sys
from dataclasses import dataclass, field
from typing import Any

# Environment variable to control debug mode
DEBUG_COMMANDS = os.environ.get("FREESTORE_DEBUG", "").lower() in ("1", "true", "yes")

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def _is_freestore_internal(path: str) -> bool:
    return os.path.abspath(path).startswith(_PACKAGE_DIR + os.sep)


@dataclass(frozen=True)
class CreationContext:
    """Where a command was built."""

    filename: str
    line: int
    function: str
    code: str | None = None
    stack_trace: tuple[dict[str, Any], ...] = field(default=(), compare=False)

    def format_location(self) -> str:
        """Format the creation location as a string."""
        return f"{self.filename}:{self.line} in {self.function}"

    def format_full(self) -> str:
        lines = [f"Command created at {self.format_location()}"]
        if self.code:
            lines.append(f"    {self.code}")
        if self.stack_trace:
            lines.append("\nCreation stack trace:")
            for frame in self.stack_trace:
                lines.append(
                    f'  File "{frame["filename"]}", line {frame["line"]}, in {frame["function"]}'
                )
                if frame.get("code"):
                    lines.append(f"    {frame['code']}")
        return "\n".join(lines)


def capture_creation_context(skip_frames: int = 2) -> CreationContext | None:
    """
    Capture the first caller frame outside freestore.

    Args:
        skip_frames: Number of frames to skip before searching (default 2 to
            skip this function and its caller)

    Returns:
        CreationContext for the user call site; with FREESTORE_DEBUG set the
        enclosing frames are recorded too.
    """
    try:
        frame = sys._getframe(skip_frames)
    except ValueError:
        return None

    while frame is not None and _is_freestore_internal(frame.f_code.co_filename):
        frame = frame.f_back
    if frame is None:
        return None

    filename = frame.f_code.co_filename
    line = frame.f_lineno
    code = linecache.getline(filename, line).strip() or None

    stack_data: list[dict[str, Any]] = []
    if DEBUG_COMMANDS:
        current_frame = frame.f_back
        while current_frame is not None and len(stack_data) < 12:
            frame_filename = current_frame.f_code.co_filename
            frame_data: dict[str, Any] = {
                "filename": frame_filename,
                "line": current_frame.f_lineno,
                "function": current_frame.f_code.co_name,
            }
            code_line = linecache.getline(frame_filename, current_frame.f_lineno)
            if code_line:
                frame_data["code"] = code_line.strip()
            stack_data.append(frame_data)
            current_frame = current_frame.f_back

    return CreationContext(
        filename=filename,
        line=line,
        function=frame.f_code.co_name,
        code=code,
        stack_trace=tuple(stack_data),
    )


__all__ = [
    "DEBUG_COMMANDS",
    "CreationContext",
    "capture_creation_context",
]
