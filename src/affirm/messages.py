"""Failure message construction.

Everything here deals with turning a failed check into the text handed to a
reporter: the optional caller-supplied message, the call-site trace and the
final diagnostic layout.
"""

from __future__ import annotations

import inspect
import logging
import os
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from affirm.config import get_settings

logger = logging.getLogger(__name__)

_PACKAGE = __name__.split(".")[0]


@dataclass(frozen=True, init=False)
class Message:
    """A custom failure message with printf-style arguments.

    Example:
        >>> equal(reporter, 3, len(items), msg=Message("expected %d items for %s", 3, name))
    """

    template: str
    args: tuple[Any, ...]

    def __init__(self, template: str, *args: Any) -> None:
        object.__setattr__(self, "template", template)
        object.__setattr__(self, "args", args)

    def __str__(self) -> str:
        if not self.args:
            return self.template
        try:
            return self.template % self.args
        except (TypeError, ValueError):
            # A broken template must not hide the assertion failure itself.
            return f"{self.template} {self.args!r}"


MessageLike = str | Message | None


def render_message(msg: MessageLike) -> str:
    """Return the custom message text, or an empty string when there is none."""
    if msg is None:
        return ""
    return str(msg)


def render_value(value: Any) -> str:
    """Render an operand for a diagnostic, honouring ``max_value_length``."""
    text = repr(value)
    limit = get_settings().max_value_length
    if limit and len(text) > limit:
        return text[:limit] + "..."
    return text


def indent_message_lines(message: str, tabs: int) -> str:
    """Indent every line after the first so continuation lines line up."""
    lines = message.split("\n")
    out = [lines[0]]
    for line in lines[1:]:
        out.append("\n\r" + "\t" * tabs + line)
    return "\t" + "".join(out)


def caller_info(depth: int | None = None) -> list[str]:
    """Return ``file:line`` entries for the frames that led to a failure.

    Frames inside this package are skipped. The walk stops at the first test
    function (``test*``) or after ``depth`` entries.
    """
    depth = depth or get_settings().trace_depth
    frame = inspect.currentframe()
    if frame is None:
        logger.warning("No frame found for assertion call-site trace")
        return []

    callers: list[str] = []
    frame = frame.f_back
    while frame and len(callers) < depth:
        module_name = frame.f_globals.get("__name__", "")
        func_name = frame.f_code.co_name

        if module_name != _PACKAGE and not module_name.startswith(_PACKAGE + "."):
            filename = os.path.basename(frame.f_code.co_filename)
            callers.append(f"{filename}:{frame.f_lineno}")
            if func_name.startswith("test"):
                break

        frame = frame.f_back
    return callers


class Failure(BaseModel):
    """Diagnostic describing one failed check.

    Attributes
    ----------
    error
        Check-specific detail, e.g. ``"Not equal: 1 (expected) != 2 (actual)"``.
    trace
        ``file:line`` call sites, innermost first.
    message
        Caller-supplied message, if any.
    """

    error: str
    trace: list[str] = Field(default_factory=list)
    message: str | None = None

    def render(self) -> str:
        """Build the text passed to ``Reporter.record``."""
        first = self.trace[0] if self.trace else ""
        padding = " " * len(f"{first}:      ") if first else ""
        sections = [f"\r{padding}\r"]
        if self.trace:
            sections.append("\tError Trace:\t" + "\n\r\t\t\t".join(self.trace) + "\n")
        sections.append("\r\tError:" + indent_message_lines(self.error, 2) + "\n")
        if self.message:
            sections.append("\r\tMessages:\t" + self.message + "\n")
        sections.append("\r")
        return "".join(sections)


def build_failure(failure_message: str, msg: MessageLike = None) -> Failure:
    """Create a :class:`Failure` for the current call site."""
    trace = caller_info() if get_settings().include_trace else []
    return Failure(error=failure_message, trace=trace, message=render_message(msg) or None)
