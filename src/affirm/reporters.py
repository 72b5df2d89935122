"""Reporter protocols and built-in reporters."""

from __future__ import annotations

import sys
from typing import NoReturn, Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from affirm.outcomes import AbortTest


@runtime_checkable
class Reporter(Protocol):
    """Receives formatted failure diagnostics.

    Any object with a ``record`` method qualifies. The assertion functions
    call ``record`` at most once per failing check and never keep a
    reference to the reporter after returning.
    """

    def record(self, message: str) -> None: ...


@runtime_checkable
class AbortingReporter(Reporter, Protocol):
    """Reporter that can also stop the running test.

    ``abort_now`` must not return normally. It is required by the ``must``
    view of :class:`~affirm.wrapped.Wrapped`.
    """

    def abort_now(self) -> NoReturn: ...


class RecordingReporter:
    """Reporter that keeps every failure message in memory.

    Attributes
    ----------
    messages : list[str]
        Recorded diagnostics, oldest first.
    aborted : bool
        Whether ``abort_now`` has been called.
    """

    __test__ = False  # Prevent pytest from collecting this as a test class

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.aborted = False

    def record(self, message: str) -> None:
        self.messages.append(message)

    def abort_now(self) -> NoReturn:
        self.aborted = True
        raise AbortTest(self.messages[-1] if self.messages else "")

    @property
    def failed(self) -> bool:
        return bool(self.messages)

    def clear(self) -> None:
        self.messages.clear()
        self.aborted = False


class ConsoleReporter:
    """Reporter that prints failures to the console using Rich formatting."""

    def __init__(self, console: Console | None = None, title: str = "assertion failed") -> None:
        self.console = console or Console(file=sys.__stderr__)
        self.title = title
        self.failures = 0

    def record(self, message: str) -> None:
        self.failures += 1
        body = escape(message.replace("\r", "").strip("\n"))
        self.console.print(
            Panel(body, title=f"[red]{escape(self.title)} #{self.failures}[/red]", border_style="red")
        )

    def abort_now(self) -> NoReturn:
        self.console.print("[red]✗ test aborted[/red]")
        raise AbortTest(f"{self.failures} failure(s) recorded")
