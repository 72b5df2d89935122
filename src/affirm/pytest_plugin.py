"""pytest integration.

Provides two fixtures:

``affirm_reporter``
    A :class:`PytestReporter` collecting failures for the current test. The
    test fails at teardown if anything was recorded.
``affirm``
    ``wrap(affirm_reporter)``, so tests can write
    ``affirm(value).equal(expected)`` or ``affirm(value).must.equal(expected)``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, NoReturn

import pytest

from affirm.wrapped import Wrapped, wrap


class PytestReporter:
    """Reporter that turns recorded failures into pytest failures."""

    __test__ = False

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.aborted = False

    def record(self, message: str) -> None:
        self.messages.append(message)

    def abort_now(self) -> NoReturn:
        self.aborted = True
        pytest.fail(self._summary(), pytrace=False)

    def _summary(self) -> str:
        return "\n".join(m.replace("\r", "").strip("\n") for m in self.messages)

    def verify(self) -> None:
        """Fail the current test if any failure was recorded."""
        if self.messages and not self.aborted:
            pytest.fail(self._summary(), pytrace=False)


@pytest.fixture
def affirm_reporter() -> Iterator[PytestReporter]:
    reporter = PytestReporter()
    yield reporter
    reporter.verify()


@pytest.fixture
def affirm(affirm_reporter: PytestReporter) -> Callable[[Any], Wrapped]:
    return wrap(affirm_reporter)
