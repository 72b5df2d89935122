"""Test abort control flow."""

from typing import NoReturn


class AbortTest(BaseException):
    """Stop the current test after a failed must-assertion."""

    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        super().__init__(reason)


def abort(reason: str = "") -> NoReturn:
    """Stop the current test immediately."""
    raise AbortTest(reason)
