"""Exception detection for callables under test."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Signal:
    """What happened when a callable was invoked.

    Attributes
    ----------
    raised
        Whether the call ended with an exception.
    value
        The exception, when one was raised.
    """

    raised: bool
    value: BaseException | None = None


def did_raise(fn: Callable[[], Any]) -> Signal:
    """Call ``fn`` and report whether it raised, without letting the exception escape.

    Only :class:`Exception` subclasses are absorbed. ``KeyboardInterrupt``,
    ``SystemExit`` and :class:`~affirm.outcomes.AbortTest` propagate.
    """
    try:
        fn()
    except Exception as exc:
        logger.debug("Callable %r raised %r", fn, exc)
        return Signal(raised=True, value=exc)
    return Signal(raised=False)
