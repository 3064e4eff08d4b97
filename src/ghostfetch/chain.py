"""First-match combinator used by the fallback chains."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

Strategy = Callable[[], Optional[T]]

logger = logging.getLogger(__name__)


def first_of(strategies: Iterable[Strategy[T]], default: T | None = None) -> T | None:
    """Return the first non-empty result of ``strategies``, else ``default``.

    Strategies run in order and each runs at most once. Empty strings, empty
    lists and ``None`` count as "no answer" and move on to the next source.
    """
    for strategy in strategies:
        result = strategy()
        if result:
            logger.debug("%s answered", getattr(strategy, "__name__", strategy))
            return result
    return default
