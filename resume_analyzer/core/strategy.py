"""
Ordered fallback chains for field extraction.

A field with several ways of being found (name, phone, years of experience)
declares its strategies as a tuple of Strategy entries, highest priority first.
run_chain() walks the tuple and stops at the first entry that yields an
acceptable value, so each entry can be tested on its own and the priority
order is visible in one place.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, Tuple, TypeVar

from resume_analyzer.core.text_normalization import AnalysisContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _always(ctx: AnalysisContext) -> bool:
    return True


@dataclass(frozen=True)
class Strategy(Generic[T]):
    name: str
    extract: Callable[[AnalysisContext], Optional[T]]
    applies: Callable[[AnalysisContext], bool] = _always


def run_chain(
    strategies: Iterable[Strategy[T]],
    ctx: AnalysisContext,
    accept: Optional[Callable[[T], bool]] = None,
    field_name: str = "field",
) -> Optional[Tuple[str, T]]:
    """
    Evaluate strategies in order and return (strategy_name, value) for the
    first value that is not None and passes `accept`. None if nothing does.
    """
    for strategy in strategies:
        if not strategy.applies(ctx):
            continue
        value = strategy.extract(ctx)
        if value is None:
            continue
        if accept is not None and not accept(value):
            logger.debug(f"{field_name}: strategy '{strategy.name}' produced rejected value {value!r}")
            continue
        logger.debug(f"{field_name}: strategy '{strategy.name}' -> {value!r}")
        return strategy.name, value
    return None
