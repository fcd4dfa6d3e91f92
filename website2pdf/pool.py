"""website2pdf.pool: bounded-concurrency processing of a list of items."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, List, Sequence, TypeVar

__all__ = ["PoolError", "PoolResult", "TaskPool"]

T = TypeVar("T")
R = TypeVar("R")


@dataclass(slots=True)
class PoolError(Generic[T]):
    """Failure of one item; siblings are not affected."""

    item: T
    index: int
    error: BaseException


@dataclass(slots=True)
class PoolResult(Generic[T, R]):
    """Results and errors, both in completion order."""

    results: List[R] = field(default_factory=list)
    errors: List[PoolError[T]] = field(default_factory=list)


class TaskPool:
    """Run an async callable over items with at most *concurrency* in flight.

    Example::

        result = await TaskPool(2).process(urls, convert)
        for err in result.errors:
            logger.warning("%s failed: %s", err.item, err.error)
    """

    def __init__(self, concurrency: int) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.concurrency = concurrency

    async def process(
        self,
        items: Sequence[T],
        func: Callable[[T, int], Awaitable[R]],
    ) -> PoolResult[T, R]:
        outcome: PoolResult[T, R] = PoolResult()
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _run(item: T, index: int) -> None:
            async with semaphore:
                try:
                    outcome.results.append(await func(item, index))
                except Exception as exc:
                    outcome.errors.append(PoolError(item, index, exc))

        await asyncio.gather(*(_run(item, i) for i, item in enumerate(items)))
        return outcome
