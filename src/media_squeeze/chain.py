"""Immutable operation chain shared by the audio and text chains.

A chain holds its source payload, an ordered tuple of operations and the
``Config`` it was created with. Builder methods on subclasses validate their
parameters (by constructing the operation) and return a new chain; nothing is
executed until ``run()``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from .config import Config
from .exceptions import MediaSqueezeError, UnknownOperationError
from .operations import OperationKind

logger = logging.getLogger(__name__)

TData = TypeVar("TData")
TOp = TypeVar("TOp")
TResult = TypeVar("TResult")
ChainT = TypeVar("ChainT", bound="Chain")

Handler = Callable[[TData, TOp], TData]


@dataclass(frozen=True)
class StepRecord:
    """Size of the payload around one executed operation."""

    kind: OperationKind
    size_before: int
    size_after: int


class Chain(Generic[TData, TOp, TResult]):
    """Base class for immutable operation chains.

    Subclasses provide:
        ``_successor``: build the next chain of the same concrete type
        ``_handlers``: dispatch table from ``OperationKind`` to a callable
        ``_size``: payload size used for step records and metrics
        ``_build_result``: turn the final payload into a result object
    """

    content_type = "chain"

    def __init__(
        self,
        data: TData,
        operations: Iterable[TOp] = (),
        config: Optional[Config] = None,
    ) -> None:
        self._data = data
        self._operations: Tuple[TOp, ...] = tuple(operations)
        self._config = config if config is not None else Config()

    @property
    def data(self) -> TData:
        """Source payload the chain was created from."""
        return self._data

    @property
    def operations(self) -> Tuple[TOp, ...]:
        """Queued operations in append order."""
        return self._operations

    @property
    def config(self) -> Config:
        return self._config

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        names = ", ".join(op.kind.value for op in self._operations)  # type: ignore[attr-defined]
        return f"{type(self).__name__}([{names}])"

    def _with_operation(self: ChainT, operation: TOp) -> ChainT:
        return self._successor(self._operations + (operation,))

    def _successor(self: ChainT, operations: Tuple[TOp, ...]) -> ChainT:
        raise NotImplementedError

    def _handlers(self) -> Dict[OperationKind, Handler]:
        raise NotImplementedError

    def _size(self, data: TData) -> int:
        raise NotImplementedError

    def _build_result(
        self, final: TData, steps: List[StepRecord], elapsed: float
    ) -> TResult:
        raise NotImplementedError

    def run(self) -> TResult:
        """Execute all queued operations in order and return the result.

        Each operation consumes the previous operation's output. The first
        failure aborts the run; no partial result is returned and nothing is
        retried.

        Raises:
            UnknownOperationError: If an operation has no handler
            MediaSqueezeError: Whatever the failing operation raised
        """
        handlers = self._handlers()
        current = self._data
        steps: List[StepRecord] = []
        start_time = time.time()

        for index, operation in enumerate(self._operations):
            kind = operation.kind  # type: ignore[attr-defined]
            handler = handlers.get(kind)
            if handler is None:
                raise UnknownOperationError(kind, chain=self.content_type)

            size_before = self._size(current)
            try:
                current = handler(current, operation)
            except MediaSqueezeError as exc:
                logger.error(
                    "%s chain aborted at operation %d (%s): %s",
                    self.content_type,
                    index,
                    kind.value,
                    exc.message,
                )
                raise
            size_after = self._size(current)
            steps.append(StepRecord(kind=kind, size_before=size_before, size_after=size_after))
            logger.debug(
                "%s %s: %d -> %d", self.content_type, kind.value, size_before, size_after
            )

        elapsed = time.time() - start_time
        return self._build_result(current, steps, elapsed)
