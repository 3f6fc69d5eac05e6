"""Text operation chain.

Text operations shrink prompts and documents before they are forwarded; all of
them keep the output human readable.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from . import config_constants
from .chain import Chain, Handler, StepRecord
from .config import Config
from .exceptions import FormatError
from .metrics import calculate_metrics, ChainResult, TextDetails
from .operations import Compress, Minify, OperationKind, TextOperation, Trim

logger = logging.getLogger(__name__)

TextResult = ChainResult[str, TextDetails]

_WHITESPACE_RE = re.compile(r"\s+")
_PUNCTUATION_RE = re.compile(r"\s*([,.:;!?])\s*")


def trim(text: str) -> str:
    """Collapse whitespace runs to one space and strip both ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def minify(text: str) -> str:
    """Strip every line and drop blank lines."""
    lines = (line.strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def compress(text: str, algo: str) -> str:
    """Text-level compression for LLM context.

    Binary gzip/brotli output is not useful for a model, so both algorithm
    names apply the same aggressive whitespace and punctuation tightening.
    """
    collapsed = _WHITESPACE_RE.sub(" ", text)
    return _PUNCTUATION_RE.sub(r"\1 ", collapsed).strip()


class TextChain(Chain[str, TextOperation, TextResult]):
    """Immutable chain of text operations."""

    content_type = "text"

    def __init__(
        self,
        data: str,
        operations: Iterable[TextOperation] = (),
        config: Optional[Config] = None,
    ) -> None:
        if not isinstance(data, str):
            raise FormatError(f"Text chains expect str, got {type(data).__name__}")
        super().__init__(data, operations, config)

    def _successor(self, operations: Tuple[TextOperation, ...]) -> "TextChain":
        return TextChain(self._data, operations, self._config)

    def trim(self) -> "TextChain":
        return self._with_operation(Trim())

    def minify(self) -> "TextChain":
        return self._with_operation(Minify())

    def compress(self, algo: str = config_constants.DEFAULT_COMPRESS_ALGORITHM) -> "TextChain":
        return self._with_operation(Compress(algo))

    def _handlers(self) -> Dict[OperationKind, Handler]:
        return {
            OperationKind.TRIM: lambda data, op: trim(data),
            OperationKind.MINIFY: lambda data, op: minify(data),
            OperationKind.COMPRESS: lambda data, op: compress(data, op.algo),
        }

    def _size(self, data: str) -> int:
        return len(data)

    def _build_result(self, final: str, steps: List[StepRecord], elapsed: float) -> TextResult:
        metrics = calculate_metrics(len(self._data), len(final))
        operations = [step.kind.value for step in steps]
        logger.debug(
            "Text chain %s finished in %.3fs: %d -> %d chars",
            operations,
            elapsed,
            metrics.original_size,
            metrics.final_size,
        )
        return ChainResult(
            data=final,
            metrics=metrics,
            details=TextDetails(char_count=len(final), original_char_count=len(self._data)),
            operations=operations,
        )


def text_chain(data: str, config: Optional[Config] = None) -> TextChain:
    """Create an empty text chain."""
    return TextChain(data, config=config)
