"""Order-preserving batch detection.

Batches are lazy: one result per input, in input order. With several
workers, inputs are scored chunk by chunk on a thread pool, and a
cancel event stops the iteration between items.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from itertools import islice
from typing import Callable, Iterable, Iterator

from core.constants import DEFAULT_BATCH_CHUNK_SIZE
from core.errors import LangRankConfigError
from core.types import DetectionResult

DetectFn = Callable[[str], DetectionResult]


def iter_detections(
    detect: DetectFn,
    texts: Iterable[str],
    max_workers: int | None = None,
    cancel_event: threading.Event | None = None,
    chunk_size: int = DEFAULT_BATCH_CHUNK_SIZE,
) -> Iterator[DetectionResult]:
    """Lazily detect every text, preserving input order.

    The parallel iterator owns a thread pool until it is exhausted. Callers
    that stop early should call ``close()`` on it (or set ``cancel_event``
    and drain it) to shut the pool down without waiting for garbage
    collection.

    Args:
        detect: Single-text detection function.
        texts: Input texts.
        max_workers: Thread count; None or 1 runs sequentially.
        cancel_event: Optional event that stops iteration when set.
        chunk_size: Inputs submitted to the pool at a time.

    Returns:
        Iterator yielding one result per input text.

    Raises:
        LangRankConfigError: If worker count or chunk size is not positive.
    """
    if max_workers is not None and max_workers < 1:
        raise LangRankConfigError(f"Invalid max_workers {max_workers}: expected at least 1.")
    if chunk_size < 1:
        raise LangRankConfigError(f"Invalid chunk_size {chunk_size}: expected at least 1.")
    if max_workers is None or max_workers == 1:
        return _iter_sequential(detect, texts, cancel_event)
    return _iter_parallel(detect, texts, max_workers, cancel_event, chunk_size)


def _iter_sequential(
    detect: DetectFn,
    texts: Iterable[str],
    cancel_event: threading.Event | None,
) -> Iterator[DetectionResult]:
    for text in texts:
        if _is_cancelled(cancel_event):
            return
        yield detect(text)


def _iter_parallel(
    detect: DetectFn,
    texts: Iterable[str],
    max_workers: int,
    cancel_event: threading.Event | None,
    chunk_size: int,
) -> Iterator[DetectionResult]:
    iterator = iter(texts)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        while True:
            chunk = list(islice(iterator, chunk_size))
            if not chunk or _is_cancelled(cancel_event):
                return
            for result in executor.map(detect, chunk):
                if _is_cancelled(cancel_event):
                    return
                yield result


def _is_cancelled(cancel_event: threading.Event | None) -> bool:
    return cancel_event is not None and cancel_event.is_set()
