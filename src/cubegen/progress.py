"""Console progress line for long-running searches."""

import sys
import threading
import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TextIO, TypeVar

from cubegen.solver import EvaluationCounter

T = TypeVar("T")

_LINE_WIDTH = 50


@dataclass
class ExecutionResult(Generic[T]):
    """A task's return value and its wall-clock duration."""
    result: T
    elapsed_s: float


def track_progress(
    task: Callable[[], T],
    counter: EvaluationCounter,
    message: str = "Generating and evaluating structures:",
    interval_s: float = 0.25,
    stream: Optional[TextIO] = None,
) -> ExecutionResult[T]:
    """Run ``task`` while rewriting ``"<message> <count>"`` on one line.

    The status line is refreshed every ``interval_s`` seconds from a daemon
    thread polling ``counter`` and is cleared when the task returns or
    raises. Exceptions from ``task`` propagate.
    """
    if stream is None:
        stream = sys.stderr
    done = threading.Event()

    def _ticker() -> None:
        while True:
            stream.write(f"\r{message} {counter.value}")
            stream.flush()
            if done.wait(interval_s):
                return

    ticker = threading.Thread(target=_ticker, name="cubegen-progress", daemon=True)
    start = time.perf_counter()
    ticker.start()
    try:
        result = task()
    finally:
        done.set()
        ticker.join()
        stream.write("\r" + " " * _LINE_WIDTH + "\r")
        stream.flush()
    return ExecutionResult(result=result, elapsed_s=time.perf_counter() - start)
