# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Tracking for recursively spawned tasks.

A task may submit further tasks while it runs. The coordinator keeps a
pending count guarded by a condition variable; join() returns once every
task, including those submitted transitively, has finished.

A task must submit its children before it returns. The count is
incremented at submit time and decremented only after the task body
finishes, so it cannot reach zero while a descendant is outstanding.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TaskCoordinator:
    """
    Fan-out/join over a thread pool.

    Args:
        workers: Pool size. None uses the executor default, 0 runs tasks
            inline on the submitting thread.

    Usage::

        with TaskCoordinator() as tasks:
            tasks.submit(fn, arg)
            tasks.join()
    """

    def __init__(self, workers: Optional[int] = None) -> None:
        if workers is not None and workers < 0:
            raise ValueError(f"Workers must be >= 0, got {workers}")

        self._cond = threading.Condition()
        self._pending = 0
        self._submitted = 0
        self._errors: list[BaseException] = []
        self._executor: Optional[ThreadPoolExecutor] = None
        if workers != 0:
            self._executor = ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="quadpress"
            )

    @property
    def pending(self) -> int:
        """Tasks submitted but not yet finished."""
        with self._cond:
            return self._pending

    @property
    def submitted(self) -> int:
        """Tasks submitted over the coordinator's lifetime."""
        with self._cond:
            return self._submitted

    @property
    def is_inline(self) -> bool:
        return self._executor is None

    def submit(self, fn: Callable[..., None], *args) -> None:
        """Schedule fn(*args). Safe to call from inside a running task."""
        with self._cond:
            self._pending += 1
            self._submitted += 1

        if self._executor is None:
            self._run(fn, args)
        else:
            self._executor.submit(self._run, fn, args)

    def join(self) -> None:
        """
        Block until no task is pending.

        Raises:
            The first exception raised by any task. Later tasks still run
            to completion before it is re-raised.
        """
        with self._cond:
            while self._pending > 0:
                self._cond.wait()
            errors = list(self._errors)
            self._errors.clear()

        if errors:
            if len(errors) > 1:
                logger.debug("%d tasks failed, re-raising the first", len(errors))
            raise errors[0]

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> TaskCoordinator:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _run(self, fn: Callable[..., None], args: tuple) -> None:
        try:
            fn(*args)
        except Exception as e:
            with self._cond:
                self._errors.append(e)
        finally:
            with self._cond:
                self._pending -= 1
                if self._pending == 0:
                    self._cond.notify_all()
