"""
Timer Service

One-shot delayed callbacks keyed by name. Scheduling again under the same key,
or cancelling it, bumps a generation counter so any callback still waiting from
an earlier schedule finds itself stale and does nothing.
"""

import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional


def _spawn_thread(target: Callable, *args) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


class TimerRegistry:
    """
    Generation-counted one-shot timers.

    Args:
        spawn: Starts ``target(*args)`` in the background. The server passes
            ``socketio.start_background_task``; defaults to a daemon thread.
        sleep: Blocking sleep used inside the spawned task. The server passes
            ``socketio.sleep``; defaults to ``time.sleep``.
    """

    def __init__(self,
                 spawn: Optional[Callable[..., Any]] = None,
                 sleep: Optional[Callable[[float], Any]] = None):
        self._spawn = spawn or _spawn_thread
        self._sleep = sleep or time.sleep
        self._generations: Dict[Hashable, int] = {}
        self._lock = threading.Lock()

    def bind(self, spawn: Callable[..., Any], sleep: Callable[[float], Any]) -> None:
        """Switch to another task runner, e.g. the one the SocketIO server provides."""
        self._spawn = spawn
        self._sleep = sleep

    def _next_generation(self, key: Hashable) -> int:
        with self._lock:
            generation = self._generations.get(key, 0) + 1
            self._generations[key] = generation
            return generation

    def is_current(self, key: Hashable, generation: int) -> bool:
        with self._lock:
            return self._generations.get(key) == generation

    def cancel(self, key: Hashable) -> None:
        """Invalidate whatever is pending under ``key``."""
        self._next_generation(key)

    def schedule(self, key: Hashable, delay: float, callback: Callable[[], Any]) -> int:
        """
        Run ``callback`` once after ``delay`` seconds.

        Returns:
            int: The generation assigned to this schedule
        """
        generation = self._next_generation(key)
        self._spawn(self._run_once, key, generation, delay, callback)
        return generation

    def schedule_sequence(self,
                          key: Hashable,
                          count: int,
                          interval: float,
                          callback: Callable[[int], Any],
                          on_complete: Optional[Callable[[], Any]] = None) -> int:
        """
        Call ``callback(i)`` for i in 0..count-1, ``interval`` seconds apart.

        The first step runs immediately. The sequence stops as soon as its
        generation is superseded; ``on_complete`` only runs if every step did.
        """
        generation = self._next_generation(key)
        self._spawn(self._run_sequence, key, generation, count, interval, callback, on_complete)
        return generation

    def _run_once(self, key, generation, delay, callback):
        if delay > 0:
            self._sleep(delay)
        if self.is_current(key, generation):
            callback()

    def _run_sequence(self, key, generation, count, interval, callback, on_complete):
        for index in range(count):
            if index and interval > 0:
                self._sleep(interval)
            if not self.is_current(key, generation):
                return
            callback(index)

        if on_complete is not None and self.is_current(key, generation):
            on_complete()
