# termination.py

import threading
import time


class TerminationCondition:
    """
    Predicate polled by the planner once per iteration. The planner stops
    as soon as it returns True.
    """

    def __init__(self, fn):
        self._fn = fn

    def __call__(self):
        return bool(self._fn())

    def __or__(self, other):
        return any_of(self, other)


def timed(seconds):
    """True once ``seconds`` of wall-clock time have passed since creation."""
    deadline = time.perf_counter() + seconds
    return TerminationCondition(lambda: time.perf_counter() >= deadline)


def iterations(n):
    """False for the first ``n`` polls, True afterwards."""
    calls = [0]

    def poll():
        calls[0] += 1
        return calls[0] > n

    return TerminationCondition(poll)


def cancelled(event=None):
    """True once ``event`` is set. The event is exposed as ``.event``."""
    event = event if event is not None else threading.Event()
    condition = TerminationCondition(event.is_set)
    condition.event = event
    return condition


def any_of(*conditions):
    return TerminationCondition(lambda: any(c() for c in conditions))


def as_condition(ptc):
    """Accept a condition, a plain callable, or a time budget in seconds."""
    if isinstance(ptc, TerminationCondition):
        return ptc
    if callable(ptc):
        return TerminationCondition(ptc)
    return timed(float(ptc))
