"""
Drives a sort generator: one step, one event, one pacing delay.

Run State is checked before the generator is resumed, so a stop observed
after step k leaves the array exactly as step k left it.
"""
import logging
import threading
import time

from . import settings
from .algorithms import Algorithm, get_generator
from .model import StepEvent, StepKind

logger = logging.getLogger(__name__)


class Pacer:
    """
    Sleeps (SPEED_MAX + 1 - speed) milliseconds between steps.

    The speed can be changed from the UI thread while a run is going; each
    delay reads the current value.
    """

    def __init__(self, speed: int = settings.DEFAULT_SPEED, sleep=time.sleep):
        self._lock = threading.Lock()
        self._speed = settings.DEFAULT_SPEED
        self.speed = speed
        self._sleep = sleep

    @property
    def speed(self) -> int:
        with self._lock:
            return self._speed

    @speed.setter
    def speed(self, value: int) -> None:
        value = max(settings.SPEED_MIN, min(settings.SPEED_MAX, int(value)))
        with self._lock:
            self._speed = value

    @property
    def delay(self) -> float:
        """Current pacing delay in seconds."""
        return (settings.SPEED_MAX + 1 - self.speed) / 1000.0

    def wait(self) -> None:
        self._sleep(self.delay)


def run_sort(algorithm, model, sink, state, pacer: Pacer) -> bool:
    """
    Run `algorithm` over `model` to completion or until a stop is requested.

    Every event goes to `sink.on_step(event, snapshot)` followed by one
    pacing delay. A finished sort is followed by the finalize sweep.
    Returns True if the sort (and sweep) ran to the end.
    """
    algorithm = Algorithm.lookup(algorithm)
    gen = get_generator(algorithm, model)
    steps = 0
    try:
        while True:
            if state.stop_requested:
                logger.info("%s stopped after %d steps", algorithm.display_name, steps)
                return False
            try:
                event = next(gen)
            except StopIteration:
                break
            steps += 1
            _emit(event, model, sink, pacer)
    finally:
        gen.close()

    logger.info("%s finished in %d steps", algorithm.display_name, steps)
    return _finalize(model, sink, state, pacer)


def _finalize(model, sink, state, pacer) -> bool:
    for i in range(len(model)):
        if state.stop_requested:
            logger.info("Finalize pass stopped at index %d", i)
            return False
        _emit(StepEvent(StepKind.FINALIZE, i, None, model.get(i)), model, sink, pacer)
    return True


def _emit(event, model, sink, pacer):
    logger.debug("%s %s %s -> %d", event.kind.value, event.primary, event.secondary, event.value)
    sink.on_step(event, model.snapshot())
    pacer.wait()
