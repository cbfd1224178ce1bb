"""
Run controller: validates input, owns the Run State and the run thread.

At most one run thread exists at a time. start_run() while a run is active is
ignored; request_stop() only sets the flag the engine checks between steps.
"""
import logging
import threading

from .algorithms import Algorithm
from .engine import Pacer, run_sort
from .errors import ValidationError
from .model import RunStateHandle

logger = logging.getLogger(__name__)


def parse_size(raw) -> int:
    """Parse an array size typed by the user; must be a positive integer."""
    if isinstance(raw, bool):
        raise ValidationError("Array size must be a number")
    if isinstance(raw, int):
        size = raw
    else:
        text = str(raw).strip()
        try:
            size = int(text)
        except ValueError:
            raise ValidationError(f"Array size must be a number, got {text!r}") from None
    if size <= 0:
        raise ValidationError(f"Array size must be positive, got {size}")
    return size


class RunController:
    def __init__(self, model, sink, pacer=None, on_finished=None):
        self.model = model
        self.sink = sink
        self.pacer = pacer if pacer is not None else Pacer()
        self.on_finished = on_finished
        self.state = RunStateHandle()
        self.last_result = None
        self._thread = None

    @property
    def is_running(self) -> bool:
        return self.state.is_active

    @property
    def speed(self) -> int:
        return self.pacer.speed

    @speed.setter
    def speed(self, value: int) -> None:
        self.pacer.speed = value

    def start_run(self, algorithm, size) -> bool:
        """
        Reset the array and sort it on a new thread.

        Raises ValidationError for a bad size (before anything is touched).
        Returns False, changing nothing, if a run is already in progress.
        """
        size = parse_size(size)
        algorithm = Algorithm.lookup(algorithm)
        if not self.state.try_start():
            logger.debug("Start ignored: a run is already in progress")
            return False

        self.model.reset(size)
        self.last_result = None
        self._thread = threading.Thread(
            target=self._run, args=(algorithm,),
            name=f"sortsonic-{algorithm.key}", daemon=True,
        )
        logger.info("Starting %s on %d bars at speed %d", algorithm.display_name, size, self.pacer.speed)
        self._thread.start()
        return True

    def request_stop(self) -> None:
        if self.state.is_active:
            logger.info("Stop requested")
        self.state.request_stop()

    def join(self, timeout=None) -> bool:
        """Wait for the current run thread; True if none is left running."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _run(self, algorithm):
        try:
            self.last_result = run_sort(algorithm, self.model, self.sink, self.state, self.pacer)
        except IndexError:
            logger.exception("%s accessed the array out of range", algorithm.display_name)
            raise
        finally:
            self.state.finish()
            if self.on_finished is not None:
                self.on_finished()
