import logging
import threading

import numpy as np
import pytest

from sortsonic.engine import Pacer
from sortsonic.model import ArrayModel, RunStateHandle


class RecordingSink:
    """Keeps every (event, snapshot) pair; can request a stop after N events."""

    def __init__(self, state=None, stop_after=None):
        self.state = state
        self.stop_after = stop_after
        self.steps = []

    @property
    def events(self):
        return [e for e, _ in self.steps]

    def on_step(self, event, snapshot):
        self.steps.append((event, snapshot))
        if self.stop_after is not None and len(self.steps) >= self.stop_after:
            self.state.request_stop()


class GateSink(RecordingSink):
    """Blocks the run thread inside the first on_step until released."""

    def __init__(self):
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def on_step(self, event, snapshot):
        super().on_step(event, snapshot)
        self.entered.set()
        self.release.wait(5)


@pytest.fixture
def pacer():
    return Pacer(sleep=lambda s: None)


@pytest.fixture
def running_state():
    state = RunStateHandle()
    state.try_start()
    return state


@pytest.fixture
def make_model():
    def _make(values, seed=0):
        return ArrayModel.from_values(values, rng=np.random.default_rng(seed))
    return _make


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("sortsonic")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
