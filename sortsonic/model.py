"""
Array model, step events and run state.

The array is written by the run thread only; the renderer reads it through
snapshot(), which takes the same lock as swap()/set() so it never observes
half of a swap.
"""
import enum
import threading
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from . import settings


class StepKind(enum.Enum):
    COMPARE  = "compare"
    SWAP     = "swap"
    PLACE    = "place"
    FINALIZE = "finalize"


@dataclass(frozen=True)
class StepEvent:
    """
    One observable action of a sort.

    Attributes
    ----------
    kind : StepKind
    primary : int
        index drawn in the active colour
    secondary : int | None
        index drawn in the second accent colour
    value : int
        magnitude at `primary` after the action
    """
    kind: StepKind
    primary: int
    secondary: Optional[int]
    value: int


class ArrayModel:
    """Mutable array of bar heights; height doubles as the sort key."""

    def __init__(self, max_height: int = settings.SURFACE_HEIGHT, rng=None):
        if max_height < settings.MIN_MAGNITUDE:
            raise ValueError(f"max_height must be >= {settings.MIN_MAGNITUDE}")
        self.max_height = max_height
        self.rng = rng if rng is not None else np.random.default_rng()
        self._values: list = []
        self._lock = threading.Lock()

    @classmethod
    def from_values(cls, values: Iterable[int], max_height: Optional[int] = None, rng=None):
        values = [int(v) for v in values]
        if any(v < 0 for v in values):
            raise ValueError("magnitudes must be non-negative")
        if max_height is None:
            max_height = max(values + [settings.SURFACE_HEIGHT])
        model = cls(max_height, rng)
        model._values = values
        return model

    def __len__(self):
        return len(self._values)

    def reset(self, size: int) -> None:
        """Refill with `size` uniform random magnitudes in [MIN_MAGNITUDE, max_height]."""
        fresh = self.rng.integers(settings.MIN_MAGNITUDE, self.max_height,
                                  size=size, endpoint=True).tolist()
        with self._lock:
            self._values = fresh

    def _check(self, i: int) -> None:
        # Negative indexes would silently wrap on a list
        if not 0 <= i < len(self._values):
            raise IndexError(f"index {i} out of range for array of length {len(self._values)}")

    def get(self, i: int) -> int:
        self._check(i)
        return self._values[i]

    def set(self, i: int, value: int) -> None:
        self._check(i)
        if value < 0:
            raise ValueError(f"magnitude must be non-negative, got {value}")
        with self._lock:
            self._values[i] = value

    def swap(self, i: int, j: int) -> None:
        self._check(i)
        self._check(j)
        with self._lock:
            self._values[i], self._values[j] = self._values[j], self._values[i]

    def snapshot(self) -> tuple:
        with self._lock:
            return tuple(self._values)


class Highlights:
    """Primary/secondary markers of the latest event, cleared when read."""

    def __init__(self):
        self._lock = threading.Lock()
        self._primary: Optional[int] = None
        self._secondary: Optional[int] = None

    def mark(self, primary: Optional[int], secondary: Optional[int] = None) -> None:
        with self._lock:
            self._primary, self._secondary = primary, secondary

    def consume(self) -> tuple:
        with self._lock:
            marks = (self._primary, self._secondary)
            self._primary = self._secondary = None
        return marks


class RunState(enum.Enum):
    IDLE           = "idle"
    RUNNING        = "running"
    STOP_REQUESTED = "stop_requested"


class RunStateHandle:
    """Lock-guarded Run State shared by the main thread and the run thread."""

    def __init__(self):
        self._lock = threading.Lock()
        self._state = RunState.IDLE

    @property
    def state(self) -> RunState:
        with self._lock:
            return self._state

    @property
    def stop_requested(self) -> bool:
        return self.state is RunState.STOP_REQUESTED

    @property
    def is_active(self) -> bool:
        return self.state is not RunState.IDLE

    def try_start(self) -> bool:
        """IDLE -> RUNNING. Returns False (and changes nothing) otherwise."""
        with self._lock:
            if self._state is not RunState.IDLE:
                return False
            self._state = RunState.RUNNING
            return True

    def request_stop(self) -> None:
        """RUNNING -> STOP_REQUESTED; a no-op in any other state."""
        with self._lock:
            if self._state is RunState.RUNNING:
                self._state = RunState.STOP_REQUESTED

    def finish(self) -> None:
        with self._lock:
            self._state = RunState.IDLE
