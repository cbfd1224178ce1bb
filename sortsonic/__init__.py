"""SortSonic - animated, sonified sorting algorithms."""
from .algorithms import Algorithm
from .controller import RunController
from .engine import Pacer, run_sort
from .errors import ConfigError, DeviceUnavailable, SortSonicError, ValidationError
from .model import ArrayModel, RunState, RunStateHandle, StepEvent, StepKind

__version__ = "1.0.0"

__all__ = [
    "Algorithm", "ArrayModel", "ConfigError", "DeviceUnavailable", "Pacer",
    "RunController", "RunState", "RunStateHandle", "SortSonicError",
    "StepEvent", "StepKind", "ValidationError", "run_sort",
]
