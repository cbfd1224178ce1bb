"""
Consumers of the step-event stream.

A sink is anything with `on_step(event, snapshot)`. The engine calls it on the
run thread, once per event, in order.
"""
import logging

logger = logging.getLogger(__name__)


class EventSink:
    """
    Base class for step consumers.

    on_step(event, snapshot) receives each StepEvent together with the array
    as it stood right after that event. Calls arrive on the run thread, in
    event order, and block the sort until they return.
    """

    def on_step(self, event, snapshot) -> None:
        raise NotImplementedError


class FanOutSink(EventSink):
    """Forwards every event to each child sink in turn."""

    def __init__(self, *sinks):
        self.sinks = list(sinks)

    def on_step(self, event, snapshot) -> None:
        for sink in self.sinks:
            sink.on_step(event, snapshot)


class SoundSink(EventSink):
    """Plays the magnitude carried by each event on a note player."""

    def __init__(self, player, enabled: bool = True):
        self.player = player
        self.enabled = enabled

    def on_step(self, event, snapshot) -> None:
        if self.enabled:
            self.player.play(event.value)


class LoggingSink(EventSink):
    """Headless sink: counts events and logs them at DEBUG."""

    def __init__(self):
        self.counts = {}
        self.last_snapshot = ()

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def on_step(self, event, snapshot) -> None:
        self.counts[event.kind] = self.counts.get(event.kind, 0) + 1
        self.last_snapshot = snapshot
        logger.debug("step %d: %s", self.total, event)
