"""
Application shell: pygame window and main loop, plus a headless runner.

The main thread owns pygame. Sorts run on the controller's thread and talk to
the window only through the renderer's highlight markers and the array
snapshot.
"""
import logging
import threading

import numpy as np
import pygame

from . import settings
from .algorithms import Algorithm
from .controller import RunController
from .engine import Pacer
from .errors import ValidationError
from .model import ArrayModel
from .render import BarRenderer
from .sinks import FanOutSink, LoggingSink, SoundSink
from .sound import SilentNotePlayer, open_note_player
from .ui import ControlPanel, build_fonts

logger = logging.getLogger(__name__)


class App:
    def __init__(self, config):
        win, srt, snd = config["window"], config["sort"], config["sound"]
        self.width, self.height = win["width"], win["height"]
        self.panel_height = win["panel_height"]
        self.fps = win["fps"]
        self.bars_rect = pygame.Rect(0, self.panel_height, self.width, self.height - self.panel_height)

        pygame.display.init(); pygame.font.init()
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption("Sorting Algorithm Visualizer")

        self.model = ArrayModel(max_height=self.bars_rect.height - settings.MIN_MAGNITUDE,
                                rng=np.random.default_rng(srt["seed"]))
        self.pacer = Pacer(srt["default_speed"])
        self.renderer = BarRenderer()
        if snd["enabled"]:
            self.player = open_note_player(lambda: self.pacer.delay,
                                           surface_height=self.bars_rect.height,
                                           base_pitch=snd["base_pitch"],
                                           pitch_range=snd["pitch_range"])
        else:
            self.player = SilentNotePlayer()
        self.sound = SoundSink(self.player, snd["enabled"])

        self._finished = threading.Event()
        self.controller = RunController(self.model, FanOutSink(self.renderer, self.sound),
                                        self.pacer, on_finished=self._finished.set)
        self.panel = ControlPanel(self.width, build_fonts(), srt["default_size"],
                                  srt["default_speed"], sound_on=snd["enabled"],
                                  height=self.panel_height)
        self.model.reset(srt["default_size"])

    def _start(self):
        try:
            started = self.controller.start_run(self.panel.algorithm, self.panel.size_text)
        except ValidationError as e:
            self.panel.notify(str(e), ok=False)
            return
        if started:
            self.panel.set_running(True)
            self.panel.notify(f"Running {self.panel.algorithm.display_name}...")

    def _on_finished(self):
        self._finished.clear()
        self.panel.set_running(False)
        if self.controller.last_result:
            self.panel.notify("Sorted.")
        else:
            self.panel.notify("Stopped.", ok=False)

    def run(self):
        clock = pygame.time.Clock()
        try:
            while True:
                clock.tick(self.fps)
                for ev in pygame.event.get():
                    if ev.type == pygame.QUIT:
                        return
                    action = self.panel.handle(ev)
                    if action == "start":  self._start()
                    elif action == "stop": self.controller.request_stop()
                    elif action == "speed": self.pacer.speed = self.panel.speed.value
                self.sound.enabled = self.panel.sound_on
                if self._finished.is_set():
                    self._on_finished()

                self.panel.draw(self.screen)
                self.renderer.paint(self.screen, self.model.snapshot(), self.bars_rect)
                pygame.display.flip()
        finally:
            self.close()

    def close(self):
        self.controller.request_stop()
        self.controller.join(timeout=2.0)
        self.player.close()
        pygame.quit()


def run_headless(algorithm, size, speed=settings.SPEED_MAX, seed=None) -> tuple:
    """Sort one random array without a window or sound; returns the final array."""
    algorithm = Algorithm.lookup(algorithm)
    model = ArrayModel(rng=np.random.default_rng(seed))
    sink = LoggingSink()
    controller = RunController(model, sink, Pacer(speed))
    controller.start_run(algorithm, size)
    try:
        while not controller.join(timeout=0.5):
            pass
    except KeyboardInterrupt:
        controller.request_stop()
        controller.join()
    result = model.snapshot()
    logger.info("%s: %d events (%s), %s",
                algorithm.display_name, sink.total,
                ", ".join(f"{k.value}={n}" for k, n in sink.counts.items()),
                "sorted" if controller.last_result else "stopped")
    return result
