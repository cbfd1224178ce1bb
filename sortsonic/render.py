import pygame

from . import settings
from .model import Highlights


class BarRenderer:
    """
    Draws the array as bars along the bottom of a rect.

    on_step() runs on the sort thread and only records the highlight markers;
    paint() runs on the main thread and consumes them, so each highlight is
    shown for exactly one frame.
    """

    def __init__(self):
        self.highlights = Highlights()
        self.frames = 0

    def on_step(self, event, snapshot) -> None:
        self.highlights.mark(event.primary, event.secondary)
        self.frames += 1

    def paint(self, surface, values, rect=None) -> None:
        rect = pygame.Rect(rect) if rect is not None else surface.get_rect()
        surface.fill(settings.BACKGROUND_COLOR, rect)
        primary, secondary = self.highlights.consume()
        n = len(values)
        if n == 0:
            return
        bw = max(1, rect.width // n - settings.BAR_SPACING)
        for i, v in enumerate(values):
            if i == primary:     c = settings.ACTIVE_COLOR
            elif i == secondary: c = settings.SECONDARY_COLOR
            else:                c = settings.BASE_COLOR
            h = min(v, rect.height)
            pygame.draw.rect(surface, c, (rect.x + i * (bw + settings.BAR_SPACING),
                                          rect.bottom - h, bw, h))
