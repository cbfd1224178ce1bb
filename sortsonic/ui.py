"""Control panel widgets drawn with pygame."""
import math

import pygame

from . import settings
from .algorithms import Algorithm

PAD     = 16
BTN_H   = 28
BTN_GAP = 4
_Y_ALGO = 8
_Y_CTRL = 44
_Y_MSG  = 80


class Slider:
    """Single-knob integer slider."""
    KNOB_RADIUS = 6

    def __init__(self, x, y, w, lo, hi, val, label):
        self.x, self.y, self.w = x, y, w
        self.lo, self.hi = lo, hi
        self.value = val
        self.label = label
        self.drag = False
        self.track = pygame.Rect(x, y+20, w, 4)
        self.hit = pygame.Rect(x-5, y, w+10, 32)

    def _r(self):
        return (self.value - self.lo) / (self.hi - self.lo)

    def _kx(self):
        return int(self.x + self._r() * self.w)

    def handle(self, ev):
        """Returns True if the value changed."""
        before = self.value
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if math.hypot(ev.pos[0]-self._kx(), ev.pos[1]-self.track.centery) < 14 \
               or self.hit.collidepoint(ev.pos):
                self.drag = True; self._set(ev.pos[0])
        elif ev.type == pygame.MOUSEBUTTONUP:
            self.drag = False
        elif ev.type == pygame.MOUSEMOTION and self.drag:
            self._set(ev.pos[0])
        return self.value != before

    def _set(self, mx):
        r = max(0.0, min(1.0, (mx - self.x) / self.w))
        self.value = int(round(self.lo + r * (self.hi - self.lo)))

    def draw(self, s, fonts):
        s.blit(fonts['small'].render(f"{self.label}:  {self.value}", True, settings.UI_SUBTEXT),
               (self.x, self.y))
        pygame.draw.rect(s, settings.UI_BORDER, self.track, border_radius=2)
        fw = int(self._r() * self.w)
        if fw > 0:
            pygame.draw.rect(s, settings.UI_ACCENT, (self.x, self.track.y, fw, 4), border_radius=2)
        kx, ky = self._kx(), self.track.centery
        pygame.draw.circle(s, settings.UI_PANEL2, (kx, ky), self.KNOB_RADIUS)
        pygame.draw.circle(s, settings.UI_ACCENT, (kx, ky), self.KNOB_RADIUS, 2)


class TextField:
    """One-line text input. Contents are validated by whoever reads `text`."""
    MAX_LEN = 6

    def __init__(self, x, y, w, h, text, label):
        self.rect = pygame.Rect(x, y, w, h)
        self.text = text
        self.label = label
        self.focused = False

    def handle(self, ev):
        """Returns "submit" when Enter is pressed while focused."""
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            self.focused = self.rect.collidepoint(ev.pos)
        elif ev.type == pygame.KEYDOWN and self.focused:
            if ev.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                return "submit"
            if ev.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
            elif ev.unicode and ev.unicode.isprintable() and len(self.text) < self.MAX_LEN:
                self.text += ev.unicode
        return None

    def draw(self, s, fonts):
        s.blit(fonts['small'].render(self.label, True, settings.UI_SUBTEXT),
               (self.rect.x - 36, self.rect.y + 7))
        pygame.draw.rect(s, settings.UI_PANEL2, self.rect, border_radius=4)
        br = settings.UI_ACCENT if self.focused else settings.UI_BORDER
        pygame.draw.rect(s, br, self.rect, 1, border_radius=4)
        s.blit(fonts['mono'].render(self.text, True, settings.UI_TEXT),
               (self.rect.x + 6, self.rect.y + 6))


class Button:
    def __init__(self, x, y, w, h, label):
        self.rect = pygame.Rect(x, y, w, h)
        self.label = label
        self.enabled = True

    def hit(self, ev):
        return (self.enabled and ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1
                and self.rect.collidepoint(ev.pos))

    def draw(self, s, fonts, active=False, hover=False):
        if not self.enabled: bg, fc = settings.UI_PANEL2, settings.UI_DISABLED
        elif active:         bg, fc = settings.UI_ACCENT, (0, 0, 0)
        elif hover:          bg, fc = settings.UI_HOVER, settings.UI_TEXT
        else:                bg, fc = settings.UI_PANEL2, settings.UI_TEXT
        pygame.draw.rect(s, bg, self.rect, border_radius=5)
        pygame.draw.rect(s, settings.UI_BORDER, self.rect, 1, border_radius=5)
        t = fonts['small'].render(self.label, True, fc)
        s.blit(t, t.get_rect(center=self.rect.center))


class ControlPanel:
    """
    Algorithm picker, size field, speed slider, Start/Stop and sound toggle.

    handle() returns "start", "stop", "speed" or None.
    """

    def __init__(self, width, fonts, default_size, default_speed, sound_on=True,
                 height=settings.PANEL_HEIGHT):
        self.width = width
        self.height = height
        self.fonts = fonts
        self.sound_on = sound_on
        self.msg = ""
        self.msg_ok = True

        algos = list(Algorithm)
        bw = (width - 2*PAD - (len(algos)-1)*BTN_GAP) // len(algos)
        self.algo_btns = [(Button(PAD + i*(bw+BTN_GAP), _Y_ALGO, bw, BTN_H, a.display_name), a)
                          for i, a in enumerate(algos)]
        self.algorithm = algos[0]

        self.size_field = TextField(PAD + 36, _Y_CTRL, 64, BTN_H, str(default_size), "Size")
        self.speed = Slider(PAD + 130, _Y_CTRL - 4, 240, settings.SPEED_MIN, settings.SPEED_MAX,
                            default_speed, "Speed")
        bx = PAD + 400
        self.start_btn = Button(bx,       _Y_CTRL, 90, BTN_H, "Start Sorting")
        self.stop_btn  = Button(bx + 100, _Y_CTRL, 90, BTN_H, "Stop Sorting")
        self.sound_btn = Button(bx + 200, _Y_CTRL, width - bx - 200 - PAD, BTN_H, "")
        self.set_running(False)

    @property
    def size_text(self) -> str:
        return self.size_field.text

    def set_running(self, running: bool) -> None:
        self.start_btn.enabled = not running
        self.stop_btn.enabled = running

    def notify(self, msg, ok=True):
        self.msg, self.msg_ok = msg, ok

    def handle(self, ev):
        if self.size_field.handle(ev) == "submit" and self.start_btn.enabled:
            return "start"
        if self.speed.handle(ev):
            return "speed"
        for btn, algo in self.algo_btns:
            if btn.hit(ev):
                self.algorithm = algo
        if self.sound_btn.hit(ev):
            self.sound_on = not self.sound_on
        if self.start_btn.hit(ev):
            return "start"
        if self.stop_btn.hit(ev):
            return "stop"
        return None

    def draw(self, s):
        mp = pygame.mouse.get_pos()
        s.fill(settings.UI_BG, (0, 0, self.width, self.height))
        for btn, algo in self.algo_btns:
            btn.draw(s, self.fonts, algo is self.algorithm, btn.rect.collidepoint(mp))
        self.size_field.draw(s, self.fonts)
        self.speed.draw(s, self.fonts)
        for btn in (self.start_btn, self.stop_btn):
            btn.draw(s, self.fonts, False, btn.rect.collidepoint(mp))
        self.sound_btn.label = "Sound: ON" if self.sound_on else "Sound: OFF"
        self.sound_btn.draw(s, self.fonts, self.sound_on, self.sound_btn.rect.collidepoint(mp))
        if self.msg:
            col = settings.UI_GREEN if self.msg_ok else settings.UI_ERROR
            s.blit(self.fonts['small'].render(self.msg, True, col), (PAD, _Y_MSG))


def build_fonts():
    def tf(names, sz):
        for n in names:
            try: return pygame.font.SysFont(n, sz)
            except (OSError, pygame.error): pass
        return pygame.font.SysFont(None, sz)
    mono = ["Consolas", "Courier New", "Lucida Console"]
    sans = ["Segoe UI", "Tahoma", "Arial"]
    return dict(mono=tf(mono, 14), small=tf(sans, 12))
