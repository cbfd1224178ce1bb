"""
Note player: magnitude -> MIDI pitch -> sine voice streamed via pygame.mixer.

HOW THE SYNTH WORKS
===================

Each play() adds a _Voice. Per chunk, all live voices are mixed into one
buffer by Synth.render_chunk():

  wave[t] = sin(2pi * phase[t]) + HARMONIC_BLEND * sin(4pi * phase[t])

shaped by a raised-cosine envelope:

  Attack:  env[t] = 0.5 * (1 - cos(pi * t / A))          t in [0, A)
  Release: env[t] = 0.5 * (1 + cos(pi * (t-start) / R))   t in [max_age-R, max_age)

A voice lives for the pacing delay at the time it was played, so notes get
shorter as the speed goes up. Past MAX_VOICES the oldest voice is clamped to
a short fade. The mix is divided by sqrt(n_voices).

The MixerOutput thread renders chunks ahead of playback and queues them on a
mixer channel. Synth itself needs no audio device.
"""
import logging
import math
import threading
import time

import numpy as np
import pygame

from . import settings
from .errors import DeviceUnavailable

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi
OUTPUT_GAIN = 0.85


def magnitude_to_pitch(magnitude: int, surface_height: int,
                       base_pitch: int = settings.BASE_PITCH,
                       pitch_range: int = settings.PITCH_RANGE) -> int:
    return base_pitch + magnitude * pitch_range // surface_height


def pitch_to_freq(pitch: float) -> float:
    """MIDI note number to Hz (A4 = 69 = 440 Hz)."""
    return 440.0 * 2.0 ** ((pitch - 69) / 12.0)


def to_sound(chunk: np.ndarray, gain: float = OUTPUT_GAIN):
    """Mono float chunk in [-1, 1] to a stereo 16-bit mixer Sound."""
    pcm = np.int16(np.clip(chunk * gain, -1.0, 1.0) * 32767)
    return pygame.sndarray.make_sound(np.column_stack((pcm, pcm)))


class _Voice:
    __slots__ = ('freq', 'phase', 'age', 'max_age', 'attack', 'release')

    def __init__(self, freq, max_age, attack, release):
        self.freq    = freq
        self.phase   = 0.0
        self.age     = 0
        self.max_age = max_age
        # Short notes shrink the envelope so attack + release fit inside
        self.attack  = max(1, min(attack, max_age // 2))
        self.release = max(1, min(release, max_age - self.attack))

    @property
    def done(self) -> bool:
        return self.age >= self.max_age

    def cut(self, fade: int) -> None:
        """Bring the release forward so the voice ends `fade` samples from now."""
        self.release = min(fade, self.release)
        self.max_age = self.age + self.release

    def envelope(self, ages: np.ndarray) -> np.ndarray:
        rise = np.minimum(ages / self.attack, 1.0)
        fall = np.clip((ages - (self.max_age - self.release)) / self.release, 0.0, 1.0)
        return 0.25 * (1.0 - np.cos(np.pi * rise)) * (1.0 + np.cos(np.pi * fall))

    def render(self, n: int, sample_rate: int) -> np.ndarray:
        """Next `n` samples of this voice; advances its phase and age."""
        step = self.freq / sample_rate
        t = np.arange(n)
        phases = self.phase + step * t
        wave = np.sin(TWO_PI * phases) + settings.HARMONIC_BLEND * np.sin(2 * TWO_PI * phases)
        out = wave * self.envelope(self.age + t)
        self.phase = (self.phase + step * n) % 1.0
        self.age += n
        return out


class Synth:
    def __init__(self, sample_rate=settings.SAMPLE_RATE, chunk_size=settings.CHUNK_SIZE):
        self.sample_rate = sample_rate
        self.chunk_size  = chunk_size
        self.attack_smp  = max(1, int(settings.SOUND_ATTACK * sample_rate))
        self.release_smp = max(1, int(settings.SOUND_RELEASE * sample_rate))
        self._voices = []
        self._lock = threading.Lock()

    @property
    def voice_count(self) -> int:
        with self._lock:
            return len(self._voices)

    def note_on(self, freq: float, duration: float) -> None:
        max_age = max(2, int(duration * self.sample_rate))
        voice = _Voice(freq, max_age, self.attack_smp, self.release_smp)
        with self._lock:
            if len(self._voices) >= settings.MAX_VOICES:
                self._voices[0].cut(settings.VOICE_STEAL_FADE)
            self._voices.append(voice)

    def render_chunk(self) -> np.ndarray:
        """Mix one chunk of all live voices into a float64 buffer in [-1, 1]."""
        mix = np.zeros(self.chunk_size)
        with self._lock:
            for v in self._voices:
                mix += v.render(self.chunk_size, self.sample_rate)
            self._voices = [v for v in self._voices if not v.done]
            gain = math.sqrt(max(1, len(self._voices))) * (1.0 + settings.HARMONIC_BLEND)
        return np.clip(mix / gain, -1.0, 1.0)


class MixerOutput:
    """Background thread feeding Synth chunks to a pygame mixer channel."""

    def __init__(self, synth: Synth):
        self.synth = synth
        self._running = False
        self._thread = None
        self._channel = None

    def start(self):
        try:
            pygame.mixer.pre_init(self.synth.sample_rate, -16, 2, self.synth.chunk_size)
            pygame.mixer.init()
            self._channel = pygame.mixer.Channel(0)
        except pygame.error as e:
            raise DeviceUnavailable(f"Audio mixer unavailable: {e}") from e
        self._running = True
        self._thread = threading.Thread(target=self._loop, name="sortsonic-audio", daemon=True)
        self._thread.start()
        logger.info("Audio output started (%d Hz)", self.synth.sample_rate)

    def stop(self):
        self._running = False
        if self._thread:
            self._thread.join(timeout=1.0)
            self._thread = None
        if self._channel:
            self._channel.stop()
            self._channel = None
        pygame.mixer.quit()

    def _loop(self):
        # Keep exactly one rendered chunk waiting behind the one playing.
        poll = self.synth.chunk_size / self.synth.sample_rate / 4
        pending = None
        while self._running:
            if pending is None:
                pending = to_sound(self.synth.render_chunk())
            if self._channel.get_queue() is None:
                self._channel.queue(pending)
                pending = None
            else:
                time.sleep(poll)


class NotePlayer:
    """
    play(magnitude) voices one note lasting `duration()` seconds.

    `duration` is a callable so the note length follows the live pacing delay.
    """

    def __init__(self, synth: Synth, duration, surface_height=settings.SURFACE_HEIGHT,
                 base_pitch=settings.BASE_PITCH, pitch_range=settings.PITCH_RANGE):
        self.synth = synth
        self.duration = duration
        self.surface_height = surface_height
        self.base_pitch = base_pitch
        self.pitch_range = pitch_range

    def play(self, magnitude: int) -> None:
        pitch = magnitude_to_pitch(magnitude, self.surface_height, self.base_pitch, self.pitch_range)
        self.synth.note_on(pitch_to_freq(pitch), self.duration())

    def close(self) -> None:
        pass


class SilentNotePlayer:
    """Stand-in used when no audio device could be opened."""

    def play(self, magnitude: int) -> None:
        pass

    def close(self) -> None:
        pass


class MixerNotePlayer(NotePlayer):
    """NotePlayer wired to a running MixerOutput."""

    def __init__(self, duration, **kwargs):
        super().__init__(Synth(), duration, **kwargs)
        self.output = MixerOutput(self.synth)
        self.output.start()

    def close(self) -> None:
        self.output.stop()


def open_note_player(duration, **kwargs):
    """Open the mixer-backed player, or a silent one if there is no device."""
    try:
        return MixerNotePlayer(duration, **kwargs)
    except DeviceUnavailable as e:
        logger.warning("%s; continuing without sound", e)
        return SilentNotePlayer()
