import numpy as np
import pygame
import pytest

from sortsonic import settings, sound
from sortsonic.model import StepEvent, StepKind
from sortsonic.sinks import EventSink, FanOutSink, LoggingSink, SoundSink
from sortsonic.sound import (NotePlayer, SilentNotePlayer, Synth, magnitude_to_pitch,
                             open_note_player, pitch_to_freq)


@pytest.mark.parametrize("magnitude, pitch", [(0, 60), (250, 78), (500, 96), (13, 60)])
def test_magnitude_to_pitch(magnitude, pitch):
    assert magnitude_to_pitch(magnitude, 500) == pitch


def test_pitch_to_freq():
    assert pitch_to_freq(69) == pytest.approx(440.0)
    assert pitch_to_freq(81) == pytest.approx(880.0)


class TestSynth:
    def test_silence_without_voices(self):
        chunk = Synth().render_chunk()
        assert chunk.shape == (settings.CHUNK_SIZE,)
        assert not chunk.any()

    def test_note_is_audible_and_bounded(self):
        synth = Synth()
        synth.note_on(440.0, 0.5)
        chunk = synth.render_chunk()
        assert np.abs(chunk).max() > 0.1
        assert np.abs(chunk).max() <= 1.0

    def test_note_ends_after_its_duration(self):
        synth = Synth()
        synth.note_on(440.0, 0.005)
        synth.render_chunk()
        assert synth.voice_count == 0

    def test_oldest_voice_is_stolen(self):
        synth = Synth()
        for _ in range(settings.MAX_VOICES + 1):
            synth.note_on(220.0, 1.0)
        assert synth.voice_count == settings.MAX_VOICES + 1
        synth.render_chunk()
        assert synth.voice_count == settings.MAX_VOICES


class FakeSynth:
    def __init__(self):
        self.notes = []

    def note_on(self, freq, duration):
        self.notes.append((freq, duration))


def test_note_player_uses_current_delay():
    synth = FakeSynth()
    delay = [0.1]
    player = NotePlayer(synth, lambda: delay[0], surface_height=500)
    player.play(250)
    delay[0] = 0.02
    player.play(0)
    assert synth.notes[0] == (pytest.approx(pitch_to_freq(78)), 0.1)
    assert synth.notes[1] == (pytest.approx(pitch_to_freq(60)), 0.02)


def test_sound_sink_can_be_muted():
    synth = FakeSynth()
    sink = SoundSink(NotePlayer(synth, lambda: 0.1, surface_height=500))
    event = StepEvent(StepKind.SWAP, 0, 1, 100)
    sink.on_step(event, ())
    sink.enabled = False
    sink.on_step(event, ())
    assert len(synth.notes) == 1


def test_fan_out_preserves_order():
    seen = []

    class Tag:
        def __init__(self, name): self.name = name
        def on_step(self, event, snapshot): seen.append((self.name, event.primary))

    sink = FanOutSink(Tag("a"), Tag("b"))
    for i in range(2):
        sink.on_step(StepEvent(StepKind.PLACE, i, None, 10), ())
    assert seen == [("a", 0), ("b", 0), ("a", 1), ("b", 1)]


def test_missing_audio_device_falls_back_to_silence(monkeypatch):
    def no_device(*args, **kwargs):
        raise pygame.error("No available audio device")

    monkeypatch.setattr(sound.pygame.mixer, "pre_init", lambda *a, **k: None)
    monkeypatch.setattr(sound.pygame.mixer, "init", no_device)
    player = open_note_player(lambda: 0.1)
    assert isinstance(player, SilentNotePlayer)
    player.play(100)
    player.close()


class TestVoiceEnvelope:
    def test_rises_holds_and_falls_to_zero(self):
        voice = sound._Voice(440.0, max_age=1000, attack=100, release=200)
        env = voice.envelope(np.arange(1000))
        assert env[0] == pytest.approx(0.0)
        assert np.all(np.diff(env[:100]) > 0)
        assert np.allclose(env[100:800], 1.0)
        assert np.all(np.diff(env[800:]) < 0)
        assert np.allclose(voice.envelope(np.array([1000, 1500])), 0.0)

    def test_short_note_squeezes_the_envelope(self):
        voice = sound._Voice(440.0, max_age=40, attack=100, release=200)
        assert voice.attack + voice.release <= voice.max_age

    def test_cut_ends_the_voice_early(self):
        voice = sound._Voice(440.0, max_age=10000, attack=10, release=500)
        voice.render(100, settings.SAMPLE_RATE)
        voice.cut(64)
        assert voice.max_age == 164
        assert not voice.done
        voice.render(64, settings.SAMPLE_RATE)
        assert voice.done


def test_sinks_share_the_event_sink_base():
    for cls in (FanOutSink, SoundSink, LoggingSink):
        assert issubclass(cls, EventSink)
    with pytest.raises(NotImplementedError):
        EventSink().on_step(StepEvent(StepKind.PLACE, 0, None, 1), (1,))
