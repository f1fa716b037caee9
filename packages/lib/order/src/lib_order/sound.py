from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import numpy as np
import pygame


@dataclass(frozen=True)
class Tone:
    """A short cue: a list of (frequency, seconds) notes with a decay."""

    notes: Sequence[tuple]
    decay: float = 18.0
    volume: float = 0.5


CUES: Dict[str, Tone] = {
    "select": Tone(notes=((660.0, 0.08),), decay=30.0),
    "deal": Tone(notes=((300.0, 0.09),), decay=22.0, volume=0.4),
    "deal_last": Tone(notes=((392.0, 0.10), (523.25, 0.18)), decay=9.0),
}


def synthesize(tone: Tone, sample_rate: int) -> np.ndarray:
    """Render a tone as float samples in [-1, 1]."""
    chunks = []
    for freq, duration in tone.notes:
        t = np.arange(int(sample_rate * duration)) / float(sample_rate)
        envelope = np.minimum(1.0, t * 200.0) * np.exp(-tone.decay * t)
        wave = np.sin(2.0 * np.pi * freq * t) + 0.2 * np.sin(4.0 * np.pi * freq * t)
        chunks.append(wave * envelope * tone.volume / 1.2)
    if not chunks:
        return np.zeros(0, dtype=float)
    return np.clip(np.concatenate(chunks), -1.0, 1.0)


class SoundBank:
    """Sound cues looked up by name.

    Playing is a no-op when sound is disabled, the mixer is not running
    or the name is unknown.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}

    def load(self) -> None:
        if not self.enabled:
            return
        mixer = pygame.mixer.get_init()
        if not mixer:
            print("SoundBank: mixer not initialized, sound disabled")
            self.enabled = False
            return

        sample_rate, size, channels = mixer
        for name, tone in CUES.items():
            samples = synthesize(tone, sample_rate)
            self._sounds[name] = pygame.sndarray.make_sound(
                _to_mixer_format(samples, size, channels)
            )

    def get(self, name: str) -> Optional["pygame.mixer.Sound"]:
        return self._sounds.get(name)

    def play(self, name: str) -> None:
        if not self.enabled:
            return
        sound = self.get(name)
        if sound is None:
            return
        sound.play()


def _to_mixer_format(samples: np.ndarray, size: int, channels: int) -> np.ndarray:
    bits = abs(size)
    if bits == 8:
        dtype = np.int8 if size < 0 else np.uint8
    elif bits == 32:
        dtype = np.float32
    else:
        dtype = np.int16 if size < 0 else np.uint16

    if dtype == np.float32:
        data = samples.astype(np.float32)
    else:
        info = np.iinfo(dtype)
        amplitude = (int(info.max) - int(info.min)) // 2
        offset = 0 if info.min < 0 else amplitude + 1
        data = (samples * amplitude + offset).astype(dtype)

    if channels > 1:
        data = np.ascontiguousarray(np.repeat(data[:, np.newaxis], channels, axis=1))
    return data
