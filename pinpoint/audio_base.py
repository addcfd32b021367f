"""Abstract audio capture, playback and processing endpoints."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod

from pinpoint.audio_format import AudioFormat
from pinpoint.signals import Signal


class AudioState(enum.Enum):
    """Transport state of an audio input or output."""

    STOPPED = "stopped"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    ERROR = "error"


class BackendState(enum.Enum):
    """State reported by the platform audio device driving an endpoint."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    STOPPED = "stopped"
    IDLE = "idle"


class _AudioEndpoint:
    _error_label = "Audio device error"

    def __init__(self) -> None:
        self._state = AudioState.STOPPED
        self.state_changed = Signal()
        self.error_occurred = Signal()

    def _apply_backend_state(self, backend_state: BackendState, error_code: int = 0) -> None:
        """Translate a backend state report into an endpoint state change."""
        if backend_state is BackendState.IDLE:
            return
        if backend_state is BackendState.ACTIVE:
            next_state = AudioState.ACTIVE
        elif backend_state is BackendState.SUSPENDED:
            next_state = AudioState.SUSPENDED
        else:
            next_state = AudioState.ERROR if error_code else AudioState.STOPPED

        if next_state is AudioState.ERROR:
            self.error_occurred.emit(f"{self._error_label} {error_code}")

        if self._state is not next_state:
            self._state = next_state
            self.state_changed.emit(next_state)

    def _mark_stopped(self) -> None:
        if self._state is not AudioState.STOPPED:
            self._state = AudioState.STOPPED
            self.state_changed.emit(AudioState.STOPPED)


class AudioProcessorBase(ABC):
    """Consumer of raw PCM buffers of arbitrary size."""

    @abstractmethod
    def process_audio(self, data: bytes, fmt: AudioFormat) -> None:
        """Handle one buffer of interleaved PCM data."""


class AudioInputBase(_AudioEndpoint, ABC):
    """Microphone or line-in capture that emits ``audio_data_ready(data, fmt)``."""

    _error_label = "Audio source error"

    def __init__(self) -> None:
        super().__init__()
        self.audio_data_ready = Signal()

    @abstractmethod
    def start(self, device_name: str = "") -> bool:
        """Start capture on the named device; empty selects the default."""

    @abstractmethod
    def stop(self) -> None:
        """Stop capture."""

    @abstractmethod
    def suspend(self) -> None:
        """Pause capture."""

    @abstractmethod
    def resume(self) -> None:
        """Resume a suspended capture."""

    @abstractmethod
    def is_active(self) -> bool:
        """True while capturing."""

    @abstractmethod
    def format(self) -> AudioFormat:
        """The negotiated capture format."""

    def state(self) -> AudioState:
        """Current transport state."""
        return self._state

    def connect_processor(self, processor: AudioProcessorBase) -> None:
        """Deliver every captured buffer to ``processor.process_audio``."""
        self.audio_data_ready.connect(processor.process_audio)


class AudioOutputBase(_AudioEndpoint, ABC):
    """Speaker or line-out playback fed through :meth:`write_audio`."""

    _error_label = "Audio sink error"

    @abstractmethod
    def start(self, device_name: str = "") -> bool:
        """Start playback on the named device; empty selects the default."""

    @abstractmethod
    def stop(self) -> None:
        """Stop playback."""

    @abstractmethod
    def suspend(self) -> None:
        """Pause playback."""

    @abstractmethod
    def resume(self) -> None:
        """Resume suspended playback."""

    @abstractmethod
    def is_active(self) -> bool:
        """True while playing."""

    @abstractmethod
    def format(self) -> AudioFormat:
        """The negotiated playback format."""

    def state(self) -> AudioState:
        """Current transport state."""
        return self._state

    @abstractmethod
    def write_audio(self, data: bytes, fmt: AudioFormat) -> None:
        """Queue PCM data, which must match :meth:`format`, for playback."""

    def connect_source(self, source: AudioInputBase) -> None:
        """Play everything ``source`` captures."""
        source.audio_data_ready.connect(self.write_audio)