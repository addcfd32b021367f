"""PCM audio conversion, WAV stream saving, audio pipeline wiring and WT9011DCL IMU handling."""

__version__ = "0.1.0"