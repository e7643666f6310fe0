"""Audio format expected by the local whisper.cpp engine."""

SAMPLE_RATE = 16000
CHANNELS = 1
PCM_FORMAT = 'f32le'
