"""Entry points that start AI sessions for phone calls."""

from __future__ import annotations

from typing import Any


class VoiceCallProcessor:
    """Starts voice agent and transcription sessions on an AI processor."""

    def __init__(self, ai_processor: Any) -> None:
        self.ai_processor = ai_processor

    def start_twilio_voice_agent(self) -> Any:
        """Start a voice agent; returns the AI processor's (input, output) pair."""
        return self.ai_processor.start_voice_agent()

    def start_twilio_transcribe_agent(self) -> Any:
        """Start transcription; returns the AI processor's (audio queue, done) pair."""
        return self.ai_processor.transcribe_audio()