"""Twilio TwiML documents and media-stream bridging for transcription and voice agents."""

__version__ = "0.1.0"
__all__ = ["events", "processor", "stream", "transcribe", "twiml"]