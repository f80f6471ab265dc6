"""TwiML documents that answer an incoming call and connect it to a media stream."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

STREAM_BASE_URL = "wss://localhost:8081/api/phone"
MEDIA_STREAM_URL = f"{STREAM_BASE_URL}/media-stream"
VOICE_AGENT_URL = f"{STREAM_BASE_URL}/voice-agent"

TRANSCRIBE_GREETING = "Hello! Starting transcription. Please speak."
VOICE_AGENT_GREETING = "Hello! Connecting you to our assistant. One moment please."


def build_connect_twiml(message: str, stream_name: str, stream_url: str) -> str:
    """Return a TwiML response that speaks ``message`` and then opens a stream."""
    response = ET.Element("Response")
    ET.SubElement(response, "Say").text = message
    connect = ET.SubElement(response, "Connect")
    ET.SubElement(connect, "Stream", name=stream_name, url=stream_url)
    return XML_DECLARATION + ET.tostring(response, encoding="unicode")


def answer_phone_twiml() -> str:
    """TwiML that answers a call and streams its audio for transcription."""
    logger.info("TwiML WebSocket URL: %s", MEDIA_STREAM_URL)
    document = build_connect_twiml(TRANSCRIBE_GREETING, "media-stream", MEDIA_STREAM_URL)
    logger.info("TwiML Response: %s", document)
    return document


def answer_voice_agent_twiml() -> str:
    """TwiML that answers a call and connects it to the voice agent stream."""
    logger.info("Voice Agent TwiML WebSocket URL: %s", VOICE_AGENT_URL)
    document = build_connect_twiml(VOICE_AGENT_GREETING, "voice-agent-stream", VOICE_AGENT_URL)
    logger.info("Voice Agent TwiML Response: %s", document)
    return document