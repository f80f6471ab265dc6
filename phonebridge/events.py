"""Events of the Twilio media stream protocol."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MediaEvent:
    """One message received on a Twilio media stream."""

    event: str = ""
    start_stream_sid: str = ""
    media_payload: str = ""
    stop_stream_sid: str = ""


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"field {key!r} must be an object")
    return section


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def parse_event(raw: str | bytes) -> MediaEvent:
    """Parse a JSON message into a :class:`MediaEvent`; raises ``ValueError``."""
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("event must be a JSON object")
    return MediaEvent(
        event=_text(data, "event"),
        start_stream_sid=_text(_section(data, "start"), "streamSid"),
        media_payload=_text(_section(data, "media"), "payload"),
        stop_stream_sid=_text(_section(data, "stop"), "streamSid"),
    )


def encode_media_message(stream_sid: str, audio: bytes) -> str:
    """Return the JSON text of a media message carrying ``audio`` to the stream."""
    message = {
        "event": "media",
        "streamSid": stream_sid,
        "media": {"payload": base64.b64encode(audio).decode("ascii")},
    }
    return json.dumps(message, sort_keys=True, separators=(",", ":"))