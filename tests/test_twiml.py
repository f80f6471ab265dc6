import xml.etree.ElementTree as ET

from phonebridge.twiml import (
    MEDIA_STREAM_URL,
    VOICE_AGENT_URL,
    answer_phone_twiml,
    answer_voice_agent_twiml,
    build_connect_twiml,
)


def _parse(document):
    return ET.fromstring(document.split("?>", 1)[1])


def test_document_starts_with_xml_declaration():
    document = build_connect_twiml("hi", "s", "wss://localhost/x")
    assert document.startswith('<?xml version="1.0" encoding="UTF-8"?>')


def test_build_connect_structure():
    root = _parse(build_connect_twiml("hi there", "my-stream", "wss://localhost/x"))
    assert root.tag == "Response"
    assert [child.tag for child in root] == ["Say", "Connect"]
    assert root.find("Say").text == "hi there"
    stream = root.find("Connect/Stream")
    assert stream.attrib == {"name": "my-stream", "url": "wss://localhost/x"}


def test_message_is_escaped():
    root = _parse(build_connect_twiml("a < b & c", "s", "wss://localhost/x"))
    assert root.find("Say").text == "a < b & c"


def test_answer_phone():
    root = _parse(answer_phone_twiml())
    assert root.find("Say").text == "Hello! Starting transcription. Please speak."
    stream = root.find("Connect/Stream")
    assert stream.get("name") == "media-stream"
    assert stream.get("url") == MEDIA_STREAM_URL
    assert MEDIA_STREAM_URL.endswith("/api/phone/media-stream")


def test_answer_voice_agent():
    root = _parse(answer_voice_agent_twiml())
    assert root.find("Say").text == "Hello! Connecting you to our assistant. One moment please."
    stream = root.find("Connect/Stream")
    assert stream.get("name") == "voice-agent-stream"
    assert stream.get("url") == VOICE_AGENT_URL
    assert VOICE_AGENT_URL.endswith("/api/phone/voice-agent")