# phonebridge

Glue between Twilio Media Streams and an AI audio back end, built on asyncio
and the Python standard library alone.

phonebridge has two jobs. It builds the TwiML documents that tell Twilio to
open a media-stream WebSocket. It then handles the JSON event traffic on that
WebSocket, in both directions.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## TwiML (`phonebridge.twiml`)

```python
from phonebridge.twiml import build_connect_twiml

xml = build_connect_twiml(
    "Hello! Connecting you now.",
    "voice-agent-stream",
    "wss://voice.example.com/api/phone/voice-agent",
)
```

`build_connect_twiml(message, stream_name, stream_url)` returns an XML
document with a `<Say>` of the message, followed by a `<Connect>` holding one
`<Stream>` with the given name and URL.

Two ready-made documents are also available:

- `answer_phone_twiml()` uses the greeting `TRANSCRIBE_GREETING`, the stream name
  `media-stream` and the URL `MEDIA_STREAM_URL`.
- `answer_voice_agent_twiml()` uses `VOICE_AGENT_GREETING`, the stream name
  `voice-agent-stream` and the URL `VOICE_AGENT_URL`.

Both URLs are built from `STREAM_BASE_URL`, which is
`wss://localhost:8081/api/phone`. For any other host, call
`build_connect_twiml` with your own URL. Serve the document with
`Content-Type: text/xml`.

## Stream events (`phonebridge.events`)

- `parse_event(raw)` reads one JSON message (str or bytes) into a frozen
  `MediaEvent`. The event has the fields `event`, `start_stream_sid`,
  `media_payload` and `stop_stream_sid`. Missing fields become `""`. Malformed
  JSON, or fields of the wrong type, raise `ValueError`.
- `encode_media_message(stream_sid, audio)` returns the compact JSON text of an
  outbound `media` message. The audio is base64-encoded.

## Voice agent (`phonebridge.stream`)

`TwilioStreamHandler(connection)` wraps an open WebSocket connection. The
connection needs three async methods: `recv()`, `send(message)` and `close()`.

- `start(audio_in, audio_out)` takes two `asyncio.Queue` objects. It must be
  called inside a running event loop, and it starts two tasks:
  - Decoded caller audio is put on `audio_in` without waiting. When the queue
    is full, the chunk is dropped. When the stream ends, `None` is put on
    `audio_in`.
  - Chunks taken from `audio_out` are sent to Twilio as media messages. Sending
    stops when a `None` arrives or a send fails.
- `stream_sid` is a property that holds the SID from the last `start` event.
- `await stop()` cancels both tasks and closes the connection.

## Back end (`phonebridge.processor`)

`VoiceCallProcessor(ai_processor)` passes calls through to your AI back end:

- `start_twilio_voice_agent()` returns `ai_processor.start_voice_agent()`.
- `start_twilio_transcribe_agent()` returns `ai_processor.transcribe_audio()`.

## Transcription (`phonebridge.transcribe`)

`await handle_transcribe_stream(connection, processor)` serves one
transcription call. The processor's `start_twilio_transcribe_agent()` must
return two things: an `asyncio.Queue` for audio, and an awaitable that
completes when transcription is done.

The function decodes media events and puts the audio on the queue. When the
queue is full, chunks are dropped. On a `stop` event it puts `None` on the
queue and waits for the awaitable. The connection is always closed at the end.

## What it does not do

phonebridge includes no HTTP or WebSocket server and no speech or AI back
end. You accept the Twilio webhook, upgrade the WebSocket, and supply the
object that performs transcription or runs the voice agent. phonebridge only
handles the TwiML and the stream traffic in between.