import asyncio
import base64
import json

import pytest

from phonebridge.transcribe import handle_transcribe_stream


class _FakeConnection:
    def __init__(self, messages):
        self.messages = list(messages)
        self.closed = False

    async def recv(self):
        if self.messages:
            return self.messages.pop(0)
        raise ConnectionError("closed")

    async def close(self):
        self.closed = True


class _FakeProcessor:
    def __init__(self, maxsize=0):
        self.queue = asyncio.Queue(maxsize=maxsize)
        self.received = []
        self.finished = asyncio.get_running_loop().create_future()
        self.consumer = asyncio.get_running_loop().create_task(self._consume())

    async def _consume(self):
        while True:
            chunk = await self.queue.get()
            if chunk is None:
                self.finished.set_result(True)
                return
            self.received.append(chunk)

    def start_twilio_transcribe_agent(self):
        return self.queue, self.finished


def _media(data):
    return json.dumps({"event": "media", "media": {"payload": base64.b64encode(data).decode()}})


START = json.dumps({"event": "start", "start": {"streamSid": "MZ1"}})
STOP = json.dumps({"event": "stop", "stop": {"streamSid": "MZ1"}})


@pytest.mark.asyncio
async def test_audio_forwarded_until_stop():
    conn = _FakeConnection([START, _media(b"one"), "{bad", '{"event":"mark"}', _media(b"two"), STOP, _media(b"after")])
    proc = _FakeProcessor()
    await asyncio.wait_for(handle_transcribe_stream(conn, proc), 1)
    assert proc.received == [b"one", b"two"]
    assert proc.finished.done()
    assert conn.closed
    assert conn.messages == [_media(b"after")]


@pytest.mark.asyncio
async def test_invalid_payload_skipped():
    bad = json.dumps({"event": "media", "media": {"payload": "***"}})
    conn = _FakeConnection([bad, _media(b"ok"), STOP])
    proc = _FakeProcessor()
    await asyncio.wait_for(handle_transcribe_stream(conn, proc), 1)
    assert proc.received == [b"ok"]


@pytest.mark.asyncio
async def test_connection_error_returns_without_closing_queue():
    conn = _FakeConnection([_media(b"x")])
    proc = _FakeProcessor()
    await asyncio.wait_for(handle_transcribe_stream(conn, proc), 1)
    for _ in range(5):
        await asyncio.sleep(0)
    assert proc.received == [b"x"]
    assert not proc.finished.done()
    assert conn.closed
    proc.consumer.cancel()