"""Bidirectional bridge between a Twilio media stream and audio queues."""

from __future__ import annotations

import asyncio
import base64
import binascii
import contextlib
import logging
from typing import Protocol

from .events import encode_media_message, parse_event

logger = logging.getLogger(__name__)


class _Connection(Protocol):
    async def recv(self) -> str | bytes: ...

    async def send(self, message: str) -> None: ...

    async def close(self) -> None: ...


def _close_queue(queue: asyncio.Queue) -> None:
    """Put the end-of-stream marker without blocking, evicting a chunk if full."""
    try:
        queue.put_nowait(None)
    except asyncio.QueueFull:
        queue.get_nowait()
        queue.put_nowait(None)


class TwilioStreamHandler:
    """Moves audio between a Twilio WebSocket and a pair of queues.

    Incoming audio chunks go to ``audio_in``, which receives ``None`` when the
    stream ends. Chunks taken from ``audio_out`` are sent to Twilio until a
    ``None`` arrives.
    """

    def __init__(self, connection: _Connection) -> None:
        self._conn = connection
        self._stream_sid = ""
        self._write_lock = asyncio.Lock()
        self._tasks: list[asyncio.Task] = []

    @property
    def stream_sid(self) -> str:
        return self._stream_sid

    def start(self, audio_in: asyncio.Queue, audio_out: asyncio.Queue) -> None:
        """Start sending and receiving; must be called inside a running loop."""
        loop = asyncio.get_running_loop()
        self._tasks = [
            loop.create_task(self._send_audio(audio_out)),
            loop.create_task(self._receive_audio(audio_in)),
        ]

    async def _receive_audio(self, audio_in: asyncio.Queue) -> None:
        ended = False
        try:
            while True:
                try:
                    raw = await self._conn.recv()
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    logger.info("WebSocket receive ended: %s", exc)
                    break

                try:
                    event = parse_event(raw)
                except ValueError as exc:
                    logger.error("Failed to parse Twilio event: %s", exc)
                    continue

                if event.event == "start":
                    self._stream_sid = event.start_stream_sid
                    logger.info("Twilio stream started: %s", self._stream_sid)
                elif event.event == "media":
                    try:
                        chunk = base64.b64decode(event.media_payload, validate=True)
                    except binascii.Error as exc:
                        logger.error("Failed to decode audio: %s", exc)
                        continue
                    try:
                        audio_in.put_nowait(chunk)
                    except asyncio.QueueFull:
                        logger.warning("Audio input buffer full, dropping chunk")
                elif event.event == "stop":
                    logger.info("Twilio stream stopped: %s", event.stop_stream_sid)
                    break
                else:
                    logger.debug("Unknown Twilio event: %s", event.event)
            ended = True
            await audio_in.put(None)
        finally:
            if not ended:
                _close_queue(audio_in)

    async def _send_audio(self, audio_out: asyncio.Queue) -> None:
        while True:
            chunk = await audio_out.get()
            if chunk is None:
                logger.info("Audio output channel closed")
                return
            message = encode_media_message(self._stream_sid, chunk)
            try:
                async with self._write_lock:
                    await self._conn.send(message)
            except Exception as exc:
                logger.error("Failed to send audio to Twilio: %s", exc)
                return
            logger.debug("Sent %d bytes to Twilio", len(chunk))

    async def stop(self) -> None:
        """Stop both directions and close the connection."""
        logger.info("Stopping Twilio WebSocket handler")
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        async with self._write_lock:
            with contextlib.suppress(Exception):
                await self._conn.close()