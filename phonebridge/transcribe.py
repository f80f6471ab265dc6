"""Receives a Twilio media stream and feeds it to a transcription session."""

from __future__ import annotations

import asyncio
import base64
import binascii
import contextlib
import logging
from typing import Any

from .events import parse_event

logger = logging.getLogger(__name__)


async def handle_transcribe_stream(connection: Any, processor: Any) -> None:
    """Forward the call's audio to transcription until the stream stops.

    ``processor.start_twilio_transcribe_agent()`` must return an
    ``asyncio.Queue`` for audio chunks and an awaitable that completes when
    transcription has finished. ``None`` is put on the queue when Twilio
    stops the stream.
    """
    try:
        logger.info("Twilio WebSocket connection established")
        audio_queue, done = processor.start_twilio_transcribe_agent()

        while True:
            try:
                raw = await connection.recv()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.info("Connection closed: %s", exc)
                return

            try:
                event = parse_event(raw)
            except ValueError as exc:
                logger.error("JSON parse error: %s", exc)
                continue

            if event.event == "start":
                logger.info("Stream started: SID = %s", event.start_stream_sid)
            elif event.event == "media":
                try:
                    chunk = base64.b64decode(event.media_payload, validate=True)
                except binascii.Error as exc:
                    logger.error("Failed to decode audio: %s", exc)
                    continue
                try:
                    audio_queue.put_nowait(chunk)
                except asyncio.QueueFull:
                    logger.info("Audio channel full, dropping chunk")
                else:
                    logger.debug(
                        "Sent %d bytes to audio queue (len now %d)", len(chunk), audio_queue.qsize()
                    )
            elif event.event == "stop":
                logger.info("Stream stopped: SID = %s", event.stop_stream_sid)
                await audio_queue.put(None)
                await done
                return
            else:
                logger.info("Unknown event type: %s", event.event)
    finally:
        with contextlib.suppress(Exception):
            await connection.close()