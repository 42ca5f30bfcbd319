# -*- coding: utf-8 -*-
"""
Transport boundary between the view and the backend process.

Messages are JSON objects, one per line:
    view -> backend:  {"command": "stage", "payload": {...}}
    backend -> view:  {"event": "update_all", "payload": {...}}
"""

from __future__ import annotations

import json
from typing import Protocol, runtime_checkable

from orangefish.core.result import INVALID_PAYLOAD, Result
from orangefish.protocol.commands import OutboundCommand
from orangefish.protocol.events import InboundEvent, parse_event


@runtime_checkable
class CommandTransport(Protocol):
    """Anything that can hand a command to the backend without waiting."""

    def send(self, command: OutboundCommand) -> None: ...


def encode_command(command: OutboundCommand) -> bytes:
    """Serialize a command as one UTF-8 JSON line."""
    return (json.dumps(command.to_message(), separators=(",", ":")) + "\n").encode("utf-8")


class LineBuffer:
    """Reassembles newline-terminated messages from arbitrary read chunks."""

    def __init__(self):
        self._pending = b""

    def feed(self, chunk: bytes) -> list[bytes]:
        """Add a chunk and return every line it completed (without newline)."""
        data = self._pending + bytes(chunk)
        *lines, self._pending = data.split(b"\n")
        return [line.rstrip(b"\r") for line in lines if line.strip()]

    @property
    def pending(self) -> bytes:
        return self._pending


def decode_line(line) -> Result[InboundEvent]:
    """
    Parse one line of backend output into a typed event.

    Args:
        line: bytes or str holding one JSON object

    Returns:
        Result with the event, or an INVALID_PAYLOAD / UNKNOWN_EVENT error
    """
    if isinstance(line, (bytes, bytearray)):
        try:
            line = bytes(line).decode("utf-8")
        except UnicodeDecodeError as e:
            return Result.failure(INVALID_PAYLOAD, "Backend output is not UTF-8", details=str(e))

    try:
        message = json.loads(line)
    except json.JSONDecodeError as e:
        return Result.failure(INVALID_PAYLOAD, "Backend output is not JSON", details=str(e))

    if not isinstance(message, dict) or not isinstance(message.get("event"), str):
        return Result.failure(INVALID_PAYLOAD, "Backend message has no event name")

    return parse_event(message["event"], message.get("payload"))
