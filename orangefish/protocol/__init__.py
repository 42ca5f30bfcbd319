"""
OrangeFish Protocol Module

Typed messages exchanged with the backend process.
No Qt/UI dependencies - only data and validation.
"""

from orangefish.protocol import commands, events
from orangefish.protocol.events import parse_event
from orangefish.protocol.transport import CommandTransport, LineBuffer, decode_line, encode_command

__all__ = [
    "commands",
    "events",
    "parse_event",
    "CommandTransport",
    "LineBuffer",
    "decode_line",
    "encode_command",
]
