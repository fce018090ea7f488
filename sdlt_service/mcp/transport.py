"""Newline-delimited JSON-RPC transport over stdin/stdout.

Same stream contract as ``mcp.server.stdio.stdio_server``: yields a
``(read_stream, write_stream)`` pair of ``SessionMessage`` streams for
``Server.run``. Lines that cannot be decoded are answered here with a
JSON-RPC error frame instead of being forwarded to the session, so a
malformed frame never reaches the server loop.

The ``initialize`` request is rewritten to ask for ``PROTOCOL_VERSION``, so the
handshake always settles on that version. At stdin EOF the read side stays
open until every forwarded request has been answered on stdout.

The stdout writer task is the only code that writes to stdout.
"""

from __future__ import annotations

import json
import sys
from contextlib import asynccontextmanager
from io import TextIOWrapper
from typing import Any, AsyncIterator, Union

import anyio
import anyio.lowlevel
import mcp.types as types
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream
from mcp.shared.message import SessionMessage
from pydantic import ValidationError

from sdlt_service.utils.logger import get_logger

logger = get_logger(__name__)


# Version the tool contract is served under.
PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = types.PARSE_ERROR
INVALID_REQUEST = types.INVALID_REQUEST

# Outbound items: session messages, or pre-built error frames from the reader.
Outbound = Union[SessionMessage, dict[str, Any]]


def error_frame(code: int, message: str, request_id: Any = None) -> dict[str, Any]:
    if isinstance(request_id, bool) or not isinstance(request_id, (str, int)):
        request_id = None
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }


def _pin_protocol_version(payload: Any) -> None:
    if not isinstance(payload, dict) or payload.get("method") != "initialize":
        return
    params = payload.get("params")
    if isinstance(params, dict) and params.get("protocolVersion") != PROTOCOL_VERSION:
        logger.info(
            "Client requested protocol %r, answering with %s",
            params.get("protocolVersion"),
            PROTOCOL_VERSION,
        )
        params["protocolVersion"] = PROTOCOL_VERSION


def decode_line(line: str) -> SessionMessage | dict[str, Any]:
    """Decode one input line into a session message or an error frame."""
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as exc:
        logger.warning("Malformed frame (not JSON): %s", exc)
        return error_frame(PARSE_ERROR, "Parse error")

    _pin_protocol_version(payload)

    try:
        message = types.JSONRPCMessage.model_validate(payload)
    except ValidationError:
        request_id = payload.get("id") if isinstance(payload, dict) else None
        logger.warning("Malformed frame (not a JSON-RPC message), id=%r", request_id)
        return error_frame(INVALID_REQUEST, "Invalid Request", request_id)

    return SessionMessage(message)


class InFlightRequests:
    """Ids of requests forwarded to the session and not yet answered on stdout."""

    def __init__(self) -> None:
        self._ids: set[types.RequestId] = set()
        self._idle = anyio.Event()
        self._idle.set()

    def __len__(self) -> int:
        return len(self._ids)

    def started(self, message: types.JSONRPCMessage) -> None:
        if isinstance(message.root, types.JSONRPCRequest):
            self._ids.add(message.root.id)
            if self._idle.is_set():
                self._idle = anyio.Event()

    def answered(self, message: types.JSONRPCMessage) -> None:
        if isinstance(message.root, (types.JSONRPCResponse, types.JSONRPCError)):
            self._ids.discard(message.root.id)
            if not self._ids:
                self._idle.set()

    async def wait_idle(self) -> None:
        await self._idle.wait()


def encode(item: Outbound) -> str:
    if isinstance(item, SessionMessage):
        return item.message.model_dump_json(by_alias=True, exclude_none=True)
    return json.dumps(item, separators=(",", ":"))


@asynccontextmanager
async def stdio_transport(
    stdin: anyio.AsyncFile[str] | None = None,
    stdout: anyio.AsyncFile[str] | None = None,
) -> AsyncIterator[
    tuple[
        MemoryObjectReceiveStream[SessionMessage | Exception],
        MemoryObjectSendStream[SessionMessage],
    ]
]:
    if not stdin:
        stdin = anyio.wrap_file(TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace"))
    if not stdout:
        stdout = anyio.wrap_file(TextIOWrapper(sys.stdout.buffer, encoding="utf-8"))

    read_stream_writer, read_stream = anyio.create_memory_object_stream[SessionMessage | Exception](0)
    write_stream, write_stream_reader = anyio.create_memory_object_stream[Outbound](0)
    reply_stream = write_stream.clone()
    in_flight = InFlightRequests()

    async def stdin_reader() -> None:
        try:
            async with read_stream_writer, reply_stream:
                async for line in stdin:
                    if not line.strip():
                        continue
                    decoded = decode_line(line)
                    if isinstance(decoded, SessionMessage):
                        in_flight.started(decoded.message)
                        await read_stream_writer.send(decoded)
                    else:
                        await reply_stream.send(decoded)
                # The session stops its handlers once the read stream ends.
                logger.info("stdin closed, waiting for %d call(s) in flight", len(in_flight))
                await in_flight.wait_idle()
        except anyio.ClosedResourceError:
            await anyio.lowlevel.checkpoint()

    async def stdout_writer() -> None:
        try:
            async with write_stream_reader:
                async for item in write_stream_reader:
                    await stdout.write(encode(item) + "\n")
                    await stdout.flush()
                    if isinstance(item, SessionMessage):
                        in_flight.answered(item.message)
        except anyio.ClosedResourceError:
            await anyio.lowlevel.checkpoint()

    async with anyio.create_task_group() as tg:
        tg.start_soon(stdin_reader)
        tg.start_soon(stdout_writer)
        yield read_stream, write_stream
