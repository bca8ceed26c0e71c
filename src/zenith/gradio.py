"""
Client for the Gradio queue API of HuggingFace spaces.

This module holds all of the communication with a Gradio space: it submits a
job to the queue and then reads the job's event stream until a terminal event
shows up.

Responsibilities:
- Submit a call to `/gradio_api/call/<endpoint>` and obtain its event id
- Fetch `/gradio_api/call/<endpoint>/<event_id>` as a Server-Sent-Events stream
- Parse the stream for the `complete` payload, failing on `error`
"""

import json
import logging
import time
from enum import Enum
from typing import Any, Iterable, Optional, Tuple

import requests

from zenith.config import STREAM_TIMEOUT, SUBMIT_TIMEOUT
from zenith.errors import (NoCompleteEvent, NoEventId, QueueRequestFailed, QuotaExhausted,
                          StreamTimedOut)

logger = logging.getLogger(__name__)

STREAM_PREFIX_LENGTH = 200


class ParserState(Enum):
    IDLE = "idle"
    IN_COMPLETE = "in_complete"


class CompleteEventParser:
    """
    State machine over the lines of a Gradio event stream.

    `event: complete` moves to IN_COMPLETE, any other event name moves back to
    IDLE, and `event: error` aborts at once. A `data:` line is only read as the
    result while in IN_COMPLETE. The first terminal event seen wins, so an
    error followed by a complete event still fails.
    """

    def __init__(self):
        self.state = ParserState.IDLE
        self._seen: list[str] = []
        self._seen_length = 0

    def feed(self, line: str) -> Tuple[bool, Any]:
        """Consume one line. Returns (True, payload) once the payload is found.

        Any decoded value ends the parse, JSON null included.
        """
        self._remember(line)

        if line.startswith("event:"):
            event_type = line[len("event:"):].strip()
            if event_type == "complete":
                self.state = ParserState.IN_COMPLETE
            elif event_type == "error":
                raise QuotaExhausted()
            else:
                self.state = ParserState.IDLE
        elif line.startswith("data:") and self.state is ParserState.IN_COMPLETE:
            return True, json.loads(line[len("data:"):].strip())
        return False, None

    def finish(self):
        """Called at end of stream when no payload was found."""
        raise NoCompleteEvent(self.stream_prefix())

    def stream_prefix(self) -> str:
        return "\n".join(self._seen)[:STREAM_PREFIX_LENGTH]

    def _remember(self, line: str):
        if self._seen_length < STREAM_PREFIX_LENGTH:
            self._seen.append(line)
            self._seen_length += len(line) + 1


def parse_complete_event(lines: Iterable[str], deadline: Optional[float] = None) -> Any:
    """
    Return the payload of the first complete event.

    deadline is a time.monotonic() value bounding the whole stream; heartbeat
    events keep each single read under the per-read timeout.
    """
    parser = CompleteEventParser()
    for line in lines:
        found, payload = parser.feed(line)
        if found:
            return payload
        if deadline is not None and time.monotonic() > deadline:
            raise StreamTimedOut()
    parser.finish()


def extract_complete_event_data(sse_stream: str) -> Any:
    """Parse a whole event stream held in memory."""
    return parse_complete_event(sse_stream.split("\n"))


class GradioClient:

    def __init__(
        self,
        base_url: str,
        hf_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        submit_timeout: float = SUBMIT_TIMEOUT,
        stream_timeout: float = STREAM_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.submit_timeout = submit_timeout
        self.stream_timeout = stream_timeout
        self.headers = {"Content-Type": "application/json"}
        if hf_token:
            self.headers["Authorization"] = f"Bearer {hf_token}"

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def call_url(self, endpoint: str) -> str:
        return f"{self.base_url}/gradio_api/call/{endpoint}"

    def submit(self, endpoint: str, data: list) -> str:
        """Queues a call and returns the event id of the job."""
        response = self.session.post(
            self.call_url(endpoint),
            json={"data": data},
            headers=self.headers,
            timeout=self.submit_timeout,
        )
        if not response.ok:
            raise QueueRequestFailed(response.status_code)

        event_id = response.json().get("event_id")
        if not event_id:
            raise NoEventId()
        logger.debug("Queued %s on %s as event %s", endpoint, self.base_url, event_id)
        return event_id

    def fetch_result(self, endpoint: str, event_id: str) -> Any:
        """Reads the job's event stream and returns the complete payload."""
        deadline = time.monotonic() + self.stream_timeout
        with self.session.get(
            f"{self.call_url(endpoint)}/{event_id}",
            headers=self.headers,
            stream=True,
            timeout=self.stream_timeout,
        ) as response:
            response.encoding = "utf-8"
            return parse_complete_event(response.iter_lines(decode_unicode=True), deadline)

    def call(self, endpoint: str, data: list) -> Any:
        event_id = self.submit(endpoint, data)
        return self.fetch_result(endpoint, event_id)
