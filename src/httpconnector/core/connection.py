"""
=============================================================================
CLIENT CONNECTION
=============================================================================

Wraps an accepted socket: reads exactly one HTTP request off it and
writes the rendered response back.

=============================================================================
READING ONE REQUEST
=============================================================================

    recv() until "\\r\\n\\r\\n" is in the buffer     (headers complete)
          │
          ▼
    find Content-Length in the raw header block
          │
          ▼
    recv() until buffer holds header + body        (request complete)

The connection only frames the bytes; RequestParser turns them into an
HTTPRequest.

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class Connection:
    """
    A client connection.

    Attributes:
        socket: The accepted client socket.
        address: Client's (ip, port).
        id: Short identifier used in log lines.
    """

    socket: socket.socket
    address: tuple[str, int]
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 8192
    timeout: Optional[float] = 30.0
    max_request_size: int = 10 * 1024 * 1024

    _closed: bool = field(default=False, repr=False)

    def __post_init__(self):
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    def read_request(self) -> Optional[bytes]:
        """
        Read one complete HTTP request.

        Returns:
            The request bytes, or None if the client closed the connection
            before sending anything.

        Raises:
            TimeoutError: If the client stalls mid-request.
            ValueError: If the request exceeds max_request_size.
        """
        buffer = b""
        try:
            while b"\r\n\r\n" not in buffer:
                chunk = self._recv()
                if not chunk:
                    return buffer or None
                buffer += chunk
                self._check_size(buffer)

            header_end = buffer.find(b"\r\n\r\n")
            body_start = header_end + 4
            content_length = self._parse_content_length(buffer[:header_end])

            while len(buffer) - body_start < content_length:
                chunk = self._recv()
                if not chunk:
                    break  # client gave up; the parser reports the short body
                buffer += chunk
                self._check_size(buffer)

            return buffer
        except socket.timeout:
            raise TimeoutError("Request read timeout")

    def _recv(self) -> bytes:
        try:
            return self.socket.recv(self.buffer_size)
        except (ConnectionResetError, BrokenPipeError):
            return b""

    def _check_size(self, buffer: bytes) -> None:
        if len(buffer) > self.max_request_size:
            raise ValueError(f"Request too large: {len(buffer)} bytes")

    def _parse_content_length(self, headers: bytes) -> int:
        """
        Find Content-Length in the raw header block.

        Needed before full parsing to know how much body to wait for.
        An unusable value counts as 0; the parser rejects it afterwards.
        """
        text = headers.decode("utf-8", errors="replace").lower()
        for line in text.split("\r\n"):
            if line.startswith("content-length:"):
                value = line.split(":", 1)[1].strip()
                if value.isascii() and value.isdigit():
                    return int(value)
                return 0
        return 0

    def send_response(self, data: bytes) -> bool:
        """
        Write the whole response.

        Returns:
            True if sent, False if the client had already gone away.
        """
        try:
            self.socket.sendall(data)
            return True
        except (ConnectionResetError, BrokenPipeError, OSError) as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    def close(self):
        """Half-close, then release the socket. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # peer already gone
        try:
            self.socket.close()
        except OSError:
            pass
        logger.debug(f"[{self.id}] Connection closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
