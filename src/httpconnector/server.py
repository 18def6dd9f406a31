"""
=============================================================================
HTTP CONNECTOR
=============================================================================

Ties the transport to the protocol layer.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    1. SocketServer accepts a TCP connection        (main thread)
    2. ThreadPool queues it                         (503 if the queue is full)
    3. Connection.read_request() frames one request (worker thread)
    4. RequestParser.parse()                        MalformedRequest → 400
    5. Router.handle()                              StaticAssetIOError → 404
                                                    anything else     → 500
    6. HTTPResponse.to_bytes() → sendall()
    7. Close the connection

The protocol layer raises; this module is the only place an exception is
turned into an error response. One request is served per connection.

=============================================================================
"""

import logging
import time
from typing import Optional

from .app import create_router
from .config import ConnectorConfig
from .core import Connection, SocketServer, ThreadPool
from .handlers import StaticAssetIOError, StaticContentLoader
from .http.request import HTTPRequest, MalformedRequest, RequestParser
from .http.response import HTTPResponse, ResponseBuilder, bad_request, internal_error, not_found
from .http.router import Router
from .http.status_codes import HTTPStatus
from .session import SessionManager
from .users import InMemoryUserRepository, UserRepository

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("httpconnector.access")


class HTTPConnector:
    """
    The runnable server.

        connector = HTTPConnector(ConnectorConfig(port=8080))
        connector.run()      # blocks until SIGINT / SIGTERM / stop()

    Args:
        config: Connector configuration; defaults when omitted.
        router: Pre-built router. When omitted one is created from the
            users / sessions collaborators and config.static_dir.
        users: Credential store shared by the login and register routes.
        sessions: Session registry shared by all workers.
    """

    def __init__(
        self,
        config: Optional[ConnectorConfig] = None,
        router: Optional[Router] = None,
        users: Optional[UserRepository] = None,
        sessions: Optional[SessionManager] = None,
    ):
        self.config = config or ConnectorConfig()
        self.config.validate()

        self.users = users if users is not None else InMemoryUserRepository()
        self.sessions = sessions if sessions is not None else SessionManager()
        if router is None:
            loader = (StaticContentLoader(self.config.static_dir)
                      if self.config.static_dir else StaticContentLoader())
            router = create_router(self.users, self.sessions, loader)
        self.router = router

        self._parser = RequestParser(max_request_size=self.config.max_request_size)
        self._socket_server = SocketServer(self.config)
        self._thread_pool = ThreadPool(
            workers=self.config.workers,
            queue_size=self.config.queue_size,
        )

    @property
    def address(self):
        return self._socket_server.address

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_ready(timeout)

    def run(self):
        """Start serving (blocking)."""
        self._setup_logging()
        self._thread_pool.start()
        logger.info(f"Starting HTTP connector on {self.config.host}:{self.config.port}")
        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._shutdown()

    def stop(self):
        """Ask a running connector to shut down."""
        self._socket_server.shutdown()

    def _setup_logging(self):
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("httpconnector").setLevel(level)

    def _shutdown(self):
        logger.info("Shutting down connector...")
        self._thread_pool.shutdown(timeout=30.0)
        stats = self._thread_pool.stats
        logger.info(
            f"Connector stopped: {stats['completed']} connections served, "
            f"{stats['failed']} failed"
        )

    # =========================================================================
    # CONNECTION HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Queue a connection for a worker, or refuse it when saturated."""
        if not self._thread_pool.submit(self._process_connection, args=(conn,)):
            logger.warning(f"[{conn.id}] Thread pool full, rejecting connection")
            with conn:
                conn.send_response(
                    ResponseBuilder()
                    .status(HTTPStatus.SERVICE_UNAVAILABLE)
                    .html("Server overloaded")
                    .to_bytes()
                )

    def _process_connection(self, conn: Connection):
        """Serve one request on ``conn`` (runs in a worker thread)."""
        with conn:
            try:
                raw = conn.read_request()
            except (TimeoutError, ValueError) as e:
                logger.warning(f"[{conn.id}] Failed to read request: {e}")
                conn.send_response(bad_request(str(e)).to_bytes())
                return
            if raw is None:
                return

            try:
                request = self._parser.parse(raw, conn.address)
            except MalformedRequest as e:
                logger.warning(f"[{conn.id}] Malformed request from {conn.client_ip}: {e}")
                conn.send_response(self._parse_error_response(e).to_bytes())
                return

            response = self.dispatch(request)
            conn.send_response(response.to_bytes())
            self._log_access(request, response, conn.created_at)

    def dispatch(self, request: HTTPRequest) -> HTTPResponse:
        """
        Route a parsed request, converting escaped exceptions to responses.
        """
        try:
            return self.router.handle(request)
        except StaticAssetIOError as e:
            logger.warning(f"{request.method} {request.path}: {e}")
            return not_found(f"{request.path} not found")
        except Exception as e:
            logger.exception(f"Handler error for {request.method} {request.path}: {e}")
            return internal_error()

    @staticmethod
    def _parse_error_response(error: MalformedRequest) -> HTTPResponse:
        try:
            status = HTTPStatus(error.status_code)
        except ValueError:
            status = HTTPStatus.BAD_REQUEST
        if status == HTTPStatus.BAD_REQUEST:
            return bad_request(str(error))
        return (ResponseBuilder()
            .status(status)
            .html(f"<h1>{status.value} {status.phrase}</h1>")
            .build())

    @staticmethod
    def _log_access(request: HTTPRequest, response: HTTPResponse, accepted_at: float):
        duration_ms = (time.time() - accepted_at) * 1000
        access_logger.info(
            f'{request.client_address[0]} "{request.method} {request.path}" '
            f"{response.status.value} {len(response.body)} {duration_ms:.2f}ms"
        )

