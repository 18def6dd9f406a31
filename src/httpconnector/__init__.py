"""
=============================================================================
HTTPCONNECTOR - A Small HTTP/1.1 Connector Over Raw Sockets
=============================================================================

Accepts TCP connections, parses one HTTP request per connection, routes it
to a handler and writes the response back.

=============================================================================
ARCHITECTURE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  TRANSPORT (core/)                                                  │
    │     SocketServer → Connection → ThreadPool worker                   │
    ├─────────────────────────────────────────────────────────────────────┤
    │  PROTOCOL (http/)                                                   │
    │     RequestParser → Router → HTTPResponse.to_bytes()                │
    ├─────────────────────────────────────────────────────────────────────┤
    │  APPLICATION (handlers/, session/, users.py)                        │
    │     /  /login  /register  + static files                            │
    │     SessionManager (JSESSIONID)   UserRepository                    │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpconnector/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httpconnector)
    ├── server.py            # HTTPConnector: transport ↔ protocol glue
    ├── app.py               # create_router(): the route table
    ├── config.py            # ConnectorConfig dataclass
    ├── users.py             # User + UserRepository
    ├── core/                # socket_server, connection, thread_pool
    ├── http/                # request, response, router, status codes,
    │                        # content types
    ├── session/             # Session, AttributeKey, SessionManager
    ├── handlers/            # default, login, register, static
    └── static/              # bundled pages, css and js

=============================================================================
QUICK START
=============================================================================

    from httpconnector import HTTPConnector, ConnectorConfig

    HTTPConnector(ConnectorConfig(port=8080)).run()

or from a shell:

    python -m httpconnector --port 8080

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPConnector
from .config import ConnectorConfig

__all__ = ["HTTPConnector", "ConnectorConfig", "__version__"]
