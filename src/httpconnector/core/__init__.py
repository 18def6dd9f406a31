"""
Transport: the listening socket, per-client connections and the worker
pool that handles them.
"""

from .connection import Connection
from .socket_server import SocketServer
from .thread_pool import ThreadPool

__all__ = ["Connection", "SocketServer", "ThreadPool"]
