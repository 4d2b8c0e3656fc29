"""Multi-threaded static-file HTTP server with a scheduling request buffer, and a minimal client."""

__version__ = "0.1.0"
__all__ = ["io_helper", "request", "server", "client"]