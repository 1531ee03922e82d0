"""HTTP methods understood by the request contract."""

from __future__ import annotations

from enum import Enum


class HTTPMethod(str, Enum):
    """Standard HTTP methods; the value is the upper-case wire name."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"
