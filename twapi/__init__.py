"""Teamwork.com API client: the engine and one module per resource family."""
from .engine import Engine, with_id_callback, with_logger
from .entity import ABSENT, Entity
from .errors import (
    DecodeError,
    ErrorKind,
    InvalidArgumentError,
    NotFoundError,
    RequestCancelledError,
    TransportError,
    TWAPIError,
    UpstreamError,
)

__all__ = [
    "ABSENT",
    "DecodeError",
    "Engine",
    "Entity",
    "ErrorKind",
    "InvalidArgumentError",
    "NotFoundError",
    "RequestCancelledError",
    "TransportError",
    "TWAPIError",
    "UpstreamError",
    "with_id_callback",
    "with_logger",
]
