"""Client for the FIXR ticketing API."""
from loguru import logger

from .client import Client
from .config import ClientConfig, build_config_from_env
from .errors import (
    DecodeError,
    EncodingError,
    ExpiredError,
    FixrError,
    MaximumExceededError,
    RequestConstructionError,
    ServerReportedError,
    SoldOutError,
    TransportError,
    ValidationError,
)
from .models import Booking, Event, PromoCode, Ticket

__version__ = "0.1.0"

# Silent unless the application opts in with logger.enable("fixr")
logger.disable("fixr")

__all__ = [
    "Booking",
    "Client",
    "ClientConfig",
    "DecodeError",
    "EncodingError",
    "Event",
    "ExpiredError",
    "FixrError",
    "MaximumExceededError",
    "PromoCode",
    "RequestConstructionError",
    "ServerReportedError",
    "SoldOutError",
    "Ticket",
    "TransportError",
    "ValidationError",
    "build_config_from_env",
]
