"""Logging of Octant API errors."""

import asyncio
import json
from typing import Any

import aiohttp
from loguru import logger

from .exceptions import ApiResponseError


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, default=str)
    except (TypeError, ValueError):
        return repr(value)


def log_api_error(error: BaseException, account_id: str = "") -> None:
    """
    Log an error raised while talking to Octant.

    Response errors log the status code, with headers and body at debug level.
    Transport errors (no response at all) and anything else log a single line.

    Args:
        error: The exception raised by the client
        account_id: Account identifier used as log prefix
    """
    prefix = f"[{account_id}] " if account_id else ""

    if isinstance(error, ApiResponseError):
        logger.error(f"{prefix}Status: {error.status}")
        logger.debug(f"{prefix}Headers: {_dump(error.headers)}")
        logger.debug(f"{prefix}Data: {_dump(error.body)}")
    elif isinstance(error, aiohttp.ClientResponseError):
        logger.error(f"{prefix}Status: {error.status}")
        logger.debug(f"{prefix}Headers: {_dump(dict(error.headers or {}))}")
    elif isinstance(error, (aiohttp.ClientConnectionError, asyncio.TimeoutError)):
        logger.error(f"{prefix}No response received from server")
        logger.debug(f"{prefix}Request error: {error!r}")
    else:
        logger.error(f"{prefix}Error: {error}")
