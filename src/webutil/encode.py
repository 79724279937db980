"""Persist Python objects to disk as JSON documents or pickles."""

from __future__ import annotations

import json
import logging
import os
import pickle
from typing import Any

from .files import DEFAULT_FILE_MODE

logger = logging.getLogger(__name__)


def _write_bytes(filename: str | os.PathLike, payload: bytes, mode: int) -> None:
    fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as handle:
        handle.write(payload)


def store_json(data: Any, filename: str | os.PathLike, mode: int = DEFAULT_FILE_MODE) -> None:
    try:
        payload = json.dumps(data).encode("utf-8")
    except (TypeError, ValueError) as exc:
        logger.error("Error encoding JSON data for %s: %s", filename, exc)
        raise
    try:
        _write_bytes(filename, payload, mode)
    except OSError as exc:
        logger.error("Error writing JSON data to %s: %s", filename, exc)
        raise


def load_json(filename: str | os.PathLike) -> Any:
    try:
        with open(filename, encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        logger.error("Error opening JSON file %s: %s", filename, exc)
        raise
    except json.JSONDecodeError as exc:
        logger.error("Error decoding JSON data from %s: %s", filename, exc)
        raise


def store_pickle(data: Any, filename: str | os.PathLike, mode: int = DEFAULT_FILE_MODE) -> None:
    """Write data as a pickle. Only load pickles you wrote yourself."""
    try:
        payload = pickle.dumps(data)
    except (pickle.PicklingError, TypeError, AttributeError) as exc:
        logger.error("Error encoding pickle data for %s: %s", filename, exc)
        raise
    try:
        _write_bytes(filename, payload, mode)
    except OSError as exc:
        logger.error("Error writing pickle data to %s: %s", filename, exc)
        raise


def load_pickle(filename: str | os.PathLike) -> Any:
    try:
        with open(filename, "rb") as handle:
            return pickle.load(handle)
    except OSError as exc:
        logger.error("Error opening pickle file %s: %s", filename, exc)
        raise
    except (pickle.UnpicklingError, EOFError) as exc:
        logger.error("Error decoding pickle data from %s: %s", filename, exc)
        raise
