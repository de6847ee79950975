"""Loading model definitions from JSON files and URLs."""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger
from .scaffold.core.schema import ModelDefinition, ModelValidationError

logger = get_logger(__name__)

JSON_ACCEPT_HEADER = {"Accept": "application/json"}


class ModelLoaderError(Exception):
    """Raised when a model definition cannot be read or decoded."""

    pass


def load_json_from_file(file_path: str | Path) -> Any:
    """Read and decode a JSON document from disk.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Decoded JSON value.

    Raises:
        FileNotFoundError: If the file does not exist.
        ModelLoaderError: If the file cannot be read or is not valid JSON.
    """
    path = Path(file_path)
    logger.debug(f"Reading model JSON from {path}")

    if not path.is_file():
        logger.error(f"Model file not found: {path}")
        raise FileNotFoundError(f"File not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not read {path}: {e}")
        raise ModelLoaderError(f"Error reading file {path}: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        raise ModelLoaderError(f"Invalid JSON in file {path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> Any:
    """Fetch and decode a JSON document over HTTP(S).

    Args:
        url: Absolute URL of the document.
        timeout: Request timeout in seconds.

    Returns:
        Decoded JSON value.

    Raises:
        ModelLoaderError: If the URL is malformed, the request fails or the
            body is not JSON.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        logger.error(f"Rejected model URL: {url}")
        raise ModelLoaderError(f"Invalid URL: {url}")

    logger.debug(f"Fetching model JSON from {url}")
    try:
        response = requests.get(url, timeout=timeout, headers=JSON_ACCEPT_HEADER)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.Timeout as e:
        logger.error(f"Timed out after {timeout}s fetching {url}")
        raise ModelLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error(f"HTTP {status} fetching {url}")
        raise ModelLoaderError(f"HTTP error {status} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request to {url} failed: {e}")
        raise ModelLoaderError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        logger.error(f"Response from {url} is not JSON: {e}")
        raise ModelLoaderError(f"Invalid JSON response from URL {url}: {e}") from e


def load_model_definition(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> ModelDefinition:
    """Load a model definition from exactly one of a file or a URL.

    The result is converted but not validated; callers run
    ``ensure_valid`` when they need a generation-ready model.

    Raises:
        ModelLoaderError: If neither or both sources are given, loading
            fails, or the document is not a JSON object.
        FileNotFoundError: If the file does not exist.
    """
    if bool(file_path) == bool(url):
        raise ModelLoaderError("Provide exactly one of file_path or url")

    if file_path:
        data, source = load_json_from_file(file_path), str(file_path)
    else:
        data, source = load_json_from_url(url, timeout), url

    try:
        model = ModelDefinition.from_dict(data)
    except ModelValidationError as e:
        raise ModelLoaderError(f"{source}: {e}") from e

    logger.info(f"Loaded model '{model.name}' from {source}")
    return model
