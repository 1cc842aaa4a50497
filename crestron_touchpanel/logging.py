import logging
import json
from typing import Any, Dict, Optional


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger namespaced under the package logger.

    Args:
        name: Optional specific logger name. If not provided, the package logger is returned.

    Returns:
        A logger instance for the specified name
    """
    if name is None:
        return logging.getLogger("crestron_touchpanel")
    elif name.startswith("crestron_touchpanel"):
        return logging.getLogger(name)
    else:
        return logging.getLogger(f"crestron_touchpanel.{name}")


TRUNCATED_SUFFIX = "... [truncated]"


def _truncate(text: str, max_length: int) -> str:
    return text if len(text) <= max_length else text[:max_length] + TRUNCATED_SUFFIX


def log_extra_fields(
    logger: logging.Logger,
    obj_name: str,
    extra_fields: Dict[str, Any],
    max_length: int = 300,
):
    """
    Log JSON fields that did not map to any model attribute.

    Panels running newer firmware add keys over time; they are kept on the model
    and reported here at debug level, one line per key.

    Args:
        logger: Logger to use
        obj_name: Name of the model being built (e.g., 'DeviceInfo').
        extra_fields: Dictionary of unmapped fields.
        max_length: Maximum length for field values in the log. Default is 300.
    """
    if not extra_fields or not logger.isEnabledFor(logging.DEBUG):
        return

    lines = []
    for key, value in extra_fields.items():
        lines.append(f"  {key} = {_truncate(json.dumps(value), max_length)}")
    logger.debug(f"Unmapped fields for {obj_name}:\n" + "\n".join(lines))


def log_api_response(
    logger: logging.Logger,
    method: str,
    url: str,
    body: str,
    status_code: int,
    truncate: bool = True,
    max_length: int = 500,
):
    """
    Log a raw API response body.

    Args:
        logger: Logger to use
        method: HTTP method of the request.
        url: The API URL that was called.
        body: The response body text.
        status_code: HTTP status code.
        truncate: Whether to truncate large bodies. Default is True.
        max_length: Maximum length for the body in the log if truncated. Default is 500.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    body = body or ""
    if truncate:
        body = _truncate(body, max_length)
    logger.debug(f"API {method} response from {url} (Status: {status_code}):\n{body}")
