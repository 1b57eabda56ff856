"""aiohttp session helpers and response handling."""

import json
import logging
from typing import Any

import aiohttp

from ..exceptions import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "analyze image fail"


def extract_error_message(body: str) -> str:
    """Pick the user facing message out of an error response body.

    The backend answers failures with a JSON object whose optional
    ``message`` is shown verbatim.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError, RecursionError):
        return DEFAULT_ERROR_MESSAGE

    if isinstance(data, dict) and isinstance(data.get("message"), str):
        if data["message"]:
            return data["message"]
    return DEFAULT_ERROR_MESSAGE


async def parse_json_response(resp: aiohttp.ClientResponse) -> Any:
    """Return the JSON body of a successful response.

    Raises:
        UpstreamError: If the response status is not 2xx or the body is
            not valid JSON or nested too deep to decode
    """
    body = await resp.text()
    if not 200 <= resp.status < 300:
        message = extract_error_message(body)
        logger.warning("Request %s failed with %d: %s", resp.url, resp.status, message)
        raise UpstreamError(message, status=resp.status)

    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise UpstreamError(f"Invalid JSON from {resp.url}: {e}", resp.status) from e
    except RecursionError as e:
        raise UpstreamError(
            f"JSON from {resp.url} is nested too deep", resp.status
        ) from e
