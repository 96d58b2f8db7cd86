from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .errors import ResponseDecodeError

logger = logging.getLogger(__name__)


def parse_json(response: httpx.Response) -> Any:
    """Decode a JSON response, tolerating junk printed ahead of the document.

    Some stores emit PHP notices or a stray fragment before the JSON body;
    decoding then restarts at the first ``{``.
    """
    try:
        return response.json()
    except ValueError:
        pass

    text = response.text
    start = text.find("{")
    if start < 0:
        raise ResponseDecodeError(response.status_code, "response body is not JSON", text[:1000])
    logger.debug("discarding %d bytes before JSON body", start)
    try:
        return json.loads(text[start:])
    except ValueError as e:
        raise ResponseDecodeError(response.status_code, f"response body is not JSON: {e}", text[:1000]) from e
