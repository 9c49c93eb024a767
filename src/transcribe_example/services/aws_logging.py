from __future__ import annotations

import json
import logging
from typing import Any


def log_request(logger: logging.Logger, operation: str, params: dict[str, Any]) -> None:
    visible = {key: value for key, value in params.items() if key != "Body"}
    logger.info("%s %s", operation, json.dumps(visible, sort_keys=True, default=str))


def log_response(logger: logging.Logger, operation: str, response: dict[str, Any]) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    visible = {key: value for key, value in response.items() if key != "Body"}
    logger.debug("%s -> %s", operation, json.dumps(visible, indent=2, default=str))
