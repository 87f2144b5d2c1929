from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

_FORBIDDEN_KEYS = {"email", "password", "token", "authorization"}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    actor_role: str | None,
    outcome: str,
    **extra: Any,
) -> None:
    illegal = sorted(key for key in extra if key.lower() in _FORBIDDEN_KEYS)
    if illegal:
        raise ValueError(f"Credential-like keys are forbidden in action logs: {illegal}")
    logger.info(
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": "INFO",
                "module": module,
                "action": action,
                "actor_role": actor_role,
                "outcome": outcome,
                **extra,
            },
            default=str,
        )
    )
