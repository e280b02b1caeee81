import json
import logging
import os
from datetime import datetime, timezone

DEFAULT_LOG_LEVEL = "INFO"


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    resolved = (level or os.getenv("OPS_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    numeric = logging.getLevelName(resolved)
    logger.setLevel(numeric if isinstance(numeric, int) else logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    actor_role: str | None,
    row_id: str | None,
    trace_id: str | None,
    outcome: str,
    level: int = logging.INFO,
) -> None:
    logger.log(
        level,
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "module": module,
                "action": action,
                "actor_role": actor_role,
                "row_id": row_id,
                "trace_id": trace_id,
                "outcome": outcome,
            }
        ),
    )
