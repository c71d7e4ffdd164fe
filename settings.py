"""Environment-driven settings and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from leakages import DEFAULT_ASSUMED_INCOME
from sheets_source import DEFAULT_SHEET_NAME

logger = logging.getLogger(__name__)

ENV_PREFIX = "LEAKLEDGER_"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings.

    Fields:
    - spreadsheet_id / api_key: Google Sheets connection, empty when unset
    - sheet_name: tab holding the transaction rows
    - request_timeout: HTTP timeout in seconds
    - fallback_income: income assumed by the leakage checks when a period has none
    - log_level: root logging level name
    """
    spreadsheet_id: str = ""
    api_key: str = ""
    sheet_name: str = DEFAULT_SHEET_NAME
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    fallback_income: float = DEFAULT_ASSUMED_INCOME
    log_level: str = DEFAULT_LOG_LEVEL


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s%s=%r, using default %s", ENV_PREFIX, name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s%s must be positive, using default %s", ENV_PREFIX, name, default)
        return default
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the environment (or a given mapping)."""
    env = os.environ if environ is None else environ

    log_level = env.get(ENV_PREFIX + "LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(log_level), int):
        logger.warning("Unknown log level %r, using %s", log_level, DEFAULT_LOG_LEVEL)
        log_level = DEFAULT_LOG_LEVEL

    return Settings(
        spreadsheet_id=env.get(ENV_PREFIX + "SPREADSHEET_ID", "").strip(),
        api_key=env.get(ENV_PREFIX + "API_KEY", "").strip(),
        sheet_name=env.get(ENV_PREFIX + "SHEET_NAME", "").strip() or DEFAULT_SHEET_NAME,
        request_timeout=_positive_float(env, "REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        fallback_income=_positive_float(env, "FALLBACK_INCOME", DEFAULT_ASSUMED_INCOME),
        log_level=log_level,
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
