"""Centralized logging utilities for tenantcore.

This module provides:
- Logging configuration from TenantCoreConfig
- Safe preview utilities for sensitive data
- Secret redaction
- Structured logging with tenant and request context
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from .config import LogLevel, TenantCoreConfig


# Patterns for detecting secrets (common patterns to redact)
SECRET_PATTERNS = [
    r'(?i)(?:password|passwd|pwd|secret|token|key|api[_-]?key|auth[_-]?token)\s*[:=]\s*["\']?([^"\'\s]+)',
    r'(?i)(?:bearer|basic)\s+([a-zA-Z0-9+/=._-]+)',
    r'(?i)(?:session-token|auth-token)\s*[:=]\s*["\']?([^"\'\s;]+)',
    r'(?i)(?:x-api-key|x-auth-token|x-access-token)\s*[:=]\s*["\']?([^"\'\s]+)',
    r'[a-f0-9]{32,}',  # Long hex strings (could be hashes or keys)
]

# Context fields rendered next to the message rather than as extras.
_CONTEXT_FIELDS = ("tenant_id", "request_id", "user_id")

_RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName", *_CONTEXT_FIELDS,
})


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a safe, length-bounded preview of a value for logging.

    Converts any value to a single line, normalizes whitespace and truncates
    to ``limit`` characters (the last one becomes an ellipsis).
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


def redact_secrets(text: str, replacement: str = "[REDACTED]") -> str:
    """Redact secret patterns (passwords, bearer tokens, session cookies, keys) from text."""
    if not isinstance(text, str):
        return text

    result = text
    for pattern in SECRET_PATTERNS:
        result = re.sub(pattern, replacement, result, flags=re.IGNORECASE | re.DOTALL)

    return result


def safe_log_value(value: Any, limit: int = 240, redact: bool = True) -> str:
    """safe_preview() followed by redact_secrets()."""
    preview = safe_preview(value, limit=limit)
    if redact:
        preview = redact_secrets(preview)
    return preview


class TenantFormatter(logging.Formatter):
    """Formatter that adds tenant/request context and optional JSON output.

    Extra fields on the record are rendered through :func:`safe_log_value`,
    so feature lists and key batches stay short in the logs.
    """

    def __init__(
        self,
        include_context: bool = True,
        json_format: bool = True,
        redact_secrets: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.include_context = include_context
        self.json_format = json_format
        self.redact_secrets = redact_secrets

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context: dict[str, str] = {}
        if self.include_context:
            for field in _CONTEXT_FIELDS:
                value = getattr(record, field, None)
                if value:
                    context[field] = str(value)
            log_data.update(context)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_log_value(value, redact=self.redact_secrets)

        if self.redact_secrets:
            log_data["message"] = redact_secrets(log_data["message"])

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        parts.extend(f"{k}={v}" for k, v in context.items())
        parts.append(f": {log_data['message']}")
        line = " ".join(parts)
        if "exception" in log_data:
            line = f"{line}\n{log_data['exception']}"
        return line


class TenantLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that stamps tenant_id / request_id / user_id on records.

    Usage:
        logger = get_tenant_logger(__name__, tenant_id=ctx.tenant_id)
        logger.info("Resolved features", extra={"features": ctx.access.features})
    """

    def __init__(
        self,
        logger: logging.Logger,
        tenant_id: Optional[str] = None,
        request_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.tenant_id = tenant_id
        self.request_id = request_id
        self.user_id = user_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        tenant_id = kwargs.pop("tenant_id", self.tenant_id)
        request_id = kwargs.pop("request_id", self.request_id)
        user_id = kwargs.pop("user_id", self.user_id)

        extra = dict(kwargs.get("extra") or {})
        if tenant_id:
            extra["tenant_id"] = tenant_id
        if request_id:
            extra["request_id"] = request_id
        if user_id:
            extra["user_id"] = user_id
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[TenantCoreConfig] = None,
    json_format: Optional[bool] = None,
    redact_secrets: bool = True,
) -> None:
    """Configure the root logger from config.

    Args:
        config: TenantCoreConfig instance (if None, loads from environment)
        json_format: Force JSON on/off (default: ``config.log_json``)
        redact_secrets: Whether to redact secrets (default: True)
    """
    if config is None:
        from .config import load_config_from_env
        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        TenantFormatter(
            include_context=True,
            json_format=config.log_json if json_format is None else json_format,
            redact_secrets=redact_secrets,
        )
    )
    root_logger.addHandler(console_handler)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_tenant_logger(
    name: str,
    tenant_id: Optional[str] = None,
    request_id: Optional[str] = None,
    user_id: Optional[str] = None,
) -> TenantLoggerAdapter:
    """Get a logger adapter bound to a tenant/request.

    Example:
        logger = get_tenant_logger(__name__, tenant_id="t-1", request_id="req-9")
        logger.warning("Route denied", extra={"route": route})
    """
    logger = logging.getLogger(name)
    return TenantLoggerAdapter(logger, tenant_id=tenant_id, request_id=request_id, user_id=user_id)


__all__ = [
    "safe_preview",
    "redact_secrets",
    "safe_log_value",
    "TenantFormatter",
    "TenantLoggerAdapter",
    "setup_logging",
    "get_tenant_logger",
]
