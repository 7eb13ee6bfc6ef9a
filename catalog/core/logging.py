"""
Structured Logging (ECS JSON)

업로드 파이프라인과 인증 흐름이 남기는 extra 필드를 ECS 문서로 정리합니다.

- file_name / content_type / size_bytes → file.*
- account_id / role → user.*
- 그 외 extra (key, namespace, product_id ...) → labels
- password / token / secret / authorization 계열 값은 마스킹
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from opentelemetry import trace

from catalog.core.constants import (
    ECS_FIELD_MAP,
    ECS_VERSION,
    EXCLUDED_LOG_RECORD_ATTRS,
    MASK_MIN_LENGTH,
    MASK_PLACEHOLDER,
    MASK_PRESERVE_PREFIX,
    MASK_PRESERVE_SUFFIX,
    SENSITIVE_FIELD_PATTERNS,
    SERVICE_NAME,
    SERVICE_VERSION,
)

if TYPE_CHECKING:
    from catalog.core.config import Settings

NOISY_LOGGERS = ("uvicorn.access", "botocore", "boto3", "urllib3", "PIL", "asyncio")


def is_sensitive_key(key: str) -> bool:
    key_lower = key.lower()
    return any(pattern in key_lower for pattern in SENSITIVE_FIELD_PATTERNS)


def mask_value(value: Any) -> str:
    """Keep a short prefix/suffix of long values so tokens stay correlatable."""
    text = "" if value is None else str(value)
    if len(text) <= MASK_MIN_LENGTH:
        return MASK_PLACEHOLDER
    return f"{text[:MASK_PRESERVE_PREFIX]}...{text[-MASK_PRESERVE_SUFFIX:]}"


def mask_sensitive_data(data: Any) -> Any:
    if isinstance(data, dict):
        return {
            key: mask_value(value) if is_sensitive_key(str(key)) else mask_sensitive_data(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [mask_sensitive_data(item) for item in data]
    return data


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed through ``extra=`` on the logging call."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in EXCLUDED_LOG_RECORD_ATTRS and not key.startswith("_")
    }


class ECSJsonFormatter(logging.Formatter):
    """One JSON document per record, shaped for Elasticsearch."""

    def __init__(
        self,
        service_name: str = SERVICE_NAME,
        service_version: str = SERVICE_VERSION,
        environment: str = "dev",
    ):
        super().__init__()
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        doc: dict[str, Any] = {
            "@timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "message": record.getMessage(),
            "log.level": record.levelname.lower(),
            "log.logger": record.name,
            "ecs.version": ECS_VERSION,
            "service.name": self.service_name,
            "service.version": self.service_version,
            "service.environment": self.environment,
        }

        ctx = trace.get_current_span().get_span_context()
        if ctx.is_valid:
            doc["trace.id"] = format(ctx.trace_id, "032x")
            doc["span.id"] = format(ctx.span_id, "016x")

        if record.exc_info and record.exc_info[0] is not None:
            doc["error.type"] = record.exc_info[0].__name__
            doc["error.message"] = str(record.exc_info[1])
            doc["error.stack_trace"] = self.formatException(record.exc_info)

        labels = {}
        for key, value in mask_sensitive_data(record_extras(record)).items():
            ecs_field = ECS_FIELD_MAP.get(key)
            if ecs_field is None:
                labels[key] = value
            else:
                doc[ecs_field] = value
        if labels:
            doc["labels"] = labels

        return json.dumps(doc, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line for local runs: message followed by masked extras."""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = mask_sensitive_data(record_extras(record))
        if not extras:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        head, sep, tail = line.partition("\n")
        return f"{head} | {pairs}{sep}{tail}"


def configure_logging(settings: Settings) -> None:
    """Install a single stdout handler on the root logger."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if settings.log_format == "json":
        handler.setFormatter(ECSJsonFormatter(environment=settings.environment))
    else:
        handler.setFormatter(KeyValueFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
