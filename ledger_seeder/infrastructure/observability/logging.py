"""Structured JSON logging for seeding runs"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List

from pythonjsonlogger import jsonlogger

from ledger_seeder.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


class LoggingProgress:
    """Progress observer that writes each event as a structured log line"""

    def __init__(self, run_id: str):
        self.run_id = run_id

    def on_progress(self, phase: str, message: str, percent: float) -> None:
        logging.info(
            message,
            extra={"run_id": self.run_id, "step": "progress", "phase": phase, "percent": round(percent, 1)},
        )


def log_run(
    run_id: str,
    success: bool,
    months: int,
    item_count: int,
    generated: int,
    created: int,
    dropped: int,
    duration_ms: float,
    error: str | None = None,
    created_accounts: List[str] | None = None,
) -> None:
    """Log structured run outcome for analysis"""
    logging.info(
        "Seeding run completed",
        extra={
            "run_id": run_id,
            "step": "run_complete",
            "outcome": "success" if success else "failure",
            "months": months,
            "item_count": item_count,
            "generated": generated,
            "created": created,
            "dropped": dropped,
            "duration_ms": duration_ms,
            "error": error,
            "created_accounts": created_accounts or [],
        },
    )
