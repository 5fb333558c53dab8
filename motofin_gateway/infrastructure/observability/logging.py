"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "motofin-gateway", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "motofin-gateway") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_classification(request_id: str, query: str, category: Optional[str], method: Optional[str]) -> None:
    logging.info(
        "Category classified",
        extra={
            "request_id": request_id,
            "step": "classification",
            "query": query,
            "category": category,
            "match_method": method or "none",
        },
    )


def log_quote_issued(
    request_id: str,
    quote_id: str,
    routing_status: str,
    lender_id: Optional[str],
    max_asset_price: int,
    duration_ms: float,
) -> None:
    """Log structured quote outcome for analysis"""
    logging.info(
        "Quotation issued",
        extra={
            "request_id": request_id,
            "quote_id": quote_id,
            "step": "quote_complete",
            "routing_status": routing_status,
            "lender_id": lender_id,
            "max_asset_price": max_asset_price,
            "duration_ms": duration_ms,
        },
    )
