"""
Structured logging utility for gift-order flows
"""
import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional


def get_logger(name: str) -> logging.Logger:
    """Get a module logger"""
    logger = logging.getLogger(name)
    return logger


def log_gift_event(
    logger: logging.Logger,
    step: str,
    order_id: int,
    business_id: Optional[int],
    ok: bool,
    extra: Optional[Dict[str, Any]] = None
):
    """
    Log a gift-order event with structured format:
    {"at":"gift","step":"...","oid":...,"bid":...,"ok":true/false,"extra":{...}}

    Redemption codes must never be passed in ``extra``.
    """
    log_data = {
        "at": "gift",
        "step": step,
        "oid": order_id,
        "bid": business_id,
        "ok": ok,
        "ts": datetime.utcnow().isoformat()
    }
    if extra:
        log_data["extra"] = extra

    log_msg = json.dumps(log_data, separators=(',', ':'))

    if ok:
        logger.info(log_msg)
    else:
        logger.warning(log_msg)
