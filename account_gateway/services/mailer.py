"""Outbound mail, outbox style.

Appends one JSON line per message to ``settings.MAIL_OUTBOX_FILE`` and emits a
structured Loguru record; a relay process picks the outbox up.  Uses plain
``open(path, "a")`` to avoid the Path.write_text *append* gotcha.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from loguru import logger

from account_gateway.config import settings


class EmailTemplate(str, Enum):
    ONBOARD = "onboard-email"
    VERIFY = "verify-email"


def send_email(user_id: str, to_email: str | None, template: EmailTemplate) -> bool:  # noqa: D401
    """Queue *template* for *to_email*; return ``False`` when nothing was queued."""

    if not to_email:
        logger.warning("No address on file for user={}; skipping {}", user_id, template.value)
        return False

    event = {
        "ts": datetime.now(tz=timezone.utc).isoformat(),
        "user": user_id,
        "to": to_email,
        "template": template.value,
    }

    # Log for console/SIEM collectors
    logger.bind(mail=True).info("{event}", event=event)

    outbox = Path(settings.MAIL_OUTBOX_FILE).resolve()
    try:
        outbox.parent.mkdir(parents=True, exist_ok=True)
        with outbox.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(event) + "\n")
    except OSError:
        logger.exception("Failed to write mail outbox {}", outbox)
        return False
    return True
