# journal_api/core/clock.py
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    # colunas DateTime sem timezone guardam UTC
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)
