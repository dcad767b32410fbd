"""Counter entity — the single persisted integer the service manages."""

from dataclasses import dataclass
from datetime import datetime

COUNTER_ID = 1


@dataclass
class Counter:
    id: int
    value: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
