"""
In-memory medicine reminder store.

Reminders are inventory only: nothing is scheduled or fired, and the list
is lost when the process exits. FastAPI runs sync endpoints in a thread
pool, so every operation holds the store lock.
"""
import threading
import time
from typing import List, Optional
from loguru import logger

from healthbot.schemas import Reminder
from healthbot.utils import utc_now_iso

DEFAULT_DOSAGE = "1 tablet"


class MissingFieldsError(ValueError):
    """Raised when a reminder is created without its required fields."""

    def __init__(self, fields: List[str]):
        self.fields = fields
        super().__init__("Medicine name, frequency, and time are required")


class ReminderStore:
    def __init__(self, clock=time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._reminders: List[Reminder] = []
        self._last_id = 0

    def _next_id(self) -> str:
        # Millisecond clock token, bumped when the clock has not advanced
        token = max(int(self._clock() * 1000), self._last_id + 1)
        self._last_id = token
        return str(token)

    def create(
        self,
        medicine_name: Optional[str],
        frequency: Optional[str],
        time_of_day: Optional[str],
        dosage: Optional[str] = None,
        start_date: Optional[str] = None,
    ) -> Reminder:
        missing = [
            name for name, value in (
                ("medicineName", medicine_name),
                ("frequency", frequency),
                ("time", time_of_day),
            ) if not value
        ]
        if missing:
            raise MissingFieldsError(missing)

        now = utc_now_iso()
        with self._lock:
            reminder = Reminder(
                id=self._next_id(),
                medicine_name=medicine_name,
                dosage=dosage or DEFAULT_DOSAGE,
                frequency=frequency,
                time=time_of_day,
                start_date=start_date or now,
                active=True,
                created_at=now,
            )
            self._reminders.append(reminder)
        logger.info("Reminder {} created for {}", reminder.id, reminder.medicine_name)
        return reminder

    def delete(self, reminder_id: str) -> int:
        """Remove every reminder with this id. Returns how many were removed."""
        with self._lock:
            before = len(self._reminders)
            self._reminders = [r for r in self._reminders if r.id != reminder_id]
            removed = before - len(self._reminders)
        logger.info("Reminder delete {}: {} removed", reminder_id, removed)
        return removed

    def list(self) -> List[Reminder]:
        with self._lock:
            return list(self._reminders)

    def clear(self) -> None:
        with self._lock:
            self._reminders = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._reminders)
