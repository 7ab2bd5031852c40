"""Reminder lifecycle manager"""
import logging
from datetime import date, datetime
from typing import List, Optional

from rxreminder.core.config import Config
from rxreminder.core.exceptions import (
    DuplicateReminderError,
    PrescriptionNotSavedError,
    UnresolvedScheduleError,
)
from rxreminder.services.duration_resolver import resolve_refill_date
from rxreminder.services.frequency_parser import parse_frequency
from rxreminder.services.reminder_store import (
    InMemoryRepository,
    JsonFileRepository,
    ReminderRepository,
)
from rxreminder.types.prescription import Medication, SavedPrescription
from rxreminder.types.reminder import RefillReminder, Reminder, ReminderAlert

logger = logging.getLogger(__name__)


def reminder_id(prescription_id: str, medication_name: str) -> str:
    return f"{prescription_id}-{medication_name}"


class ReminderManager:
    """Creates, lists and removes medication and refill reminders"""

    def __init__(
        self,
        reminders: ReminderRepository[Reminder],
        refill_reminders: ReminderRepository[RefillReminder],
        prescriptions: Optional[ReminderRepository[SavedPrescription]] = None,
    ):
        """
        Initialize the manager

        Args:
            reminders: Repository for daily medication reminders
            refill_reminders: Repository for refill reminders
            prescriptions: Repository for saved prescriptions (in memory if omitted)
        """
        self.reminders = reminders
        self.refill_reminders = refill_reminders
        self.prescriptions = prescriptions if prescriptions is not None else InMemoryRepository()

    @classmethod
    def from_config(cls) -> "ReminderManager":
        """Manager backed by the JSON files configured in Config"""
        return cls(
            JsonFileRepository(Config.reminders_path(), Reminder),
            JsonFileRepository(Config.refill_reminders_path(), RefillReminder),
            JsonFileRepository(Config.prescriptions_path(), SavedPrescription),
        )

    # Saved prescriptions

    def list_prescriptions(self) -> List[SavedPrescription]:
        return self.prescriptions.load()

    def get_prescription(self, prescription_id: str) -> Optional[SavedPrescription]:
        return next((p for p in self.prescriptions.load() if p.id == prescription_id), None)

    def save_prescription(self, prescription: SavedPrescription) -> Optional[RefillReminder]:
        """
        Save or update a prescription and schedule its refill reminder

        A prescription with the same id is replaced in place. The refill
        reminder is only created once per prescription id.

        Returns:
            The refill reminder created by this save, or None
        """
        existing = self.prescriptions.load()
        index = next((i for i, p in enumerate(existing) if p.id == prescription.id), None)
        if index is None:
            existing.append(prescription)
        else:
            existing[index] = prescription
        self.prescriptions.save(existing)
        logger.info("Prescription \"%s\" saved", prescription.name)

        return self.set_refill_reminder(prescription)

    def delete_prescription(self, prescription_id: str) -> bool:
        existing = self.prescriptions.load()
        remaining = [p for p in existing if p.id != prescription_id]
        if len(remaining) == len(existing):
            return False
        self.prescriptions.save(remaining)
        logger.info("Prescription %s deleted", prescription_id)
        return True

    # Medication reminders

    def list_reminders(self) -> List[Reminder]:
        return self.reminders.load()

    def set_reminder(
        self,
        prescription_id: Optional[str],
        prescription_name: Optional[str],
        medication: Medication,
    ) -> Reminder:
        """
        Create a daily reminder for one medication

        Args:
            prescription_id: Id of the saved prescription the medication belongs to
            prescription_name: Name shown in alerts when the prescription is
                not in the store; a saved prescription's own name wins
            medication: Medication to schedule

        Returns:
            The new reminder

        Raises:
            PrescriptionNotSavedError: prescription has no id yet
            DuplicateReminderError: a reminder for this medication already exists
            UnresolvedScheduleError: the frequency matched no known pattern
        """
        if not prescription_id:
            raise PrescriptionNotSavedError()

        new_id = reminder_id(prescription_id, medication.name)
        existing = self.reminders.load()
        if any(r.id == new_id for r in existing):
            raise DuplicateReminderError(medication.name)

        times = parse_frequency(medication.frequency)
        if not times:
            raise UnresolvedScheduleError(medication.frequency)

        saved = self.get_prescription(prescription_id)
        if saved is not None:
            prescription_name = saved.name

        reminder = Reminder(
            id=new_id,
            medication_name=medication.name,
            prescription_name=prescription_name or Config.get("defaults", "untitled_prescription", default="Untitled"),
            times=times,
            frequency=medication.frequency,
        )
        self.reminders.save(existing + [reminder])
        logger.info("Reminder set for %s at %s", medication.name, ", ".join(times))
        return reminder

    def delete_reminder(self, reminder_id: str) -> bool:
        existing = self.reminders.load()
        remaining = [r for r in existing if r.id != reminder_id]
        if len(remaining) == len(existing):
            return False
        self.reminders.save(remaining)
        logger.info("Reminder %s removed", reminder_id)
        return True

    def due_reminders(self, at: Optional[datetime] = None) -> List[ReminderAlert]:
        """Alerts for reminders scheduled at the given minute (defaults to now)"""
        current_time = (at or datetime.now()).strftime("%H:%M")
        return [
            ReminderAlert(
                reminder_id=r.id,
                time=current_time,
                title=f"Time for your medication: {r.medication_name}",
                body=f"From prescription: {r.prescription_name}. Don't forget!",
            )
            for r in self.reminders.load()
            if current_time in r.times
        ]

    # Refill reminders

    def list_refill_reminders(self) -> List[RefillReminder]:
        """Refill reminders, soonest first"""
        return sorted(self.refill_reminders.load(), key=lambda r: r.refill_date)

    def set_refill_reminder(self, prescription: SavedPrescription) -> Optional[RefillReminder]:
        """
        Schedule the refill reminder for a saved prescription

        Saving the same prescription again does not add a second reminder.

        Returns:
            The new refill reminder, or None if no refill date could be
            resolved or one is already scheduled for this prescription
        """
        existing = self.refill_reminders.load()
        if any(r.id == prescription.id for r in existing):
            return None

        refill_date = resolve_refill_date(prescription.date, prescription.medications)
        if not refill_date:
            logger.debug("No refill date for prescription %s", prescription.id)
            return None

        refill = RefillReminder(
            id=prescription.id,
            prescription_name=prescription.name,
            refill_date=refill_date,
        )
        self.refill_reminders.save(existing + [refill])
        logger.info("Refill reminder scheduled for %s on %s", prescription.name, refill_date)
        return refill

    def delete_refill_reminder(self, reminder_id: str) -> bool:
        existing = self.refill_reminders.load()
        remaining = [r for r in existing if r.id != reminder_id]
        if len(remaining) == len(existing):
            return False
        self.refill_reminders.save(remaining)
        logger.info("Refill reminder %s removed", reminder_id)
        return True

    def due_refills(self, on: Optional[date] = None) -> List[RefillReminder]:
        """Refill reminders due on or before the given day (defaults to today)"""
        cutoff = (on or date.today()).isoformat()
        return [r for r in self.list_refill_reminders() if r.refill_date <= cutoff]
