from datetime import date, datetime

import pytest

from rxreminder.core.exceptions import (
    DuplicateReminderError,
    PrescriptionNotSavedError,
    ReminderError,
    UnresolvedScheduleError,
)
from rxreminder.core.reminder_manager import ReminderManager
from rxreminder.services.reminder_store import InMemoryRepository
from rxreminder.types.prescription import Medication, SavedPrescription
from rxreminder.types.reminder import RefillReminder


def test_set_reminder(manager, prescription):
    med = prescription.medications[0]
    reminder = manager.set_reminder(prescription.id, prescription.name, med)

    assert reminder.id == f"{prescription.id}-Paracetamol 650"
    assert reminder.times == ["09:00", "21:00"]
    assert reminder.frequency == "1-0-1"
    assert manager.list_reminders() == [reminder]


def test_set_reminder_requires_saved_prescription(manager, prescription):
    with pytest.raises(PrescriptionNotSavedError):
        manager.set_reminder(None, "Untitled", prescription.medications[0])
    assert manager.list_reminders() == []


def test_duplicate_reminder_is_rejected(manager, prescription):
    med = prescription.medications[0]
    manager.set_reminder(prescription.id, prescription.name, med)

    with pytest.raises(DuplicateReminderError, match="already exists for Paracetamol 650"):
        manager.set_reminder(prescription.id, prescription.name, med)
    assert len(manager.list_reminders()) == 1


def test_unresolved_frequency_creates_nothing(manager, prescription):
    with pytest.raises(UnresolvedScheduleError) as exc_info:
        manager.set_reminder(prescription.id, prescription.name, prescription.medications[2])

    assert isinstance(exc_info.value, ReminderError)
    assert 'schedule for "as needed"' in str(exc_info.value)
    assert manager.list_reminders() == []


def test_missing_prescription_name_defaults(manager):
    reminder = manager.set_reminder("42", None, Medication(name="Vit D", frequency="morning"))
    assert reminder.prescription_name == "Untitled"


def test_delete_reminder(manager, prescription):
    reminder = manager.set_reminder(prescription.id, prescription.name, prescription.medications[0])

    assert manager.delete_reminder(reminder.id) is True
    assert manager.delete_reminder(reminder.id) is False
    assert manager.list_reminders() == []


def test_due_reminders(manager, prescription):
    manager.set_reminder(prescription.id, prescription.name, prescription.medications[0])
    manager.set_reminder(prescription.id, prescription.name, prescription.medications[1])

    alerts = manager.due_reminders(datetime(2024, 6, 2, 21, 0))
    assert [a.reminder_id for a in alerts] == [
        f"{prescription.id}-Paracetamol 650",
        f"{prescription.id}-Cetirizine 10",
    ]
    assert alerts[0].title == "Time for your medication: Paracetamol 650"
    assert alerts[0].body == "From prescription: Fever visit. Don't forget!"

    assert len(manager.due_reminders(datetime(2024, 6, 2, 9, 0))) == 1
    assert manager.due_reminders(datetime(2024, 6, 2, 9, 1)) == []


def test_set_refill_reminder(manager, prescription):
    refill = manager.set_refill_reminder(prescription)

    assert refill == RefillReminder(id=prescription.id, prescription_name="Fever visit", refill_date="2024-06-14")
    assert manager.list_refill_reminders() == [refill]


def test_saving_prescription_twice_keeps_one_refill_reminder(manager, prescription):
    assert manager.set_refill_reminder(prescription) is not None
    assert manager.set_refill_reminder(prescription) is None
    assert len(manager.list_refill_reminders()) == 1


def test_existing_refill_reminder_is_not_replaced(manager, prescription):
    manager.set_refill_reminder(prescription)
    edited = prescription.model_copy(update={"date": "2024-07-01"})

    assert manager.set_refill_reminder(edited) is None
    assert manager.list_refill_reminders()[0].refill_date == "2024-06-14"


def test_unresolvable_prescription_gets_no_refill_reminder(manager):
    undated = SavedPrescription(id="1", name="Old", date="sometime in May", medications=[Medication(duration="5 days")])
    no_duration = SavedPrescription(id="2", name="Open", date="2024-03-10", medications=[Medication(duration="N/A")])

    assert manager.set_refill_reminder(undated) is None
    assert manager.set_refill_reminder(no_duration) is None
    assert manager.list_refill_reminders() == []


def test_refill_reminders_sorted_and_due():
    refills = InMemoryRepository([
        RefillReminder(id="b", prescription_name="B", refill_date="2024-07-01"),
        RefillReminder(id="a", prescription_name="A", refill_date="2024-06-14"),
        RefillReminder(id="c", prescription_name="C", refill_date="2024-08-30"),
    ])
    manager = ReminderManager(InMemoryRepository(), refills)

    assert [r.id for r in manager.list_refill_reminders()] == ["a", "b", "c"]
    assert [r.id for r in manager.due_refills(date(2024, 7, 1))] == ["a", "b"]
    assert manager.due_refills(date(2024, 1, 1)) == []


def test_delete_refill_reminder(manager, prescription):
    manager.set_refill_reminder(prescription)

    assert manager.delete_refill_reminder(prescription.id) is True
    assert manager.delete_refill_reminder(prescription.id) is False
    # a later save schedules it again
    assert manager.set_refill_reminder(prescription) is not None


def test_save_prescription_schedules_refill(manager, prescription):
    refill = manager.save_prescription(prescription)

    assert refill == RefillReminder(id=prescription.id, prescription_name="Fever visit", refill_date="2024-06-14")
    assert manager.list_prescriptions() == [prescription]
    assert manager.get_prescription(prescription.id) == prescription
    assert manager.get_prescription("missing") is None


def test_saving_again_updates_in_place(manager, prescription):
    manager.save_prescription(prescription)
    other = SavedPrescription(id="2", name="Checkup", date="2024-06-10", medications=[Medication(duration="3 days")])
    manager.save_prescription(other)
    renamed = prescription.model_copy(update={"name": "Fever follow-up"})

    assert manager.save_prescription(renamed) is None
    assert [p.name for p in manager.list_prescriptions()] == ["Fever follow-up", "Checkup"]
    assert len(manager.list_refill_reminders()) == 2


def test_delete_prescription_keeps_reminders(manager, prescription):
    manager.save_prescription(prescription)
    manager.set_reminder(prescription.id, prescription.name, prescription.medications[0])

    assert manager.delete_prescription(prescription.id) is True
    assert manager.delete_prescription(prescription.id) is False
    assert manager.list_prescriptions() == []
    assert len(manager.list_reminders()) == 1
    assert len(manager.list_refill_reminders()) == 1


def test_reminder_uses_saved_prescription_name(manager, prescription):
    manager.save_prescription(prescription)

    reminder = manager.set_reminder(prescription.id, None, prescription.medications[1])
    assert reminder.prescription_name == "Fever visit"

    reminder = manager.set_reminder(prescription.id, "Stale name", prescription.medications[0])
    assert reminder.prescription_name == "Fever visit"


def test_medication_name_with_slash(manager, prescription):
    reminder = manager.set_reminder(prescription.id, prescription.name, Medication(name="Syrup 5ml/10ml", frequency="BD"))

    assert reminder.id == f"{prescription.id}-Syrup 5ml/10ml"
    assert manager.delete_reminder(reminder.id) is True
