from rxreminder.core.scheduler import PrescriptionScheduler, schedule_prescription
from rxreminder.types.prescription import Medication, SavedPrescription


def test_schedule_prescription(prescription):
    schedule = schedule_prescription(prescription)

    assert schedule.prescription_id == prescription.id
    assert [(s.name, s.times) for s in schedule.schedules] == [
        ("Paracetamol 650", ["09:00", "21:00"]),
        ("Cetirizine 10", ["21:00"]),
    ]
    assert schedule.unresolved == ["ORS"]
    assert schedule.refill_date == "2024-06-14"


def test_process_file(tmp_path, manager, prescription):
    path = tmp_path / "visit.json"
    path.write_text(prescription.model_dump_json(), encoding="utf-8")

    result = PrescriptionScheduler(manager).process_file(path)

    assert result.success
    assert result.source_file == "visit.json"
    assert result.schedule.source_file == "visit.json"
    assert manager.list_refill_reminders()[0].refill_date == "2024-06-14"
    assert manager.get_prescription(prescription.id) == prescription


def test_process_invalid_file(tmp_path):
    path = tmp_path / "visit.json"
    path.write_text('{"name": "no id"}', encoding="utf-8")

    result = PrescriptionScheduler().process_file(path)

    assert not result.success
    assert result.error
    assert result.schedule is None


def test_find_prescriptions(tmp_path):
    (tmp_path / "a.json").write_text("{}")
    (tmp_path / "notes.txt").write_text("")
    nested = tmp_path / "2024"
    nested.mkdir()
    (nested / "b.json").write_text("{}")

    assert PrescriptionScheduler.find_prescriptions(tmp_path) == [tmp_path / "a.json"]
    assert PrescriptionScheduler.find_prescriptions(tmp_path, recursive=True) == [
        nested / "b.json",
        tmp_path / "a.json",
    ]
    assert PrescriptionScheduler.find_prescriptions(tmp_path / "missing") == []


def test_medications_sharing_a_name_are_all_scheduled():
    prescription = SavedPrescription(
        id="7",
        name="Supplements",
        medications=[
            Medication(name="Vit", frequency="morning"),
            Medication(name="Vit", frequency="night"),
            Medication(frequency="BD"),
            Medication(frequency="TDS"),
        ],
    )

    schedule = schedule_prescription(prescription)

    assert [(s.name, s.times) for s in schedule.schedules] == [
        ("Vit", ["09:00"]),
        ("Vit", ["21:00"]),
        ("", ["09:00", "21:00"]),
        ("", ["09:00", "13:00", "21:00"]),
    ]
    assert schedule.unresolved == []


def test_process_file_with_bad_encoding(tmp_path, manager):
    path = tmp_path / "latin1.json"
    path.write_bytes('{"id": "1", "name": "Café clinic"}'.encode("latin-1"))

    result = PrescriptionScheduler(manager).process_file(path)

    assert not result.success
    assert result.source_file == "latin1.json"
    assert manager.list_prescriptions() == []
