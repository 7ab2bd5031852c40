import logging
import os
import tempfile

# Keep stores and logs out of the working tree; must run before rxreminder is imported
_scratch = tempfile.mkdtemp(prefix="rxreminder-tests-")
os.environ.setdefault("RXREMINDER_DATA_DIR", os.path.join(_scratch, "data"))
os.environ.setdefault("OUTPUT_DIR", os.path.join(_scratch, "results"))
os.environ.setdefault("LOG_DIR", os.path.join(_scratch, "logs"))

import pytest

from rxreminder.core.config import Config
from rxreminder.core.reminder_manager import ReminderManager
from rxreminder.services.reminder_store import InMemoryRepository
from rxreminder.types.prescription import Medication, SavedPrescription


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("rxreminder")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "DATA_DIR", tmp_path / "data")
    monkeypatch.setattr(Config, "OUTPUT_DIR", tmp_path / "results")
    return tmp_path / "data"


@pytest.fixture
def manager():
    return ReminderManager(InMemoryRepository(), InMemoryRepository())


@pytest.fixture
def prescription():
    return SavedPrescription(
        id="1717200000000",
        name="Fever visit",
        patient_name="Asha",
        doctor_name="Dr. Rao",
        date="01/06/2024",
        diagnosis="Viral fever",
        medications=[
            Medication(name="Paracetamol 650", dosage="1 tab", frequency="1-0-1", duration="5 days"),
            Medication(name="Cetirizine 10", dosage="1 tab", frequency="HS at night", duration="2 weeks"),
            Medication(name="ORS", dosage="1 sachet", frequency="as needed", duration="N/A"),
        ],
    )
