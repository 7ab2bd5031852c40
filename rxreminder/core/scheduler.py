"""Prescription scheduling"""
import json
import logging
import time
from pathlib import Path
from typing import List, Optional, Union

from rxreminder.core.reminder_manager import ReminderManager
from rxreminder.services.duration_resolver import resolve_refill_date
from rxreminder.services.frequency_parser import parse_frequency
from rxreminder.types.prescription import (
    MedicationSchedule,
    PrescriptionSchedule,
    ProcessingResult,
    SavedPrescription,
)

logger = logging.getLogger(__name__)


def schedule_prescription(prescription: SavedPrescription) -> PrescriptionSchedule:
    """Resolve daily times for every medication and the refill date"""
    schedules = []
    unresolved = []
    for med in prescription.medications:
        times = parse_frequency(med.frequency)
        if times:
            schedules.append(MedicationSchedule(name=med.name, frequency=med.frequency, times=times))
        else:
            unresolved.append(med.name)

    return PrescriptionSchedule(
        prescription_id=prescription.id,
        prescription_name=prescription.name,
        schedules=schedules,
        unresolved=unresolved,
        refill_date=resolve_refill_date(prescription.date, prescription.medications),
    )


class PrescriptionScheduler:
    """Schedules saved prescriptions read from JSON files"""

    def __init__(self, manager: Optional[ReminderManager] = None):
        """
        Initialize the scheduler

        Args:
            manager: When given, every prescription read is saved to its
                store, which also schedules its refill reminder
        """
        self.manager = manager

    def process_file(self, path: Union[Path, str]) -> ProcessingResult:
        """
        Schedule a single saved-prescription JSON file

        Args:
            path: Path to the JSON file

        Returns:
            ProcessingResult with the schedule or an error
        """
        start_time = time.time()
        path = Path(path)

        try:
            with open(path, "r", encoding="utf-8") as f:
                prescription = SavedPrescription.model_validate(json.load(f))

            schedule = schedule_prescription(prescription).model_copy(update={"source_file": path.name})

            if self.manager is not None:
                self.manager.save_prescription(prescription)

            return ProcessingResult(
                success=True,
                schedule=schedule,
                processing_time=time.time() - start_time,
                source_file=path.name,
            )

        except (OSError, ValueError) as e:
            # ValueError covers bad JSON, bad encoding and failed validation
            logger.warning("Could not schedule %s: %s", path, e)
            return ProcessingResult(
                success=False,
                error=str(e),
                processing_time=time.time() - start_time,
                source_file=path.name,
            )

    @staticmethod
    def is_prescription_file(file_path: Path) -> bool:
        return file_path.suffix.lower() == ".json"

    @staticmethod
    def find_prescriptions(directory: Path, recursive: bool = False) -> List[Path]:
        """
        Find all saved-prescription JSON files in a directory

        Args:
            directory: Directory to search
            recursive: Whether to search recursively

        Returns:
            Sorted list of file paths
        """
        directory = Path(directory)
        if not directory.exists():
            return []

        pattern = "**/*" if recursive else "*"
        files = list(directory.glob(f"{pattern}.json")) + list(directory.glob(f"{pattern}.JSON"))
        return sorted(set(files))
