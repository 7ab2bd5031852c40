"""Prescription data models"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Medication(BaseModel):
    """A single medication line on a prescription"""
    model_config = ConfigDict(frozen=True)

    name: str = Field("", description="Medication name (e.g., 'Paracetamol 500')")
    dosage: str = Field("", description="Dosage per intake (e.g., '1 tablet', '5 ml')")
    frequency: str = Field("", description="How often to take (e.g., '1-0-1', 'BD', 'Twice a day')")
    duration: str = Field("", description="How long to take (e.g., '5 days', '2 weeks', '1 month')")


class Prescription(BaseModel):
    """Prescription as extracted or edited upstream"""
    model_config = ConfigDict(frozen=True)

    patient_name: str = Field("", description="Patient's name")
    doctor_name: str = Field("", description="Doctor's name")
    date: str = Field("", description="Prescription date as written (no guaranteed format)")
    diagnosis: str = Field("", description="Diagnosis, if noted")
    medications: List[Medication] = Field(default_factory=list, description="List of medications")


class SavedPrescription(Prescription):
    """Prescription persisted under a user-defined name"""
    id: str = Field(..., description="Unique identifier (e.g., save timestamp)")
    name: str = Field(..., description="User-defined name for the prescription")


class MedicationSchedule(BaseModel):
    """Daily times resolved for one medication line"""
    name: str
    frequency: str = ""
    times: List[str] = Field(default_factory=list, description="HH:MM times")


class PrescriptionSchedule(BaseModel):
    """Resolved schedule for every medication of one prescription"""
    prescription_id: Optional[str] = None
    prescription_name: Optional[str] = None
    schedules: List[MedicationSchedule] = Field(default_factory=list, description="One entry per resolved medication, in prescription order")
    unresolved: List[str] = Field(default_factory=list, description="Medications whose frequency matched no pattern")
    refill_date: Optional[str] = Field(None, description="Refill due date (YYYY-MM-DD) or None")
    source_file: Optional[str] = Field(None, description="Original filename if available")


class ProcessingResult(BaseModel):
    """Result of scheduling one saved prescription"""
    success: bool
    schedule: Optional[PrescriptionSchedule] = None
    error: Optional[str] = None
    processing_time: Optional[float] = None  # seconds
    source_file: Optional[str] = None
