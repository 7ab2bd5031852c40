"""Pydantic schemas for API requests/responses"""
from typing import List, Optional
from pydantic import BaseModel, Field

from rxreminder.core.config import Config
from rxreminder.types.prescription import Medication, SavedPrescription
from rxreminder.types.reminder import RefillReminder


class ScheduleRequest(BaseModel):
    """Frequency text to resolve"""
    frequency: str = ""


class ScheduleResponse(BaseModel):
    """Daily times resolved from a frequency"""
    frequency: str
    times: List[str]
    resolved: bool


class RefillDateRequest(BaseModel):
    """Prescription date and medications to resolve a refill date from"""
    prescription_date: str = ""
    medications: List[Medication] = Field(default_factory=list)


class RefillDateResponse(BaseModel):
    """Resolved refill date"""
    refill_date: Optional[str] = None
    resolved: bool


class CreateReminderRequest(BaseModel):
    """Reminder for one medication of a saved prescription"""
    prescription_id: Optional[str] = None
    prescription_name: Optional[str] = None
    medication: Medication


class CreateRefillReminderRequest(BaseModel):
    """Saved prescription to schedule a refill reminder for"""
    prescription: SavedPrescription


class RefillReminderResponse(BaseModel):
    """Outcome of scheduling a refill reminder"""
    scheduled: bool
    refill_reminder: Optional[RefillReminder] = None


class SavePrescriptionResponse(BaseModel):
    """Saved prescription and the refill reminder its save created, if any"""
    prescription: SavedPrescription
    refill_reminder: Optional[RefillReminder] = None


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: Optional[str] = Field(default_factory=lambda: Config.get("api", "version", default="1.0.0"))
