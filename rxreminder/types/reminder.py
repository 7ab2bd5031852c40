"""Reminder data models"""
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class Reminder(BaseModel):
    """Daily medication reminder bound to one prescription"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="'{prescription_id}-{medication_name}'")
    medication_name: str
    prescription_name: str = Field(..., description="Context for the user")
    times: List[str] = Field(default_factory=list, description="HH:MM times, e.g. ['09:00', '21:00']")
    frequency: str = Field("", description="Frequency text the times were derived from")


class RefillReminder(BaseModel):
    """Refill reminder, at most one per prescription"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Prescription id")
    prescription_name: str
    refill_date: str = Field(..., description="ISO date string YYYY-MM-DD")


class ReminderAlert(BaseModel):
    """Alert raised when a reminder time comes up"""
    reminder_id: str
    time: str
    title: str
    body: str
