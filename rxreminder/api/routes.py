"""FastAPI routes"""
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from rxreminder.api.schemas import (
    CreateRefillReminderRequest,
    CreateReminderRequest,
    HealthResponse,
    RefillDateRequest,
    RefillDateResponse,
    RefillReminderResponse,
    SavePrescriptionResponse,
    ScheduleRequest,
    ScheduleResponse,
)
from rxreminder.core.config import Config
from rxreminder.core.exceptions import (
    DuplicateReminderError,
    PrescriptionNotSavedError,
    UnresolvedScheduleError,
)
from rxreminder.core.reminder_manager import ReminderManager
from rxreminder.services.duration_resolver import resolve_refill_date
from rxreminder.services.frequency_parser import parse_frequency
from rxreminder.types.prescription import SavedPrescription
from rxreminder.types.reminder import RefillReminder, Reminder, ReminderAlert

router = APIRouter()

# Load endpoint paths from config
_health_endpoint = Config.get("api", "endpoints", "health", default="/health")
_schedule_endpoint = Config.get("api", "endpoints", "schedule", default="/api/v1/schedule")
_refill_date_endpoint = Config.get("api", "endpoints", "refill_date", default="/api/v1/refill-date")
_reminders_endpoint = Config.get("api", "endpoints", "reminders", default="/api/v1/reminders")
_refill_reminders_endpoint = Config.get("api", "endpoints", "refill_reminders", default="/api/v1/refill-reminders")
_prescriptions_endpoint = Config.get("api", "endpoints", "prescriptions", default="/api/v1/prescriptions")

_manager: Optional[ReminderManager] = None


def get_manager() -> ReminderManager:
    """Reminder manager backed by the configured JSON stores"""
    global _manager
    if _manager is None:
        _manager = ReminderManager.from_config()
    return _manager


@router.get(_health_endpoint, response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(status=Config.get("api", "health_status", default="ok"))


@router.post(_schedule_endpoint, response_model=ScheduleResponse)
async def schedule(request: ScheduleRequest):
    """Resolve the daily reminder times for a frequency"""
    times = parse_frequency(request.frequency)
    return ScheduleResponse(frequency=request.frequency, times=times, resolved=bool(times))


@router.post(_refill_date_endpoint, response_model=RefillDateResponse)
async def refill_date(request: RefillDateRequest):
    """Resolve the refill date for a prescription's medications"""
    resolved = resolve_refill_date(request.prescription_date, request.medications)
    return RefillDateResponse(refill_date=resolved, resolved=resolved is not None)


@router.get(_reminders_endpoint, response_model=List[Reminder])
async def list_reminders(manager: ReminderManager = Depends(get_manager)):
    return manager.list_reminders()


@router.post(_reminders_endpoint, response_model=Reminder, status_code=201)
async def create_reminder(request: CreateReminderRequest, manager: ReminderManager = Depends(get_manager)):
    """
    Create a daily reminder for one medication

    Returns:
        The created reminder
    """
    try:
        return manager.set_reminder(request.prescription_id, request.prescription_name, request.medication)
    except PrescriptionNotSavedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateReminderError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UnresolvedScheduleError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get(_reminders_endpoint + "/due", response_model=List[ReminderAlert])
async def due_reminders(
    at: Optional[str] = Query(None, description="HH:MM, defaults to the current time"),
    manager: ReminderManager = Depends(get_manager),
):
    """Alerts for reminders scheduled at the given minute"""
    when = None
    if at:
        try:
            when = datetime.strptime(at, "%H:%M")
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid time '{at}'. Expected HH:MM.")
    return manager.due_reminders(when)


@router.delete(_reminders_endpoint + "/{reminder_id:path}", status_code=204)
async def delete_reminder(reminder_id: str, manager: ReminderManager = Depends(get_manager)):
    if not manager.delete_reminder(reminder_id):
        raise HTTPException(status_code=404, detail=f"Reminder not found: {reminder_id}")


@router.get(_refill_reminders_endpoint, response_model=List[RefillReminder])
async def list_refill_reminders(
    due_on: Optional[date] = Query(None, description="Only reminders due on or before this date"),
    manager: ReminderManager = Depends(get_manager),
):
    if due_on is not None:
        return manager.due_refills(due_on)
    return manager.list_refill_reminders()


@router.post(_refill_reminders_endpoint, response_model=RefillReminderResponse)
async def create_refill_reminder(
    request: CreateRefillReminderRequest,
    manager: ReminderManager = Depends(get_manager),
):
    """
    Schedule the refill reminder for a saved prescription

    Saving a prescription twice does not create a second reminder.
    """
    refill = manager.set_refill_reminder(request.prescription)
    return RefillReminderResponse(scheduled=refill is not None, refill_reminder=refill)


@router.delete(_refill_reminders_endpoint + "/{reminder_id:path}", status_code=204)
async def delete_refill_reminder(reminder_id: str, manager: ReminderManager = Depends(get_manager)):
    if not manager.delete_refill_reminder(reminder_id):
        raise HTTPException(status_code=404, detail=f"Refill reminder not found: {reminder_id}")


@router.get(_prescriptions_endpoint, response_model=List[SavedPrescription])
async def list_prescriptions(manager: ReminderManager = Depends(get_manager)):
    return manager.list_prescriptions()


@router.post(_prescriptions_endpoint, response_model=SavePrescriptionResponse)
async def save_prescription(prescription: SavedPrescription, manager: ReminderManager = Depends(get_manager)):
    """
    Save or update a prescription

    The first save of a prescription also schedules its refill reminder.
    """
    refill = manager.save_prescription(prescription)
    return SavePrescriptionResponse(prescription=prescription, refill_reminder=refill)


@router.get(_prescriptions_endpoint + "/{prescription_id:path}", response_model=SavedPrescription)
async def get_prescription(prescription_id: str, manager: ReminderManager = Depends(get_manager)):
    prescription = manager.get_prescription(prescription_id)
    if prescription is None:
        raise HTTPException(status_code=404, detail=f"Prescription not found: {prescription_id}")
    return prescription


@router.delete(_prescriptions_endpoint + "/{prescription_id:path}", status_code=204)
async def delete_prescription(prescription_id: str, manager: ReminderManager = Depends(get_manager)):
    if not manager.delete_prescription(prescription_id):
        raise HTTPException(status_code=404, detail=f"Prescription not found: {prescription_id}")
