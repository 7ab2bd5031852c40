"""Reminder lifecycle errors"""


class ReminderError(ValueError):
    """Base class for reminder requests that cannot be fulfilled"""


class PrescriptionNotSavedError(ReminderError):
    def __init__(self):
        super().__init__("Please save the prescription before setting reminders.")


class DuplicateReminderError(ReminderError):
    def __init__(self, medication_name: str):
        self.medication_name = medication_name
        super().__init__(f"Reminder already exists for {medication_name}.")


class UnresolvedScheduleError(ReminderError):
    def __init__(self, frequency: str):
        self.frequency = frequency
        super().__init__(f'Could not determine a schedule for "{frequency}".')
