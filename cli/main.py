"""CLI tool for medication schedules and refill reminders"""
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple
import click
from tqdm import tqdm

from rxreminder.core.config import Config
from rxreminder.core.exceptions import ReminderError
from rxreminder.core.logger import setup_logging
from rxreminder.core.reminder_manager import ReminderManager
from rxreminder.core.scheduler import PrescriptionScheduler
from rxreminder.services.duration_resolver import resolve_refill_date
from rxreminder.services.frequency_parser import parse_frequency
from rxreminder.services.output_service import OutputService
from rxreminder.types.prescription import Medication, SavedPrescription


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help=f"Logging level (default: {Config.LOG_LEVEL})"
)
def cli(log_level: Optional[str]):
    """Medication schedule and refill reminder tools."""
    try:
        Config.validate()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    setup_logging(log_level, log_to_file=False)


@cli.command()
@click.argument("frequency")
def schedule(frequency: str):
    """Print the daily reminder times for FREQUENCY (e.g. '1-0-1', 'BD')."""
    times = parse_frequency(frequency)
    if not times:
        click.echo(f'Could not determine a schedule for "{frequency}".', err=True)
        sys.exit(1)
    click.echo(" ".join(times))


@cli.command()
@click.option("--date", "-d", "prescription_date", required=True, help="Prescription date (e.g. 01/06/2024)")
@click.option("--duration", "-D", "durations", multiple=True, required=True, help="Medication duration, repeatable")
def refill(prescription_date: str, durations: Tuple[str, ...]):
    """Print the refill due date for a prescription."""
    medications = [Medication(duration=d) for d in durations]
    refill_date = resolve_refill_date(prescription_date, medications)
    if not refill_date:
        click.echo("No refill date could be determined.", err=True)
        sys.exit(1)
    click.echo(refill_date)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True))
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Output directory for results (default: ./results)"
)
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    help="Process directories recursively"
)
@click.option(
    "--save",
    is_flag=True,
    help="Save prescriptions to the configured store, scheduling their refill reminders"
)
def batch(input_path: str, output: Optional[str], recursive: bool, save: bool):
    """
    Schedule saved prescriptions from a file or directory.

    INPUT_PATH can be a single JSON file or a directory of JSON files.
    """
    input_path_obj = Path(input_path)
    output_dir = Path(output) if output else Config.OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)

    if input_path_obj.is_file():
        files = [input_path_obj] if PrescriptionScheduler.is_prescription_file(input_path_obj) else []
    else:
        files = PrescriptionScheduler.find_prescriptions(input_path_obj, recursive=recursive)

    if not files:
        click.echo(f"No prescription files found in: {input_path}", err=True)
        sys.exit(1)

    click.echo(f"Found {len(files)} prescription(s) to schedule")

    scheduler = PrescriptionScheduler(ReminderManager.from_config() if save else None)
    results = []

    with tqdm(total=len(files), desc="Scheduling") as pbar:
        for path in files:
            result = scheduler.process_file(path)
            results.append(result)
            OutputService.save_result(result, output_dir, path.name)

            if result.success:
                pbar.set_postfix_str(f"✓ {path.name}")
            else:
                pbar.set_postfix_str(f"✗ {path.name}: {result.error}")
            pbar.update(1)

    summary_path = OutputService.save_batch_summary(results, output_dir)

    successful = sum(1 for r in results if r.success)
    with_refill = sum(1 for r in results if r.success and r.schedule.refill_date)

    click.echo(f"\n{'='*50}")
    click.echo("Scheduling complete!")
    click.echo(f"Total prescriptions: {len(results)}")
    click.echo(f"Successful: {successful}")
    click.echo(f"Failed: {len(results) - successful}")
    click.echo(f"With refill date: {with_refill}")
    click.echo(f"Summary saved to: {summary_path}")
    click.echo(f"{'='*50}")


@cli.group()
def prescriptions():
    """Manage saved prescriptions."""


@prescriptions.command("save")
@click.argument("prescription_file", type=click.Path(exists=True, dir_okay=False))
def save_prescription(prescription_file: str):
    """Save a prescription JSON file, scheduling its refill reminder."""
    try:
        prescription = SavedPrescription.model_validate_json(Path(prescription_file).read_bytes())
    except ValueError as e:
        click.echo(f"Error: invalid prescription file: {e}", err=True)
        sys.exit(1)

    refill = ReminderManager.from_config().save_prescription(prescription)
    click.echo(f'Prescription "{prescription.name}" saved!')
    if refill:
        click.echo(f"Refill reminder scheduled for {refill.refill_date}")


@prescriptions.command("list")
def list_prescriptions():
    items = ReminderManager.from_config().list_prescriptions()
    if not items:
        click.echo("No saved prescriptions.")
        return
    for p in items:
        click.echo(f"{p.id}\t{p.name}\t{p.date}\t{len(p.medications)} medication(s)")


@prescriptions.command("delete")
@click.argument("prescription_id")
def delete_prescription(prescription_id: str):
    if not ReminderManager.from_config().delete_prescription(prescription_id):
        click.echo(f"Prescription not found: {prescription_id}", err=True)
        sys.exit(1)
    click.echo("Prescription deleted.")


@cli.group()
def reminders():
    """Manage daily medication reminders."""


@reminders.command("list")
def list_reminders():
    items = ReminderManager.from_config().list_reminders()
    if not items:
        click.echo("No reminders set.")
        return
    for r in items:
        click.echo(f"{r.id}\t{r.medication_name}\t{', '.join(r.times)}\t({r.prescription_name})")


@reminders.command("add")
@click.option("--prescription-id", required=True)
@click.option("--prescription-name", default=None)
@click.option("--name", "medication_name", required=True, help="Medication name")
@click.option("--frequency", required=True, help="Frequency as written (e.g. '1-0-1')")
@click.option("--dosage", default="")
@click.option("--duration", default="")
def add_reminder(prescription_id, prescription_name, medication_name, frequency, dosage, duration):
    """Set a reminder for one medication."""
    medication = Medication(name=medication_name, dosage=dosage, frequency=frequency, duration=duration)
    try:
        reminder = ReminderManager.from_config().set_reminder(prescription_id, prescription_name, medication)
    except ReminderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Reminder set for {reminder.medication_name} at {', '.join(reminder.times)}")


@reminders.command("delete")
@click.argument("reminder_id")
def delete_reminder(reminder_id: str):
    if not ReminderManager.from_config().delete_reminder(reminder_id):
        click.echo(f"Reminder not found: {reminder_id}", err=True)
        sys.exit(1)
    click.echo("Reminder removed.")


@cli.group()
def refills():
    """Manage refill reminders."""


@refills.command("list")
@click.option("--due", is_flag=True, help="Only refills due today or earlier")
def list_refills(due: bool):
    manager = ReminderManager.from_config()
    items = manager.due_refills() if due else manager.list_refill_reminders()
    if not items:
        click.echo("No refill reminders.")
        return
    for r in items:
        click.echo(f"{r.refill_date}\t{r.prescription_name}\t({r.id})")


@refills.command("delete")
@click.argument("reminder_id")
def delete_refill(reminder_id: str):
    if not ReminderManager.from_config().delete_refill_reminder(reminder_id):
        click.echo(f"Refill reminder not found: {reminder_id}", err=True)
        sys.exit(1)
    click.echo("Refill reminder removed.")


@cli.command()
@click.option("--at", "at_time", default=None, help="HH:MM to check (default: now)")
def due(at_time: Optional[str]):
    """Show reminders that fire at the given minute."""
    when = None
    if at_time:
        try:
            when = datetime.strptime(at_time, "%H:%M")
        except ValueError:
            click.echo(f"Error: invalid time '{at_time}', expected HH:MM", err=True)
            sys.exit(1)

    alerts = ReminderManager.from_config().due_reminders(when)
    if not alerts:
        click.echo("Nothing due.")
        return
    for alert in alerts:
        click.echo(f"{alert.time}  {alert.title}. {alert.body}")


if __name__ == "__main__":
    cli()
