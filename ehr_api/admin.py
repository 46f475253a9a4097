"""Admin shell: inspect and manage the EHR API from a terminal."""

import argparse
import logging
import sys
from typing import List, Optional

from ehr_api.client import EHRClient, EHRClientError
from ehr_api.config import settings

logger = logging.getLogger(__name__)


def print_stats(client: EHRClient) -> None:
    stats = client.stats()
    print("Collections")
    for key in ("patients", "appointments", "prescriptions", "labResults", "vitals", "medicalRecords"):
        print(f"  {key:<16}{stats[key]:>6}")
    print(f"Appointments today: {stats['appointmentsToday']}")
    for status, count in stats["appointmentsByStatus"].items():
        print(f"  {status:<16}{count:>6}")
    print(f"Active prescriptions: {stats['activePrescriptions']}")
    print(f"Pending lab results: {stats['pendingLabResults']}")


def print_patients(client: EHRClient, search: Optional[str], limit: Optional[int]) -> None:
    patients = client.list_patients(search=search, limit=limit)
    for p in patients:
        print(f"{p['id']:<28}{p['lastName']}, {p['firstName']:<20}{p['email']}")
    print(f"{len(patients)} patient(s)")


def print_appointments(client: EHRClient, patient_id: Optional[str], status: Optional[str], date: Optional[str]) -> None:
    appointments = client.list_appointments(patient_id=patient_id, status=status, date=date)
    for a in appointments:
        print(f"{a['id']:<28}{a['date']:<30}{a['status']:<13}{a['providerName']} ({a['department']})")
    print(f"{len(appointments)} appointment(s)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="EHR admin shell")
    parser.add_argument("--api-url", default=settings.API_URL, help="Base URL of the EHR API")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("stats", help="Show collection totals")

    patients = commands.add_parser("patients", help="List patients")
    patients.add_argument("--search", help="Substring of name, email or id")
    patients.add_argument("--limit", type=int, help="Maximum number of patients")

    appointments = commands.add_parser("appointments", help="List appointments")
    appointments.add_argument("--patient", dest="patient_id", help="Patient id")
    appointments.add_argument("--status", help="Appointment status")
    appointments.add_argument("--date", help="Calendar day, YYYY-MM-DD")

    cancel = commands.add_parser("cancel", help="Cancel an appointment")
    cancel.add_argument("appointment_id")

    delete = commands.add_parser("delete-patient", help="Delete a patient")
    delete.add_argument("patient_id")

    return parser


def main(argv: Optional[List[str]] = None, client: Optional[EHRClient] = None) -> int:
    args = build_parser().parse_args(argv)
    client = client or EHRClient(base_url=args.api_url)

    try:
        if args.command == "stats":
            print_stats(client)
        elif args.command == "patients":
            print_patients(client, args.search, args.limit)
        elif args.command == "appointments":
            print_appointments(client, args.patient_id, args.status, args.date)
        elif args.command == "cancel":
            appointment = client.cancel_appointment(args.appointment_id)
            print(f"Appointment {appointment['id']} is now {appointment['status']}")
        elif args.command == "delete-patient":
            client.delete_patient(args.patient_id)
            print(f"Patient {args.patient_id} deleted")
    except EHRClientError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s - %(levelname)s - %(message)s")
    sys.exit(main())
