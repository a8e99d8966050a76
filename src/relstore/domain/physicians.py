"""Physician domain service."""

from datetime import datetime
from typing import Optional

from relstore.domain.entities import Appointment, Patient
from relstore.domain.store import EntityStore


class PhysicianService:
    """Service for physicians, patients and their appointments."""

    def __init__(self, store: EntityStore):
        self.store = store

    def create_physician(self, name: str) -> int:
        return self.store.create("Physician", {"name": name})

    def create_patient(self, name: str) -> int:
        return self.store.create("Patient", {"name": name})

    def book_appointment(
        self, physician_id: int, patient_id: int, appointment_date: Optional[datetime] = None
    ) -> int:
        """Book an appointment. Returns appointment ID.

        Raises:
            ValidationError: If the physician or patient doesn't exist
        """
        return self.store.create(
            "Appointment",
            {
                "physician_id": physician_id,
                "patient_id": patient_id,
                "appointment_date": appointment_date,
            },
        )

    def appointments(self, physician_id: int) -> list[Appointment]:
        return self.store.find("Appointment", physician_id=physician_id)

    def patients(self, physician_id: int) -> list[Patient]:
        """Distinct patients seen by a physician, read through appointments."""
        return self.store.associated("Physician", physician_id, "patients")
