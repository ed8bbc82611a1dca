"""
Database models for the dashboard.

These back the ``orm`` store.  Field names mirror the canonical records in
:mod:`dashboard.records` one to one (the primary key becomes ``key``), so
the store can translate rows without a per-field mapping.  Cross-entity
references are plain integer columns, like in the other store backends.
"""
from __future__ import annotations

from django.db import models
from django.utils import timezone

from .constants import (
    APPOINTMENT_SCHEDULED,
    APPOINTMENT_STATUS_CHOICES,
    PATIENT_STATUS_CHOICES,
    PATIENT_WAITING,
)


class Patient(models.Model):
    name = models.CharField(max_length=255)
    age = models.PositiveIntegerField(null=True, blank=True)
    gender = models.CharField(max_length=16, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    emergency_contact = models.CharField(max_length=255, blank=True)
    blood_group = models.CharField(max_length=8, blank=True)
    allergies = models.JSONField(default=list, blank=True)
    # lowercase department slug; filtered on by the department queue view
    current_department = models.CharField(max_length=64, blank=True, db_index=True)
    status = models.CharField(max_length=16, choices=PATIENT_STATUS_CHOICES, default=PATIENT_WAITING, db_index=True)
    admission_date = models.DateTimeField(null=True, blank=True, default=timezone.now)

    def __str__(self) -> str:
        return f"{self.name} (PAT-{self.pk:05d})" if self.pk else self.name


class Appointment(models.Model):
    patient_id = models.PositiveIntegerField(db_index=True)
    doctor_id = models.CharField(max_length=64)
    department = models.CharField(max_length=64, blank=True)
    date = models.DateField(db_index=True)
    time_slot = models.CharField(max_length=16)
    status = models.CharField(max_length=16, choices=APPOINTMENT_STATUS_CHOICES, default=APPOINTMENT_SCHEDULED)
    notes = models.TextField(blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['date', 'time_slot'], name='appointment_date_slot_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.date} {self.time_slot} patient={self.patient_id}"


class Department(models.Model):
    name = models.CharField(max_length=64, unique=True)
    current_queue = models.PositiveIntegerField(default=0)
    average_wait_time = models.PositiveIntegerField(default=0, help_text="Average wait in minutes")
    active_staff = models.PositiveIntegerField(default=0)

    def __str__(self) -> str:
        return self.name


class Bed(models.Model):
    ward_name = models.CharField(max_length=64, db_index=True)
    bed_number = models.CharField(max_length=16)
    is_occupied = models.BooleanField(default=False)
    patient_id = models.PositiveIntegerField(null=True, blank=True)
    admitted_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['ward_name', 'bed_number'], name='unique_bed_per_ward'),
        ]

    def __str__(self) -> str:
        return f"{self.ward_name} / {self.bed_number}"
