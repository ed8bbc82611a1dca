"""
Management command to seed the configured store with demo data.

Departments, wards and beds, patients and a week of appointments are
created through the store contract, so the same command fills the
database, the hosted backend or (for a single process) the memory store.
"""
import random
from datetime import timedelta

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand
from django.utils import timezone

from dashboard.constants import (
    APPOINTMENT_STATUS_CHOICES,
    DEPARTMENT_CHOICES,
    DOCTOR_CHOICES,
    PATIENT_STATUS_CHOICES,
    TIME_SLOTS,
)
from dashboard.context import get_context
from dashboard.services.broadcast import notify_change

FIRST_NAMES = ['Sarah', 'Michael', 'Emily', 'David', 'Olivia', 'James', 'Sophia', 'Daniel', 'Ava', 'Noah']
LAST_NAMES = ['Johnson', 'Chen', 'Rodriguez', 'Thompson', 'Patel', 'Wilson', 'Garcia', 'Lee', 'Brown', 'Davis']
BLOOD_GROUPS = ['A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-']
ALLERGIES = ['Penicillin', 'Peanuts', 'Latex', 'Shellfish', 'Aspirin']
WARDS = {'ICU': 8, 'General Ward A': 12, 'General Ward B': 12, 'Pediatric Ward': 10, 'Maternity': 6}


class Command(BaseCommand):
    help = 'Populate the configured dashboard store with demo data'

    def add_arguments(self, parser):
        parser.add_argument('--patients', type=int, default=30)
        parser.add_argument('--appointments', type=int, default=40)
        parser.add_argument('--seed', type=int, default=None, help='Random seed for repeatable data')

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        context = get_context()
        stores = context.stores
        self.stdout.write('Creating demo data...')

        departments = self.create_departments(stores, rng)
        patients = self.create_patients(stores, rng, options['patients'])
        beds = self.create_beds(stores, rng, patients)
        appointments = self.create_appointments(stores, rng, patients, options['appointments'], context.today())

        notify_change('dashboard', 'populated')
        self.stdout.write(self.style.SUCCESS(
            f"Created {len(departments)} departments, {len(patients)} patients, "
            f"{len(beds)} beds and {len(appointments)} appointments"
        ))

    def create_departments(self, stores, rng):
        created = []
        for slug, _label in DEPARTMENT_CHOICES:
            created.append(async_to_sync(stores.departments.create)({
                'name': slug.title(),
                'current_queue': rng.randint(0, 25),
                'average_wait_time': rng.choice([10, 20, 35, 45, 75, 90]),
                'active_staff': rng.randint(2, 12),
            }))
        self.stdout.write(f'  departments: {len(created)}')
        return created

    def create_patients(self, stores, rng, count):
        now = timezone.now()
        statuses = [value for value, _ in PATIENT_STATUS_CHOICES]
        created = []
        for _ in range(count):
            created.append(async_to_sync(stores.patients.create)({
                'name': f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                'age': rng.randint(1, 90),
                'gender': rng.choice(['Male', 'Female']),
                'phone': f"+1-555-{rng.randint(1000, 9999)}",
                'emergency_contact': f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                'blood_group': rng.choice(BLOOD_GROUPS),
                'allergies': rng.sample(ALLERGIES, rng.randint(0, 2)),
                'current_department': rng.choice(DEPARTMENT_CHOICES)[0],
                'status': rng.choice(statuses),
                'admission_date': now - timedelta(hours=rng.randint(0, 24 * 14)),
            }))
        self.stdout.write(f'  patients: {len(created)}')
        return created

    def create_beds(self, stores, rng, patients):
        now = timezone.now()
        candidates = list(patients)
        rng.shuffle(candidates)
        created = []
        for ward, size in WARDS.items():
            for number in range(1, size + 1):
                patient = candidates.pop() if candidates and rng.random() < 0.6 else None
                created.append(async_to_sync(stores.beds.create)({
                    'ward_name': ward,
                    'bed_number': f"{ward[0]}{number:02d}",
                    'is_occupied': patient is not None,
                    'patient_id': patient.key if patient else None,
                    'admitted_date': now - timedelta(hours=rng.randint(1, 72)) if patient else None,
                }))
        self.stdout.write(f'  beds: {len(created)}')
        return created

    def create_appointments(self, stores, rng, patients, count, today):
        if not patients:
            return []
        statuses = [value for value, _ in APPOINTMENT_STATUS_CHOICES]
        created = []
        for _ in range(count):
            patient = rng.choice(patients)
            created.append(async_to_sync(stores.appointments.create)({
                'patient_id': patient.key,
                'doctor_id': rng.choice(DOCTOR_CHOICES)[0],
                'department': patient.current_department,
                'date': today + timedelta(days=rng.randint(-3, 7)),
                'time_slot': rng.choice(TIME_SLOTS),
                'status': rng.choice(statuses),
                'notes': '',
            }))
        self.stdout.write(f'  appointments: {len(created)}')
        return created
