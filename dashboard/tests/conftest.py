from datetime import date, datetime

import pytest
from django.core.cache import cache
from django.utils import timezone

from dashboard.context import DashboardContext, use_context
from dashboard.records import AppointmentRecord, BedRecord, DepartmentRecord, PatientRecord
from dashboard.stores import memory_stores

TODAY = date(2024, 1, 10)


def aware(*args) -> datetime:
    return timezone.make_aware(datetime(*args))


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def seed():
    return {
        'patient': [
            PatientRecord(key=1, name='Sarah Johnson', age=34, gender='Female', phone='+1-555-0101',
                          emergency_contact='Tom Johnson', blood_group='A+', allergies=('Penicillin',),
                          current_department='cardiology', status='waiting',
                          admission_date=aware(2024, 1, 9, 8, 0)),
            PatientRecord(key=2, name='Michael Chen', age=58, gender='Male', phone='+1-555-0102',
                          emergency_contact='Lin Chen', blood_group='O-',
                          current_department='cardiology', status='admitted',
                          admission_date=aware(2024, 1, 10, 9, 30)),
            PatientRecord(key=3, name='Emily Rodriguez', age=7, gender='Female', phone='+1-555-0103',
                          emergency_contact='Ana Rodriguez', blood_group='B+',
                          current_department='pediatrics', status='discharged',
                          admission_date=aware(2024, 1, 2, 14, 0)),
        ],
        'appointment': [
            AppointmentRecord(key=1, patient_id=1, doctor_id='dr-smith', department='cardiology',
                              date=date(2024, 1, 10), time_slot='09:00 AM'),
            AppointmentRecord(key=2, patient_id=2, doctor_id='dr-brown', department='cardiology',
                              date=date(2024, 1, 10), time_slot='10:30 AM'),
            AppointmentRecord(key=3, patient_id=99, doctor_id='dr-davis', department='pediatrics',
                              date=date(2024, 1, 12), time_slot='02:00 PM'),
        ],
        'department': [
            DepartmentRecord(key=1, name='Cardiology', current_queue=4, average_wait_time=45, active_staff=6),
            DepartmentRecord(key=2, name='Pediatrics', current_queue=1, average_wait_time=15, active_staff=3),
        ],
        'bed': [
            BedRecord(key=1, ward_name='ICU', bed_number='I01', is_occupied=True, patient_id=2,
                      admitted_date=aware(2024, 1, 10, 9, 45)),
            BedRecord(key=2, ward_name='ICU', bed_number='I02'),
            BedRecord(key=3, ward_name='General', bed_number='G01'),
            BedRecord(key=4, ward_name='General', bed_number='G02'),
        ],
    }


@pytest.fixture
def memory_context(seed):
    """Memory-backed stores pinned to a fixed day, installed for the duration of a test."""
    context = DashboardContext(stores=memory_stores(seed=seed), clock=lambda: TODAY)
    with use_context(context):
        yield context
