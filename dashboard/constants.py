"""Fixed vocabularies shared by records, serializers and models."""

PATIENT_WAITING = 'waiting'
PATIENT_ADMITTED = 'admitted'
PATIENT_DISCHARGED = 'discharged'
PATIENT_EMERGENCY = 'emergency'

PATIENT_STATUS_CHOICES = [
    (PATIENT_WAITING, 'Waiting'),
    (PATIENT_ADMITTED, 'Admitted'),
    (PATIENT_DISCHARGED, 'Discharged'),
    (PATIENT_EMERGENCY, 'Emergency'),
]

APPOINTMENT_SCHEDULED = 'scheduled'
APPOINTMENT_COMPLETED = 'completed'
APPOINTMENT_CANCELLED = 'cancelled'

APPOINTMENT_STATUS_CHOICES = [
    (APPOINTMENT_SCHEDULED, 'Scheduled'),
    (APPOINTMENT_COMPLETED, 'Completed'),
    (APPOINTMENT_CANCELLED, 'Cancelled'),
]

# Clinic time slots, in display order.
TIME_SLOTS = [
    '09:00 AM', '09:30 AM', '10:00 AM', '10:30 AM', '11:00 AM', '11:30 AM',
    '02:00 PM', '02:30 PM', '03:00 PM', '03:30 PM', '04:00 PM', '04:30 PM',
    '05:00 PM', '05:30 PM',
]

DEPARTMENT_CHOICES = [
    ('emergency', 'Emergency'),
    ('cardiology', 'Cardiology'),
    ('neurology', 'Neurology'),
    ('orthopedics', 'Orthopedics'),
    ('pediatrics', 'Pediatrics'),
    ('general', 'General Medicine'),
]

DOCTOR_CHOICES = [
    ('dr-smith', 'Dr. Smith'),
    ('dr-johnson', 'Dr. Johnson'),
    ('dr-williams', 'Dr. Williams'),
    ('dr-brown', 'Dr. Brown'),
    ('dr-davis', 'Dr. Davis'),
]

# Sentinel accepted by the bed ward filter.
ALL_WARDS = 'all'

UNKNOWN_PATIENT = 'Unknown Patient'
