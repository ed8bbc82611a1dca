"""
API tests for the dashboard endpoints.

Most tests run against memory-backed stores pinned to 2024-01-10 (see
``conftest.memory_context``); ``OrmDashboardAPITests`` exercises the
database-backed stores end to end.
"""
import pytest
from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from dashboard.context import DashboardContext, use_context
from dashboard.exceptions import StoreUnavailable
from dashboard.models import Bed, Department, Patient
from dashboard.stores import memory_stores, orm_stores
from dashboard.stores.base import EntityStore

from .conftest import TODAY

pytestmark = pytest.mark.django_db

NEW_PATIENT = {
    'name': 'David Thompson',
    'age': 45,
    'gender': 'Male',
    'phone': '+1-555-0199',
    'emergencyContact': 'Kate Thompson',
    'bloodGroup': 'AB+',
    'allergies': 'Latex, Aspirin',
    'currentDepartment': 'Neurology',
}


@pytest.fixture
def client():
    return APIClient()


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def test_dashboard_summary(client, memory_context):
    r = client.get('/api/dashboard')
    assert r.status_code == 200
    assert r.data['date'] == '2024-01-10'
    assert r.data['stats'] == {
        'totalPatients': 3,
        'admittedPatients': 1,
        'todayAppointments': 2,
        'availableBeds': 3,
        'bedOccupancyRate': 25,
    }
    assert [p['id'] for p in r.data['recentPatients']] == [2, 1, 3]
    assert [a['patientName'] for a in r.data['todayAppointments']] == ['Sarah Johnson', 'Michael Chen']
    assert r.data['departmentStatus'][0]['name'] == 'Cardiology'
    assert r.data['departmentStatus'][0]['waitLevel'] == 'warning'
    assert r.data['bedOccupancy']['ICU'] == {'total': 2, 'occupied': 1, 'occupancyRate': 50}


def test_dashboard_date_override(client, memory_context):
    r = client.get('/api/dashboard', {'date': '2024-01-12'})
    assert r.status_code == 200
    assert r.data['stats']['todayAppointments'] == 1
    assert r.data['todayAppointments'][0]['patientName'] == 'Unknown Patient'


def test_dashboard_rejects_bad_date(client, memory_context):
    r = client.get('/api/dashboard', {'date': 'someday'})
    assert r.status_code == 400
    assert r.data['ok'] is False
    assert r.data['error']['code'] == 'validation_error'


def test_dashboard_is_cached_until_a_mutation(client, memory_context):
    assert client.get('/api/dashboard').data['stats']['totalPatients'] == 3
    # writes that bypass the API are not seen until the cache is dropped
    async_to_sync(memory_context.stores.patients.create)({'name': 'Walk In'})
    assert client.get('/api/dashboard').data['stats']['totalPatients'] == 3
    assert client.post('/api/patients', NEW_PATIENT, format='json').status_code == 201
    assert client.get('/api/dashboard').data['stats']['totalPatients'] == 5


# ---------------------------------------------------------------------------
# Patients
# ---------------------------------------------------------------------------

def test_list_patients_with_filters(client, memory_context):
    assert len(client.get('/api/patients').data) == 3
    assert [p['id'] for p in client.get('/api/patients', {'search': 'chen'}).data] == [2]
    assert [p['id'] for p in client.get('/api/patients', {'department': 'Cardiology'}).data] == [1, 2]
    assert [p['id'] for p in client.get('/api/patients', {'status': 'discharged'}).data] == [3]


def test_register_patient(client, memory_context):
    r = client.post('/api/patients', NEW_PATIENT, format='json')
    assert r.status_code == 201
    assert r.data['id'] == 4
    assert r.data['displayId'] == 'PAT-00004'
    assert r.data['allergies'] == ['Latex', 'Aspirin']
    assert r.data['currentDepartment'] == 'neurology'
    assert r.data['status'] == 'waiting'
    assert r.data['admissionDate'] is not None


def test_register_patient_validation(client, memory_context):
    r = client.post('/api/patients', {**NEW_PATIENT, 'age': 0, 'name': '<b>X</b>'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'validation_error'
    assert 'age' in r.data['error']['message']
    assert 'name' in r.data['error']['message']


def test_patient_not_found(client, memory_context):
    r = client.get('/api/patients/99')
    assert r.status_code == 404
    assert r.data == {'ok': False, 'error': {'code': 'not_found', 'message': 'patient 99 not found'}}


def test_replace_patient_keeps_admission_date(client, memory_context):
    before = client.get('/api/patients/1').data
    r = client.put('/api/patients/1', {**NEW_PATIENT, 'status': 'admitted'}, format='json')
    assert r.status_code == 200
    assert r.data['name'] == 'David Thompson'
    assert r.data['status'] == 'admitted'
    assert r.data['admissionDate'] == before['admissionDate']


def test_advance_patient(client, memory_context):
    assert client.post('/api/patients/1/advance').data['status'] == 'admitted'
    assert client.post('/api/patients/1/advance').data['status'] == 'discharged'
    assert client.post('/api/patients/1/advance').data['status'] == 'discharged'


def test_delete_patient(client, memory_context):
    assert client.delete('/api/patients/3').status_code == 204
    assert client.get('/api/patients/3').status_code == 404
    assert client.delete('/api/patients/3').status_code == 404


# ---------------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------------

NEW_APPOINTMENT = {
    'patientId': 1,
    'doctorId': 'dr-smith',
    'department': 'Cardiology',
    'date': '2024-01-11',
    'timeSlot': '09:30 AM',
}


def test_list_appointments_for_date(client, memory_context):
    r = client.get('/api/appointments', {'date': '2024-01-10'})
    assert [a['id'] for a in r.data] == [1, 2]
    assert r.data[0]['patientName'] == 'Sarah Johnson'
    assert len(client.get('/api/appointments').data) == 3


def test_schedule_appointment(client, memory_context):
    r = client.post('/api/appointments', NEW_APPOINTMENT, format='json')
    assert r.status_code == 201
    assert r.data['department'] == 'cardiology'
    assert r.data['status'] == 'scheduled'
    assert r.data['patientName'] == 'Sarah Johnson'
    assert r.data['displayId'] == 'APT-00004'


def test_schedule_appointment_requires_known_patient(client, memory_context):
    r = client.post('/api/appointments', {**NEW_APPOINTMENT, 'patientId': 99}, format='json')
    assert r.status_code == 400
    assert 'patientId' in r.data['error']['message']


def test_schedule_appointment_rejects_unknown_slot(client, memory_context):
    r = client.post('/api/appointments', {**NEW_APPOINTMENT, 'timeSlot': '09:15 AM'}, format='json')
    assert r.status_code == 400


def test_week_view(client, memory_context):
    r = client.get('/api/appointments/week')
    assert r.status_code == 200
    assert r.data['weekStart'] == '2024-01-07'
    assert [d['date'] for d in r.data['days']][-1] == '2024-01-13'
    assert [len(d['appointments']) for d in r.data['days']] == [0, 0, 0, 2, 0, 1, 0]

    monday = client.get('/api/appointments/week', {'date': '2024-01-10', 'weekStartsOn': 0})
    assert monday.data['weekStart'] == '2024-01-08'
    assert len(monday.data['days']) == 7


def test_week_view_rejects_unknown_weekday(client, memory_context):
    r = client.get('/api/appointments/week', {'weekStartsOn': 7})
    assert r.status_code == 400
    assert 'weekStartsOn' in r.data['error']['message']


def test_appointment_status(client, memory_context):
    r = client.post('/api/appointments/1/status', {'status': 'completed'}, format='json')
    assert r.status_code == 200
    assert r.data['status'] == 'completed'
    assert client.post('/api/appointments/1/status', {'status': 'lost'}, format='json').status_code == 400
    assert client.post('/api/appointments/42/status', {'status': 'completed'}, format='json').status_code == 404


# ---------------------------------------------------------------------------
# Departments
# ---------------------------------------------------------------------------

def test_list_departments(client, memory_context):
    r = client.get('/api/departments')
    assert [(d['name'], d['waitLevel']) for d in r.data] == [('Cardiology', 'warning'), ('Pediatrics', 'success')]


def test_department_names_are_unique(client, memory_context):
    r = client.post('/api/departments', {'name': 'cardiology'}, format='json')
    assert r.status_code == 400
    r = client.post('/api/departments', {'name': 'Neurology', 'averageWaitTime': 70}, format='json')
    assert r.status_code == 201
    assert r.data['waitLevel'] == 'danger'
    assert r.data['slug'] == 'neurology'


def test_department_queue(client, memory_context):
    r = client.get('/api/departments/1/queue')
    assert r.status_code == 200
    assert r.data['total'] == 2
    assert [(e['position'], e['patient']['id']) for e in r.data['waiting']] == [(1, 1)]
    assert [(e['position'], e['patient']['id']) for e in r.data['admitted']] == [(1, 2)]


def test_rename_department_keeps_its_queue(client, memory_context):
    r = client.put('/api/departments/1', {'name': 'Cardiac Care', 'averageWaitTime': 45}, format='json')
    assert r.status_code == 200
    assert r.data['slug'] == 'cardiac care'
    queue = client.get('/api/departments/1/queue').data
    assert queue['total'] == 2
    assert [e['patient']['currentDepartment'] for e in queue['waiting']] == ['cardiac care']
    assert {a['department'] for a in client.get('/api/appointments', {'date': '2024-01-10'}).data} == {'cardiac care'}
    # other departments are untouched
    assert client.get('/api/patients/3').data['currentDepartment'] == 'pediatrics'


def test_department_update_without_rename_moves_nothing(client, memory_context):
    r = client.put('/api/departments/1', {'name': 'cardiology', 'currentQueue': 9}, format='json')
    assert r.status_code == 200
    assert client.get('/api/departments/1/queue').data['total'] == 2


# ---------------------------------------------------------------------------
# Beds
# ---------------------------------------------------------------------------

def test_list_beds_by_ward(client, memory_context):
    assert len(client.get('/api/beds').data) == 4
    assert len(client.get('/api/beds', {'ward': 'all'}).data) == 4
    assert [b['bedNumber'] for b in client.get('/api/beds', {'ward': 'ICU'}).data] == ['I01', 'I02']


def test_ward_overview(client, memory_context):
    wards = {w['wardName']: w for w in client.get('/api/beds/wards').data}
    assert wards['ICU']['occupancyRate'] == 50
    assert wards['General']['available'] == 2
    assert wards['General']['level'] == 'success'


def test_bed_numbers_are_unique_per_ward(client, memory_context):
    r = client.post('/api/beds', {'wardName': 'ICU', 'bedNumber': 'I01'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'validation_error'
    assert 'bedNumber' in r.data['error']['message']
    # same number in another ward is fine
    assert client.post('/api/beds', {'wardName': 'General', 'bedNumber': 'I01'}, format='json').status_code == 201
    r = client.put('/api/beds/4', {'wardName': 'General', 'bedNumber': 'G01'}, format='json')
    assert r.status_code == 400
    assert len(client.get('/api/beds').data) == 5


def test_occupy_and_discharge_bed(client, memory_context):
    r = client.post('/api/beds/2/occupy', {'patientId': 1}, format='json')
    assert r.status_code == 200
    assert r.data['isOccupied'] is True
    assert r.data['patientId'] == 1
    assert r.data['admittedDate'] is not None

    again = client.post('/api/beds/2/occupy', {'patientId': 3}, format='json')
    assert again.status_code == 400

    r = client.post('/api/beds/2/discharge')
    assert r.data['isOccupied'] is False
    assert r.data['patientId'] is None
    assert r.data['admittedDate'] is None


def test_occupy_bed_requires_known_patient(client, memory_context):
    r = client.post('/api/beds/3/occupy', {'patientId': 99}, format='json')
    assert r.status_code == 400


def test_bed_replace_enforces_occupancy(client, memory_context):
    r = client.put('/api/beds/3', {'wardName': 'General', 'bedNumber': 'G01', 'isOccupied': True}, format='json')
    assert r.status_code == 400
    r = client.put('/api/beds/3', {'wardName': 'General', 'bedNumber': 'G01', 'patientId': 1}, format='json')
    assert r.status_code == 400
    r = client.put('/api/beds/3', {'wardName': 'General', 'bedNumber': 'G01', 'isOccupied': True,
                                   'patientId': 1}, format='json')
    assert r.status_code == 200
    assert r.data['admittedDate'] is not None


# ---------------------------------------------------------------------------
# Health & store failures
# ---------------------------------------------------------------------------

class DownStore(EntityStore):
    entity = 'patient'

    async def get_all(self):
        raise StoreUnavailable('backend down')

    async def get_by_id(self, key):
        raise StoreUnavailable('backend down')


@pytest.fixture
def failing_context(seed):
    stores = memory_stores(seed=seed)
    stores.patients = DownStore()
    with use_context(DashboardContext(stores=stores, clock=lambda: TODAY)) as context:
        yield context


def test_healthz(client, memory_context):
    r = client.get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'stores': {'patient': True, 'appointment': True, 'department': True, 'bed': True}}


def test_store_failure_is_retryable(client, failing_context):
    r = client.get('/api/patients')
    assert r.status_code == 503
    assert r.data['error'] == {'code': 'store_unavailable', 'message': 'backend down', 'retry': True}
    assert client.get('/api/dashboard').status_code == 503
    health = client.get('/healthz')
    assert health.status_code == 503
    assert health.json()['stores']['patient'] is False


# ---------------------------------------------------------------------------
# Database-backed stores
# ---------------------------------------------------------------------------

class OrmDashboardAPITests(APITestCase):
    def setUp(self) -> None:
        context = use_context(DashboardContext(stores=orm_stores(), clock=lambda: TODAY))
        context.__enter__()
        self.addCleanup(context.__exit__, None, None, None)
        self.client = APIClient()

    def test_register_then_dashboard(self):
        r = self.client.post('/api/patients', NEW_PATIENT, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        patient = Patient.objects.get(pk=r.data['id'])
        self.assertEqual(patient.allergies, ['Latex', 'Aspirin'])

        r = self.client.get('/api/dashboard')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['stats']['totalPatients'], 1)
        self.assertEqual(r.data['recentPatients'][0]['name'], 'David Thompson')

    def test_bed_lifecycle(self):
        patient = Patient.objects.create(name='Michael Chen', current_department='cardiology')
        r = self.client.post('/api/beds', {'wardName': 'ICU', 'bedNumber': 'I01'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        bed_id = r.data['id']

        r = self.client.post(f'/api/beds/{bed_id}/occupy', {'patientId': patient.pk}, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        bed = Bed.objects.get(pk=bed_id)
        self.assertTrue(bed.is_occupied)
        self.assertEqual(bed.patient_id, patient.pk)

        self.client.post(f'/api/beds/{bed_id}/discharge')
        bed.refresh_from_db()
        self.assertFalse(bed.is_occupied)
        self.assertIsNone(bed.admitted_date)

    def test_missing_record(self):
        r = self.client.get('/api/departments/404')
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(r.data['error']['code'], 'not_found')

    def test_duplicate_bed_is_rejected(self):
        payload = {'wardName': 'ICU', 'bedNumber': 'I01'}
        self.assertEqual(self.client.post('/api/beds', payload, format='json').status_code, status.HTTP_201_CREATED)
        r = self.client.post('/api/beds', payload, format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(r.data['error']['code'], 'validation_error')
        self.assertEqual(Bed.objects.count(), 1)

        other = self.client.post('/api/beds', {'wardName': 'ICU', 'bedNumber': 'I02'}, format='json')
        r = self.client.put(f"/api/beds/{other.data['id']}", payload, format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Bed.objects.get(pk=other.data['id']).bed_number, 'I02')

    def test_rename_department_moves_patients(self):
        dept = Department.objects.create(name='Cardiology', average_wait_time=20)
        patient = Patient.objects.create(name='Michael Chen', current_department='cardiology', status='waiting')
        r = self.client.put(f'/api/departments/{dept.pk}', {'name': 'Cardiac Care'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        patient.refresh_from_db()
        self.assertEqual(patient.current_department, 'cardiac care')
        queue = self.client.get(f'/api/departments/{dept.pk}/queue').data
        self.assertEqual(queue['total'], 1)
