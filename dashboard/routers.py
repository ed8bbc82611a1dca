"""
URL mappings for the dashboard API.

Paths carry no trailing slash.  Entity ids are the store keys.
"""
from django.urls import include, path

from .views import appointments, beds, dashboard, departments, health, patients

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    path('api/dashboard', dashboard.dashboard_summary),
    path('api/patients', patients.patients),
    path('api/patients/<int:patient_id>', patients.patient_detail),
    path('api/patients/<int:patient_id>/advance', patients.patient_advance),
    path('api/appointments', appointments.appointments),
    path('api/appointments/week', appointments.appointment_week),
    path('api/appointments/<int:appointment_id>', appointments.appointment_detail),
    path('api/appointments/<int:appointment_id>/status', appointments.appointment_status),
    path('api/departments', departments.departments),
    path('api/departments/<int:department_id>', departments.department_detail),
    path('api/departments/<int:department_id>/queue', departments.department_queue_view),
    path('api/beds', beds.beds),
    path('api/beds/wards', beds.ward_list),
    path('api/beds/<int:bed_id>', beds.bed_detail),
    path('api/beds/<int:bed_id>/occupy', beds.bed_occupy),
    path('api/beds/<int:bed_id>/discharge', beds.bed_discharge),
]
