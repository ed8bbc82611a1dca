"""
Django admin registrations for the dashboard models.

Only relevant when the ``orm`` store backend is in use; the admin then
gives a quick way to inspect and correct records during development.
"""

from django.contrib import admin

from .models import Appointment, Bed, Department, Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'age', 'current_department', 'status', 'admission_date')
    search_fields = ('id', 'name', 'phone')
    list_filter = ('status', 'current_department')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient_id', 'doctor_id', 'department', 'date', 'time_slot', 'status')
    list_filter = ('status', 'department', 'date')


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'current_queue', 'average_wait_time', 'active_staff')
    search_fields = ('name',)


@admin.register(Bed)
class BedAdmin(admin.ModelAdmin):
    list_display = ('id', 'ward_name', 'bed_number', 'is_occupied', 'patient_id', 'admitted_date')
    list_filter = ('ward_name', 'is_occupied')
