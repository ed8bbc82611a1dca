from rest_framework import serializers

from ..constants import APPOINTMENT_SCHEDULED, APPOINTMENT_STATUS_CHOICES, TIME_SLOTS
from ..services.calendar import MONDAY, SUNDAY
from .common import clean_text


class AppointmentSerializer(serializers.Serializer):
    id = serializers.IntegerField(source='key', read_only=True)
    displayId = serializers.CharField(source='display_id', read_only=True)
    patientId = serializers.IntegerField(source='patient_id', min_value=1)
    doctorId = serializers.CharField(source='doctor_id', max_length=64)
    department = serializers.CharField(max_length=64)
    date = serializers.DateField()
    timeSlot = serializers.ChoiceField(source='time_slot', choices=TIME_SLOTS)
    status = serializers.ChoiceField(choices=APPOINTMENT_STATUS_CHOICES, default=APPOINTMENT_SCHEDULED)
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_department(self, v):
        return clean_text(v).lower()

    def validate_notes(self, v):
        return clean_text(v)


class AppointmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=APPOINTMENT_STATUS_CHOICES)


class WeekQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    # Python weekday numbers: Monday=0 ... Sunday=6
    weekStartsOn = serializers.IntegerField(required=False, min_value=MONDAY, max_value=SUNDAY)
