from rest_framework import serializers

from ..constants import PATIENT_STATUS_CHOICES, PATIENT_WAITING
from .common import AllergiesField, clean_text


class PatientSerializer(serializers.Serializer):
    """Full patient payload.  Writes must carry every required field."""
    id = serializers.IntegerField(source='key', read_only=True)
    displayId = serializers.CharField(source='display_id', read_only=True)
    name = serializers.CharField(max_length=255)
    age = serializers.IntegerField(min_value=1, max_value=150)
    gender = serializers.CharField(max_length=16)
    phone = serializers.CharField(max_length=32)
    emergencyContact = serializers.CharField(source='emergency_contact', max_length=255)
    bloodGroup = serializers.CharField(source='blood_group', max_length=8)
    allergies = AllergiesField(required=False, default=())
    currentDepartment = serializers.CharField(source='current_department', max_length=64)
    status = serializers.ChoiceField(choices=PATIENT_STATUS_CHOICES, default=PATIENT_WAITING)
    admissionDate = serializers.DateTimeField(source='admission_date', required=False, allow_null=True)

    def validate_name(self, v):
        v = clean_text(v)
        if len(v) < 2:
            raise serializers.ValidationError('Name must be at least 2 characters.')
        return v

    def validate_currentDepartment(self, v):
        return clean_text(v).lower()

    def validate_phone(self, v):
        return clean_text(v)

    def validate_emergencyContact(self, v):
        return clean_text(v)


class PatientListQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=64)
    department = serializers.CharField(required=False, allow_blank=True, max_length=64)
    status = serializers.ChoiceField(choices=PATIENT_STATUS_CHOICES, required=False)
