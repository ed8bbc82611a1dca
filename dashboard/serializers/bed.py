from django.utils import timezone
from rest_framework import serializers

from .common import clean_text


class BedSerializer(serializers.Serializer):
    """A bed.  ``patientId`` and ``admittedDate`` exist only while occupied."""
    id = serializers.IntegerField(source='key', read_only=True)
    wardName = serializers.CharField(source='ward_name', max_length=64)
    bedNumber = serializers.CharField(source='bed_number', max_length=16)
    isOccupied = serializers.BooleanField(source='is_occupied', default=False)
    patientId = serializers.IntegerField(source='patient_id', min_value=1, required=False, allow_null=True, default=None)
    admittedDate = serializers.DateTimeField(source='admitted_date', required=False, allow_null=True, default=None)

    def validate_wardName(self, v):
        return clean_text(v)

    def validate(self, attrs):
        if attrs.get('is_occupied'):
            if attrs.get('patient_id') is None:
                raise serializers.ValidationError({'patientId': 'An occupied bed needs a patient.'})
            if attrs.get('admitted_date') is None:
                attrs['admitted_date'] = timezone.now()
        elif attrs.get('patient_id') is not None or attrs.get('admitted_date') is not None:
            raise serializers.ValidationError('A free bed cannot carry a patient or an admission date.')
        return attrs


class BedQuerySerializer(serializers.Serializer):
    ward = serializers.CharField(required=False, allow_blank=True, max_length=64)


class OccupyBedSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
