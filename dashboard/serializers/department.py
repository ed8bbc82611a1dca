from rest_framework import serializers

from .common import clean_text


class DepartmentSerializer(serializers.Serializer):
    id = serializers.IntegerField(source='key', read_only=True)
    slug = serializers.CharField(read_only=True)
    name = serializers.CharField(max_length=64)
    currentQueue = serializers.IntegerField(source='current_queue', min_value=0, default=0)
    averageWaitTime = serializers.IntegerField(source='average_wait_time', min_value=0, default=0)
    activeStaff = serializers.IntegerField(source='active_staff', min_value=0, default=0)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required.')
        return v
