import bleach
from rest_framework import serializers

from ..records import normalize_allergies


def clean_text(value: str) -> str:
    return bleach.clean((value or '').strip(), strip=True)


class AllergiesField(serializers.Field):
    """Accepts a list of strings or a comma separated string."""

    default_error_messages = {
        'invalid': 'Expected a list of strings or a comma separated string.',
    }

    def to_internal_value(self, data):
        if data is None:
            return ()
        if not isinstance(data, (str, list, tuple)):
            self.fail('invalid')
        return tuple(clean_text(item) for item in normalize_allergies(data) if clean_text(item))

    def to_representation(self, value):
        return list(value or ())


class DateQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
