from datetime import date, datetime

from django.test import override_settings
from django.utils import timezone

from dashboard.records import PatientRecord, normalize_allergies
from dashboard.services import calendar


def test_as_date_accepts_every_shape():
    assert calendar.as_date('2024-01-10') == date(2024, 1, 10)
    assert calendar.as_date('2024-01-10T08:15:00Z') == date(2024, 1, 10)
    assert calendar.as_date(datetime(2024, 1, 10, 23, 59)) == date(2024, 1, 10)
    assert calendar.as_date(date(2024, 1, 10)) == date(2024, 1, 10)
    assert calendar.as_date('') is None
    assert calendar.as_date('yesterday') is None
    assert calendar.as_date(12) is None


@override_settings(TIME_ZONE='America/New_York')
def test_as_date_uses_local_calendar_day():
    # 03:30 UTC on the 11th is still the 10th in New York
    assert calendar.as_date('2024-01-11T03:30:00+00:00') == date(2024, 1, 10)


def test_as_datetime_is_always_aware():
    moment = calendar.as_datetime('2024-01-10 08:00')
    assert timezone.is_aware(moment)
    assert timezone.is_aware(calendar.as_datetime(date(2024, 1, 10)))
    assert calendar.as_datetime('2024-13-45') is None
    assert calendar.as_datetime(None) is None


def test_is_same_day():
    assert calendar.is_same_day('2024-01-10', datetime(2024, 1, 10, 17, 0))
    assert not calendar.is_same_day(None, None)
    assert not calendar.is_same_day('2024-01-10', '2024-01-11')


def test_add_days_crosses_month_end():
    assert calendar.add_days(date(2024, 1, 30), 3) == date(2024, 2, 2)
    assert calendar.add_days('2024-03-01', -1) == date(2024, 2, 29)


def test_start_of_week():
    wednesday = date(2024, 1, 10)
    assert calendar.start_of_week(wednesday) == date(2024, 1, 7)
    assert calendar.start_of_week(wednesday, calendar.MONDAY) == date(2024, 1, 8)
    assert calendar.start_of_week(date(2024, 1, 7)) == date(2024, 1, 7)


def test_week_days_are_sequential():
    days = calendar.week_days(date(2024, 2, 28))
    assert len(days) == 7
    assert all((b - a).days == 1 for a, b in zip(days, days[1:]))


def test_normalize_allergies():
    assert normalize_allergies(' Penicillin, Latex ,,Penicillin') == ('Penicillin', 'Latex')
    assert normalize_allergies(['Peanuts', '', None, 'Peanuts']) == ('Peanuts',)
    assert normalize_allergies(None) == ()


def test_patient_record_normalizes_allergies():
    record = PatientRecord(key=42, allergies='Latex, Aspirin')
    assert record.allergies == ('Latex', 'Aspirin')
    assert record.display_id == 'PAT-00042'
