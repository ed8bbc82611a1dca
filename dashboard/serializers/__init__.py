from .appointment import AppointmentSerializer, AppointmentStatusSerializer, WeekQuerySerializer
from .bed import BedQuerySerializer, BedSerializer, OccupyBedSerializer
from .common import DateQuerySerializer
from .department import DepartmentSerializer
from .patient import PatientListQuerySerializer, PatientSerializer

__all__ = [
    'AppointmentSerializer',
    'AppointmentStatusSerializer',
    'WeekQuerySerializer',
    'BedQuerySerializer',
    'BedSerializer',
    'OccupyBedSerializer',
    'DateQuerySerializer',
    'DepartmentSerializer',
    'PatientListQuerySerializer',
    'PatientSerializer',
]
