# Schemas package (re-export feature modules for stable imports)
from .appointments.appointment import *
from .patients.patient import *
from .calendar.calendar import *
from .notes.notes import *
from .common.common import *
