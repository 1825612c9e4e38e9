# Routers package
from . import appointments_router
from . import patients_router
from . import calendar_router
from . import notes_router

__all__ = [
    "appointments_router",
    "patients_router",
    "calendar_router",
    "notes_router",
]
