# Controllers package initialization
# This file makes the controllers directory a Python package
# and allows importing controller modules

from . import appointment_controller, statistics_controller

__all__ = [
    "appointment_controller",
    "statistics_controller",
]
