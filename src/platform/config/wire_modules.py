"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.event_lifecycle.app.command import (
    republish_event_fan_out_use_case,
    submit_event_use_case,
    transition_event_status_use_case,
)
from src.service.event_lifecycle.app.query import get_event_record_use_case


WIRE_MODULES: list[ModuleType] = [
    transition_event_status_use_case,
    republish_event_fan_out_use_case,
    submit_event_use_case,
    get_event_record_use_case,
]
