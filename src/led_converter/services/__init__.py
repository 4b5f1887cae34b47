"""
Services: event bus, sequence ingestion and the converter workflow

ConverterService is imported from its module directly
(led_converter.services.converter_service) because it depends on the
playback controller, which itself uses the event bus from this package.
"""

from .event_bus import EventBus, EventHandler
from .sequence_loader import SequenceLoader

__all__ = [
    'EventBus',
    'EventHandler',
    'SequenceLoader',
]
