"""
Artifact exporters: TwinCAT structured text, TwinCAT GVL, JSON interchange
"""

from .base import ExportResult
from .structured_text import StructuredTextExporter
from .tc_gvl import TcGvlExporter
from .json_export import JsonExporter
from .memory_report import MemoryUsage, calculate_memory_usage, generate_memory_report
from .artifact_emitter import ArtifactEmitter

__all__ = [
    'ExportResult',
    'StructuredTextExporter',
    'TcGvlExporter',
    'JsonExporter',
    'MemoryUsage',
    'calculate_memory_usage',
    'generate_memory_report',
    'ArtifactEmitter',
]
