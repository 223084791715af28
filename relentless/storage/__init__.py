"""Persistence, identity and import/export collaborators."""

from .store import TrackerStore
from .identity import DeviceIdentity
from .transfer import (
    EXPORT_VERSION,
    ExportPayload,
    ImportResult,
    build_export,
    export_to_file,
    parse_import,
    import_into
)

__all__ = [
    'TrackerStore',
    'DeviceIdentity',
    'EXPORT_VERSION',
    'ExportPayload',
    'ImportResult',
    'build_export',
    'export_to_file',
    'parse_import',
    'import_into',
]
