"""Domain models for the microchip update tool.

This package contains the dog record, the DIR column layouts, the records
written to the updates and errors files, and the run configuration/result.
"""

from .config_models import OrganizationConfig, RunConfig
from .diagnostic_record import DiagnosticRecord
from .dog import Dog, RejectedRow
from .layouts import NEW_LAYOUT, OLD_LAYOUT, ColumnLayout, get_layout
from .run_result import RunResult, SnapshotStat
from .update_record import UpdateRecord

__all__ = [
    # Configuration models
    "OrganizationConfig",
    "RunConfig",
    # Registry models
    "ColumnLayout",
    "Dog",
    "NEW_LAYOUT",
    "OLD_LAYOUT",
    "RejectedRow",
    "get_layout",
    # Output models
    "DiagnosticRecord",
    "UpdateRecord",
    # Result models
    "RunResult",
    "SnapshotStat",
]
