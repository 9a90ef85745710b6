"""Template materialization package."""

from .service import (
    AccessScope,
    CancelCheck,
    DecorateHook,
    MaterializerService,
    PlannedEntry,
    materialize,
    validate_destination,
)

__all__ = [
    "AccessScope",
    "CancelCheck",
    "DecorateHook",
    "MaterializerService",
    "PlannedEntry",
    "materialize",
    "validate_destination",
]
