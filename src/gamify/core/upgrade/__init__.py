"""Silent startup upgrade and bundled asset sync."""

from .models import StepResult, UpgradeReport
from .sync import AssetSynchronizer, copy_if_changed, file_hash, files_differ

__all__ = [
    "AssetSynchronizer",
    "StepResult",
    "UpgradeReport",
    "copy_if_changed",
    "file_hash",
    "files_differ",
]
