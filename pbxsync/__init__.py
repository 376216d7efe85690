"""
pbxsync - Xcode project source synchronization
"""

from pbxsync.config import SyncConfig, load_config
from pbxsync.project import LoadError, ProjectError, SaveError, TargetNotFoundError
from pbxsync.sync import ProjectSynchronizer, SyncReport, sync_project

__version__ = "0.1.0"
__all__ = [
    "SyncConfig",
    "load_config",
    "LoadError",
    "ProjectError",
    "SaveError",
    "TargetNotFoundError",
    "ProjectSynchronizer",
    "SyncReport",
    "sync_project",
]
