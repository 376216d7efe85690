"""
Project synchronization package for keeping a project manifest in step with its source tree.
"""

from .project_sync import ProjectSynchronizer, SyncReport, sync_project

__all__ = ['ProjectSynchronizer', 'SyncReport', 'sync_project']
