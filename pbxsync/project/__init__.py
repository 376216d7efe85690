"""
Project manifest interface and its Xcode backend.
"""

from .base import (
    FileReference,
    Group,
    LoadError,
    Project,
    ProjectError,
    ProjectLoader,
    SaveError,
    Target,
    TargetNotFoundError,
)
from .xcode import XcodeProjectFile, load_project

__all__ = [
    'FileReference',
    'Group',
    'LoadError',
    'Project',
    'ProjectError',
    'ProjectLoader',
    'SaveError',
    'Target',
    'TargetNotFoundError',
    'XcodeProjectFile',
    'load_project',
]
