"""
Utilities for auto-tune-ceph.
"""

from .commands import CommandRunner, run_command

__all__ = [
    "CommandRunner",
    "run_command",
]
