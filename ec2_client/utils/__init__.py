"""Utility functions and helpers."""

from ec2_client.utils.formatting import (
    format_duration,
    format_instances,
    format_state_changes,
)

__all__ = [
    'format_duration',
    'format_instances',
    'format_state_changes',
]
