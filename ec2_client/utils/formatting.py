"""
Output helpers for the EC2 API Client command line.
"""

from typing import Iterable, List

from ec2_client.models.instance import Instance, StateChange


INSTANCE_COLUMNS = ('ID', 'STATE', 'TYPE', 'IMAGE', 'ZONE', 'DNS NAME')


def format_duration(seconds: float) -> str:
    """
    Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string
    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"


def _table(header: Iterable[str], rows: List[List[str]]) -> str:
    header = list(header)
    widths = [len(column) for column in header]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    lines = []
    for row in [header] + rows:
        lines.append('  '.join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
    return '\n'.join(lines)


def format_instances(instances: Iterable[Instance]) -> str:
    """Render instances as an aligned text table."""
    rows = [
        [
            instance.id,
            instance.state or '-',
            instance.instance_type or '-',
            instance.image_id or '-',
            instance.placement or '-',
            instance.dns_name or '-',
        ]
        for instance in instances
    ]
    if not rows:
        return 'No instances found.'
    return _table(INSTANCE_COLUMNS, rows)


def format_state_changes(changes: Iterable[StateChange]) -> str:
    """Render termination results as 'id: previous -> shutdown' lines."""
    lines = [
        f"{change.instance_id}: {change.previous_state or '?'} -> {change.shutdown_state or '?'}"
        for change in changes
    ]
    return '\n'.join(lines) if lines else 'No instances terminated.'
