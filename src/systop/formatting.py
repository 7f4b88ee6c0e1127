"""Display formatting helpers for systop."""

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")
ELLIPSIS = "..."


def format_bytes(size: int) -> str:
    """Format bytes as human-readable string."""
    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(BYTE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    if unit_index == 0:
        return f"{int(size)} B"
    return f"{value:.1f} {BYTE_UNITS[unit_index]}"


def format_uptime(seconds: float) -> str:
    """
    Format an uptime as days, hours and minutes.

    Leading zero units are omitted and seconds are never shown, so
    3661 becomes "1h 1m" and 59 becomes "0m".
    """
    total = max(int(seconds), 0)
    days = total // 86400
    hours = (total % 86400) // 3600
    minutes = (total % 3600) // 60

    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def truncate_name(name: str, max_len: int) -> str:
    """Shorten a name to max_len characters, ending with an ellipsis."""
    if len(name) <= max_len:
        return name
    return name[: max(max_len - len(ELLIPSIS), 0)] + ELLIPSIS


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def format_load(load_avg: tuple[float, float, float]) -> str:
    """Format 1, 5 and 15 minute load averages."""
    return " ".join(f"{load:.2f}" for load in load_avg)
