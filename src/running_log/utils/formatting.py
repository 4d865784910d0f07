"""Clock-time and pace formatting."""


def _minutes_seconds(total_seconds: float) -> tuple[int, int]:
    # Round first so 239.6s prints as 4:00, not 3:60
    rounded = int(round(total_seconds))
    return rounded // 60, rounded % 60


def format_time(seconds: float) -> str:
    """Format seconds as H:MM:SS (hours are always shown)."""
    total = int(round(seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return f"{hours}:{minutes:02d}:{secs:02d}"


def format_pace(seconds: float, distance_km: float = 1.0) -> str:
    """
    Format the per-kilometer pace of a total time as M:SS.

    Args:
        seconds: Total elapsed time in seconds
        distance_km: Distance covered in that time (1 for a pace value)

    Returns:
        Pace string without unit suffix, e.g. "4:48"
    """
    minutes, secs = _minutes_seconds(seconds / distance_km)
    return f"{minutes}:{secs:02d}"


def format_split(seconds: float) -> str:
    """Format a short interval split as M:SS."""
    minutes, secs = _minutes_seconds(seconds)
    return f"{minutes}:{secs:02d}"


def time_from_parts(hours: int = 0, minutes: int = 0, seconds: int = 0) -> int:
    """Compose hours/minutes/seconds form fields into total seconds."""
    return (hours or 0) * 3600 + (minutes or 0) * 60 + (seconds or 0)


def parse_time(time_str: str) -> int:
    """
    Parse a time string to seconds.

    Accepts formats: H:MM:SS, MM:SS, or plain seconds.

    Raises:
        ValueError: If time format is invalid
    """
    time_str = time_str.strip()

    try:
        return int(float(time_str))
    except (ValueError, OverflowError):
        pass

    parts = time_str.split(":")

    try:
        if len(parts) == 3:
            hours, minutes, secs = parts
            return int(hours) * 3600 + int(minutes) * 60 + int(float(secs))
        elif len(parts) == 2:
            minutes, secs = parts
            return int(minutes) * 60 + int(float(secs))
        else:
            raise ValueError(f"Invalid time format: {time_str}")
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Invalid time format: {time_str}") from e
