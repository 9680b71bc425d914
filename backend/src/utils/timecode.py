"""Timeline geometry and timecode helpers.

All horizontal clip geometry is derived from the zoom percentage through
`map_time_to_pixel`; nothing pixel-based is stored on clips.
"""

from decimal import ROUND_FLOOR, Decimal

BASE_PIXELS_PER_SECOND = 50
MIN_ZOOM_PERCENT = 50
MAX_ZOOM_PERCENT = 200
DEFAULT_ZOOM_PERCENT = 100


def pixels_per_second(zoom_percent: float) -> float:
    return (zoom_percent / 100) * BASE_PIXELS_PER_SECOND


def map_time_to_pixel(seconds: float, zoom_percent: float) -> float:
    """Map a time offset (or a duration) to a horizontal pixel distance.

    Linear in both arguments, so `map_time_to_pixel(0, z) == 0` and the result
    grows strictly with `seconds` for any positive zoom.
    """
    return seconds * pixels_per_second(zoom_percent)


def format_timecode(seconds: float) -> str:
    """Format seconds as HH:MM:SS.mmm.

    Fractional seconds are truncated to whole milliseconds, never rounded
    (59.9999 -> 00:00:59.999). Negative input displays as zero.
    """
    if seconds < 0:
        seconds = 0.0
    # str() first so 1.001 stays 1001 ms instead of 1000.999...
    ms_total = int((Decimal(str(seconds)) * 1000).to_integral_value(rounding=ROUND_FLOOR))
    hours, rem = divmod(ms_total, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, ms = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{ms:03d}"
