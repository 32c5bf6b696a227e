"""Plain-text renderer for schedules and the help listings."""

from salah.models import Authority, Schedule, Timing

INVALID_TIME = "-----"
DEFAULT_FORMAT = "%H:%M:%S"

_WIDTH = 10


def format_schedule(schedule: Schedule, pattern: str = DEFAULT_FORMAT) -> str:
    """Render a Schedule as one "name: time" line per entry.

    Args:
        schedule: Computed timings.
        pattern: strftime pattern applied to each time.

    Returns:
        Text without a trailing newline. Events that do not occur show as "-----".
    """
    lines = []
    for entry in schedule.entries:
        value = INVALID_TIME if entry.time is None else entry.time.strftime(pattern)
        lines.append(f"{entry.timing.id}: {value}")
    return "\n".join(lines)


def render_timings_help() -> str:
    lines = [
        "Usage: salah <location | coord> [OPTIONS] [TIMINGS]...",
        "",
        "The below can be passed to [TIMINGS]...",
        "",
        "Timings:",
    ]
    for timing in Timing:
        lines.append(f"  {timing.id:<{_WIDTH}}{timing.description}")
    lines.append(
        f"  {'fardh':<{_WIDTH}}Only the 5 obligatory (fardh) prayer times."
    )
    return "\n".join(lines)


def render_authority_help() -> str:
    lines = [
        "Usage: --auth <AUTH>",
        "",
        "Explanation:",
        "Calculation authorities are used for the calculation of Fajr and Isha.",
        "The time for Fajr is described as dawn; when there is a fine white line at the horizon.",
        "Isha time is described as when the night sky has lost all the light from the sunset.",
        "As this is quite ambiguous, the scholars have differed upon the angle that the sun",
        "makes when these two times occur. Each authority has slightly different angles for",
        "Fajr and Isha. Makkah uses a time difference from Maghrib (sunset).",
        "",
        "The below can be used with the --auth <AUTH> option when calculating timings.",
        "",
        "Authorities:",
    ]
    for authority in Authority:
        lines.append(
            f"  {authority.value.label:<{_WIDTH}}{authority.description} - {authority.value.name}"
        )
    return "\n".join(lines)
