"""Resolution layer: geocoding, timezone lookup, input parsing, and schedule assembly."""

import logging
import os

import httpx
from pytz.tzinfo import BaseTzInfo
from timezonefinder import TimezoneFinder

from salah import clock
from salah.errors import GeocodingError, NoSuchTimeError, ParseError
from salah.models import (
    FARDH,
    Authority,
    ObserverContext,
    QueryInput,
    Schedule,
    ScheduleEntry,
    School,
    Timing,
)
from salah.times import PrayerTimes

log = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = "salah-cli"

_tf = TimezoneFinder()


def parse_timings(names: tuple[str, ...], all_timings: bool = False) -> tuple[Timing, ...]:
    """Map timing names to Timing members, keeping the given order.

    "fardh" expands to the five obligatory prayers. Duplicates are dropped.

    Raises:
        ParseError: On an unknown name.
    """
    if all_timings:
        return tuple(Timing)

    timings: list[Timing] = []
    for name in names:
        key = name.strip().lower()
        if key == "fardh":
            expanded: tuple[Timing, ...] = FARDH
        else:
            try:
                expanded = (Timing(key),)
            except ValueError as e:
                raise ParseError(f"timing = `{name}` is not valid!") from e
        timings.extend(t for t in expanded if t not in timings)
    return tuple(timings)


def parse_authority(name: str) -> Authority:
    """Case-insensitive authority lookup by identifier.

    Raises:
        ParseError: On an unknown identifier.
    """
    key = name.strip().lower()
    for authority in Authority:
        if authority.id == key:
            return authority
    raise ParseError(f"authority = `{name}` is not valid!")


def resolve_timezone(name: str, lat: float, lng: float) -> BaseTzInfo:
    """Timezone by IANA name, or "auto" to look it up from the coordinate.

    Raises:
        ParseError: If the name is unknown or no timezone covers the coordinate.
    """
    if name.strip().lower() != "auto":
        return clock.load_timezone(name)
    tz_str = _tf.timezone_at(lat=lat, lng=lng)
    if tz_str is None:
        raise ParseError(f"Timezone not found: lat={lat}, lng={lng}")
    log.debug("Timezone for lat=%s lng=%s: %s", lat, lng, tz_str)
    return clock.load_timezone(tz_str)


def geocode_city(city: str, country: str) -> tuple[float, float, str]:
    """Nominatim (OpenStreetMap) geocoder.

    Args:
        city: City name.
        country: Country name.

    Returns:
        (lat, lng, display_name) of the best match.

    Raises:
        GeocodingError: On HTTP failure, a malformed response, or no match.
    """
    params = {"city": city, "country": country, "format": "jsonv2", "limit": 1}
    headers = {"User-Agent": os.environ.get("SALAH_USER_AGENT", DEFAULT_USER_AGENT)}
    try:
        resp = httpx.get(NOMINATIM_URL, params=params, headers=headers, timeout=10)
        resp.raise_for_status()
        results = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise GeocodingError(
            f"Could not get coordinates with city = `{city}` and country = `{country}`: {e}"
        ) from e
    if not results:
        raise GeocodingError(
            f"Could not find lat, lng from city = `{city}` and country = `{country}`. "
            "Please check spelling!"
        )
    r = results[0]
    try:
        lat, lng = float(r["lat"]), float(r["lon"])
    except (KeyError, TypeError, ValueError) as e:
        raise GeocodingError(f"Malformed geocoder result: {r!r}") from e
    log.debug("Geocoded %s, %s -> %s, %s", city, country, lat, lng)
    return lat, lng, r.get("display_name", f"{city}, {country}")


def resolve_context(query: QueryInput) -> ObserverContext:
    """Resolve raw input to an ObserverContext.

    Uses the coordinates when given, otherwise geocodes city/country.

    Raises:
        ParseError: On a bad timezone or date string, or missing location.
        GeocodingError: If the city cannot be found.
    """
    if query.lat is not None and query.lng is not None:
        lat, lng = query.lat, query.lng
        address_display = f"{lat}, {lng}"
    elif query.city and query.country:
        lat, lng, address_display = geocode_city(query.city, query.country)
    else:
        raise ParseError("Either lat/lng or city/country is required")

    tz = resolve_timezone(query.timezone, lat, lng)
    day = clock.date_from_string(query.date, tz)
    return ObserverContext(
        lat=lat, lng=lng, timezone=tz, date=day, address_display=address_display
    )


def compute_schedule(
    context: ObserverContext,
    timings: tuple[Timing, ...],
    authority: Authority,
    school: School,
) -> Schedule:
    """Compute the requested timings for a context.

    A timing whose event does not occur on that date (polar day or night)
    gets time=None instead of failing the whole schedule.
    """
    pt = PrayerTimes(
        context.lat,
        context.lng,
        day=context.date,
        timezone=context.timezone,
        authority=authority,
        school=school,
    )
    entries: list[ScheduleEntry] = []
    for timing in timings:
        try:
            entries.append(ScheduleEntry(timing=timing, time=pt.timing(timing)))
        except NoSuchTimeError as e:
            log.warning("No %s on %s at %s: %s", timing.id, context.date, context.address_display, e)
            entries.append(ScheduleEntry(timing=timing, time=None))

    return Schedule(
        context=context, authority=authority, school=school, entries=tuple(entries)
    )


def run(query: QueryInput) -> Schedule:
    """Top-level entry point: takes a QueryInput and returns a Schedule.

    Raises:
        ParseError: On invalid names, dates or timezones.
        GeocodingError: If the location lookup fails.
    """
    timings = parse_timings(query.timings, query.all_timings)
    authority = parse_authority(query.authority)
    school = School.HANAFI if query.hanafi else School.SHAFI
    context = resolve_context(query)
    return compute_schedule(context, timings, authority, school)
