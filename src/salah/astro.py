"""Solar position and horizon solver: Julian dates, equation of time, declination, event hours."""

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum

from salah import trig
from salah.errors import NoSuchTimeError

J2000 = 2451545.0  # Julian date of 2000 January 1.5
SUNRISE_ANGLE = 0.833  # Refraction + solar radius at the geometric horizon

# acos arguments this close outside [-1, 1] are rounding noise, not a missing event
_COS_TOLERANCE = 1e-9


class Direction(Enum):
    SUNRISE = -1  # Before solar noon
    SUNSET = 1  # After solar noon


@dataclass(frozen=True)
class SunPosition:
    equation_of_time: float  # Hours
    declination: float  # Degrees


def julian_date(day: date) -> float:
    """Julian date at 0h UT of the given Gregorian calendar date."""
    year, month = day.year, day.month
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day.day
        + b
        - 1524.5
    )


def sun_position(jd: float) -> SunPosition:
    """Equation of time and solar declination for a Julian date.

    Low-precision approximation from the U.S. Naval Observatory
    (https://web.archive.org/web/20181115153648/http://aa.usno.navy.mil/faq/docs/SunApprox.php),
    good to about 1 degree over two centuries around 2000.

    Args:
        jd: Julian date.

    Returns:
        SunPosition with the equation of time in hours and the declination in degrees.
    """
    n = jd - J2000

    g = trig.normalize_angle(357.529 + 0.98560028 * n)  # Mean anomaly
    q = trig.normalize_angle(280.459 + 0.98564736 * n)  # Mean longitude
    # Apparent ecliptic longitude
    lon = trig.normalize_angle(q + 1.915 * trig.sin(g) + 0.020 * trig.sin(2 * g))
    e = 23.439 - 0.00000036 * n  # Mean obliquity of the ecliptic

    ra = trig.normalize_hour(
        trig.atan2(trig.cos(e) * trig.sin(lon), trig.cos(lon)) / 15.0
    )
    eqt = q / 15.0 - ra
    sin_decl = max(-1.0, min(1.0, trig.sin(e) * trig.sin(lon)))
    decl = trig.asin(sin_decl)

    return SunPosition(equation_of_time=eqt, declination=decl)


def zenith_hour(jd: float, lng: float, tz_offset: float) -> float:
    """Local clock hour of solar noon.

    Args:
        jd: Julian date.
        lng: Longitude in degrees, east positive.
        tz_offset: UTC offset of the local clock in hours.
    """
    eqt = sun_position(jd).equation_of_time
    return 12.0 + tz_offset - lng / 15.0 - eqt


def _hour_offset(altitude: float, lat: float, decl: float) -> float:
    """Hours between solar noon and the sun crossing `altitude` degrees.

    Raises:
        NoSuchTimeError: If the sun never reaches that altitude on this day.
    """
    cos_h = (trig.sin(altitude) - trig.sin(lat) * trig.sin(decl)) / (
        trig.cos(lat) * trig.cos(decl)
    )
    if math.isnan(cos_h) or abs(cos_h) > 1.0 + _COS_TOLERANCE:
        raise NoSuchTimeError(
            f"Sun never reaches {altitude:.3f} degrees altitude "
            f"(lat={lat}, declination={decl:.3f})",
            cos_h,
        )
    cos_h = max(-1.0, min(1.0, cos_h))
    return trig.acos(cos_h) / 15.0


def horizon_hour(
    angle: float, jd: float, zenith: float, lat: float, direction: Direction
) -> float:
    """Hour at which the sun is `angle` degrees below the horizon.

    Args:
        angle: Depression below the horizon (0.833 for sunrise/sunset, 18 for astronomical dawn).
        jd: Julian date.
        zenith: Hour of solar noon, see zenith_hour().
        lat: Latitude in degrees.
        direction: Before (SUNRISE) or after (SUNSET) solar noon.

    Returns:
        Fractional hour, not normalized.

    Raises:
        NoSuchTimeError: If the sun does not reach that depression on this date.
    """
    decl = sun_position(jd).declination
    t = _hour_offset(-angle, lat, decl)
    return zenith + direction.value * t


def shadow_hour(length: float, jd: float, zenith: float, lat: float) -> float:
    """Hour after noon at which an object's shadow is `length` times its height
    plus its noon shadow.

    Raises:
        NoSuchTimeError: If the shadow never reaches that length, including
            polar night when the sun stays below the horizon at noon.
    """
    decl = sun_position(jd).declination
    noon_zenith = abs(lat - decl)
    if noon_zenith >= 90.0:
        raise NoSuchTimeError(
            f"Sun stays below the horizon at noon (lat={lat}, declination={decl:.3f})",
            math.nan,
        )
    altitude = trig.acot(length + trig.tan(noon_zenith))
    if altitude <= 0.0:
        raise NoSuchTimeError(
            f"No shadow of length {length} (lat={lat}, declination={decl:.3f})",
            math.nan,
        )
    return zenith + _hour_offset(altitude, lat, decl)
