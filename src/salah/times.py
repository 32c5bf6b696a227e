"""PrayerTimes: the calculation configuration and its seven timing queries."""

import dataclasses
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, time

from pytz.tzinfo import BaseTzInfo

from salah import astro, clock, trig
from salah.models import Authority, NightDuration, School, Timing

log = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/Toronto"


@dataclass(frozen=True)
class PrayerTimes:
    """Prayer times for one coordinate, date and timezone.

    Immutable: the with_* methods return a new configuration. The Julian date
    and the timezone offset are derived at construction, so every query on an
    instance sees the same inputs.

    Example:
        pt = (
            PrayerTimes(43.87982, -78.9421751)
            .with_date(date(2024, 2, 9))
            .with_timezone("America/Toronto")
            .with_authority(Authority.ISNA)
        )
        pt.fajr(), pt.isha()
    """

    lat: float
    lng: float
    day: date | None = None  # None: today in `timezone`
    timezone: BaseTzInfo | None = None  # None: America/Toronto
    authority: Authority = Authority.ISNA
    school: School = School.HANAFI

    jd: float = field(init=False, repr=False)  # Julian date of `day`
    tz_offset: float = field(init=False, repr=False)  # UTC offset on `day`, hours

    def __post_init__(self) -> None:
        # frozen: derived fields go through object.__setattr__
        if self.timezone is None:
            object.__setattr__(self, "timezone", clock.load_timezone(DEFAULT_TIMEZONE))
        if self.day is None:
            object.__setattr__(self, "day", clock.today(self.timezone))
        object.__setattr__(self, "jd", astro.julian_date(self.day))
        object.__setattr__(
            self, "tz_offset", clock.timezone_offset(self.timezone, self.day)
        )
        log.debug(
            "PrayerTimes lat=%s lng=%s day=%s jd=%s tz_offset=%s",
            self.lat,
            self.lng,
            self.day,
            self.jd,
            self.tz_offset,
        )

    # --- Builders ---

    def with_date(self, day: date) -> "PrayerTimes":
        """Same configuration for another date. Recomputes jd and tz_offset."""
        return dataclasses.replace(self, day=day)

    def with_timezone(self, tz: BaseTzInfo | str) -> "PrayerTimes":
        """Same configuration in another timezone (pytz object or IANA name)."""
        if isinstance(tz, str):
            tz = clock.load_timezone(tz)
        return dataclasses.replace(self, timezone=tz)

    def with_authority(self, authority: Authority) -> "PrayerTimes":
        return dataclasses.replace(self, authority=authority)

    def with_school(self, school: School) -> "PrayerTimes":
        return dataclasses.replace(self, school=school)

    # --- Hours ---

    def _zenith(self) -> float:
        return astro.zenith_hour(self.jd, self.lng, self.tz_offset)

    def _horizon(self, angle: float, direction: astro.Direction) -> float:
        return astro.horizon_hour(angle, self.jd, self._zenith(), self.lat, direction)

    @staticmethod
    def _to_time(hour: float) -> time:
        return clock.hour_to_time(trig.normalize_hour(hour), round_seconds=True)

    # --- Timings ---

    def fajr(self) -> time:
        """Dawn prayer: the sun at the authority's dawn angle below the horizon."""
        return self._to_time(
            self._horizon(self.authority.dawn_angle, astro.Direction.SUNRISE)
        )

    def sunrise(self) -> time:
        return self._to_time(self._horizon(astro.SUNRISE_ANGLE, astro.Direction.SUNRISE))

    def dhuhr(self) -> time:
        """Mid-day prayer: solar noon."""
        return self._to_time(self._zenith())

    def asr(self) -> time:
        """Afternoon prayer: shadow length set by the school."""
        hour = astro.shadow_hour(
            self.school.shadow_length, self.jd, self._zenith(), self.lat
        )
        return self._to_time(hour)

    def maghrib(self) -> time:
        """Sunset prayer."""
        return self._to_time(self._horizon(astro.SUNRISE_ANGLE, astro.Direction.SUNSET))

    def isha(self) -> time:
        """Night prayer: an angle below the horizon, or a fixed time after Maghrib."""
        night = self.authority.night
        if isinstance(night, NightDuration):
            sunset = self._horizon(astro.SUNRISE_ANGLE, astro.Direction.SUNSET)
            return self._to_time(sunset + night.after_sunset.total_seconds() / 3600.0)
        return self._to_time(self._horizon(night.degrees, astro.Direction.SUNSET))

    def midnight(self) -> time:
        """Islamic midnight: halfway from sunset to the next sunrise."""
        sunrise = self._horizon(astro.SUNRISE_ANGLE, astro.Direction.SUNRISE)
        sunset = self._horizon(astro.SUNRISE_ANGLE, astro.Direction.SUNSET)
        return self._to_time(sunset + trig.normalize_hour(sunrise - sunset) / 2.0)

    def timing(self, which: Timing) -> time:
        """Dispatch a Timing to its query method.

        Raises:
            NoSuchTimeError: If the event does not occur on this date.
        """
        return getattr(self, which.value)()

    def times(self, timings: Iterable[Timing] = tuple(Timing)) -> dict[Timing, time]:
        """Several timings at once, in the order given."""
        return {t: self.timing(t) for t in timings}
