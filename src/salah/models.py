"""Data model definitions: parameter tables, raw input, resolved context, and results."""

from dataclasses import dataclass
from datetime import date, time, timedelta
from enum import Enum

from pytz.tzinfo import BaseTzInfo


class School(Enum):
    """Juristic school. The value is the shadow-to-object ratio used for Asr."""

    SHAFI = 1.0
    HANAFI = 2.0

    @property
    def shadow_length(self) -> float:
        return self.value


@dataclass(frozen=True)
class NightAngle:
    """Isha begins when the sun reaches this depression below the horizon."""

    degrees: float


@dataclass(frozen=True)
class NightDuration:
    """Isha begins a fixed interval after Maghrib."""

    after_sunset: timedelta


@dataclass(frozen=True)
class AuthorityParams:
    id: str  # Lowercase identifier accepted on the command line
    label: str  # Short display form ("MWL", "ISNA", ...)
    name: str  # Full name of the institution
    dawn_angle: float  # Fajr depression angle (degrees below horizon)
    night: NightAngle | NightDuration  # Isha criterion


class Authority(Enum):
    """Calculation authority: fixes the Fajr angle and the Isha criterion."""

    MWL = AuthorityParams(
        "mwl", "MWL", "Muslim World League", 18.0, NightAngle(17.0)
    )
    ISNA = AuthorityParams(
        "isna",
        "ISNA",
        "Islamic Society of North America",
        15.0,
        NightAngle(15.0),
    )
    EGYPT = AuthorityParams(
        "egypt",
        "Egypt",
        "Egyptian General Authority of Survey",
        19.5,
        NightAngle(17.5),
    )
    MAKKAH = AuthorityParams(
        "makkah",
        "Makkah",
        "Umm al-Qura University, Makkah",
        18.5,
        NightDuration(timedelta(minutes=90)),
    )
    KARACHI = AuthorityParams(
        "karachi",
        "Karachi",
        "University of Islamic Sciences, Karachi",
        18.0,
        NightAngle(18.0),
    )
    TEHRAN = AuthorityParams(
        "tehran",
        "Tehran",
        "Institute of Geophysics, University of Tehran",
        17.7,
        NightAngle(14.0),
    )
    JAFARI = AuthorityParams(
        "jafari",
        "Jafari",
        "Shia Ithna Ashari, Leva Research Institute, Qum",
        16.0,
        NightAngle(14.0),
    )

    @property
    def id(self) -> str:
        return self.value.id

    @property
    def dawn_angle(self) -> float:
        return self.value.dawn_angle

    @property
    def night(self) -> NightAngle | NightDuration:
        return self.value.night

    @property
    def description(self) -> str:
        """Help text, e.g. "Fajr at 18 degrees, Isha at 17 degrees."."""
        night = self.value.night
        if isinstance(night, NightDuration):
            minutes = int(night.after_sunset.total_seconds() // 60)
            isha = f"Isha {minutes} min after Maghrib"
        else:
            isha = f"Isha at {night.degrees:g} degrees"
        return f"Fajr at {self.value.dawn_angle:g} degrees, {isha}."


class Timing(Enum):
    """The seven named daily timings, in order of occurrence."""

    FAJR = "fajr"
    SUNRISE = "sunrise"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"
    MIDNIGHT = "midnight"

    @property
    def id(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _TIMING_DESCRIPTIONS[self]


_TIMING_DESCRIPTIONS: dict[Timing, str] = {
    Timing.FAJR: "The dawn prayer time. Dependent on angle determined by authority (see salah authority).",
    Timing.SUNRISE: "Sunrise time. Fajr time ends at sunrise.",
    Timing.DHUHR: "The mid-day prayer time.",
    Timing.ASR: "The afternoon prayer time. Dependent on school of thought (Hanafi vs others).",
    Timing.MAGHRIB: "The sunset prayer time.",
    Timing.ISHA: "The night prayer time. Dependent on angle determined by authority (see salah authority).",
    Timing.MIDNIGHT: "The Islamic midnight time. Isha time ends at midnight.",
}

# The five obligatory prayers, selected with the "fardh" timing name
FARDH: tuple[Timing, ...] = (
    Timing.FAJR,
    Timing.DHUHR,
    Timing.ASR,
    Timing.MAGHRIB,
    Timing.ISHA,
)


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    timings: tuple[str, ...]  # Timing names ("fajr", "isha", "fardh", ...)
    date: str  # "YYYY-MM-DD" or "today"
    timezone: str  # IANA name ("America/Toronto") or "auto"
    authority: str  # Authority identifier, case-insensitive
    hanafi: bool = False  # Hanafi school for Asr, Shafi otherwise
    all_timings: bool = False  # Ignore `timings` and compute everything
    lat: float | None = None  # Set together with lng, or use city/country
    lng: float | None = None
    city: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone resolution. Input to the calculation."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    timezone: BaseTzInfo  # pytz timezone the results are expressed in
    date: date  # Local calendar date to compute for
    address_display: str  # Geocoder display name, or the coordinates


@dataclass(frozen=True)
class ScheduleEntry:
    timing: Timing
    time: time | None  # None when the event does not occur on this date


@dataclass(frozen=True)
class Schedule:
    """The sole input to renderers. Fully computed state."""

    context: ObserverContext
    authority: Authority
    school: School
    entries: tuple[ScheduleEntry, ...]
