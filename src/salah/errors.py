"""Exception types shared by the calculation and resolution layers."""


class SalahError(Exception):
    """Base class for every error raised by salah."""


class ParseError(SalahError, ValueError):
    """Malformed user input: date string, timezone, timing or authority name."""


class TimeRangeError(SalahError, ValueError):
    """A fractional hour could not be turned into a valid clock time."""


class NoSuchTimeError(SalahError):
    """The requested solar angle or shadow length never occurs on that date.

    Typical at high latitudes: no true night in polar summer, no sunrise in
    polar winter.
    """

    def __init__(self, message: str, cos_value: float) -> None:
        super().__init__(message)
        self.cos_value = cos_value


class GeocodingError(SalahError):
    """Geocoder call failure."""
