#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
import datetime
import math
from typing import *


def _format_float(x: float) -> str:
    # TOML spells non-finite floats without Python's capitalization quirks
    if math.isnan(x):
        return "nan"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    return repr(x)


def _format_time(t: datetime.time | datetime.datetime) -> str:
    text = t.strftime("%H:%M:%S")
    if t.microsecond:
        # fractional seconds without trailing zeros, as TOML writes them
        text += "." + f"{t.microsecond:06d}".rstrip("0")
    return text


def _format_offset(dt: datetime.datetime) -> str:
    offset = dt.utcoffset()
    if offset is None:
        return ""
    if offset == datetime.timedelta(0):
        # tomllib reads "Z" and "+00:00" alike, both are written back as "Z"
        return "Z"
    sign = "-" if offset < datetime.timedelta(0) else "+"
    minutes = abs(offset) // datetime.timedelta(minutes=1)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _format_datetime(dt: datetime.datetime) -> str:
    return f"{dt.date().isoformat()}T{_format_time(dt)}{_format_offset(dt)}"


def stringify(value: Any) -> Optional[str]:
    """
    Render one TOML value as an environment variable value.
    Returns None when the value has no scalar string form (arrays, tables, ...).
    """
    # bool is a subclass of int: test it first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    # datetime is a subclass of date
    if isinstance(value, datetime.datetime):
        return _format_datetime(value)
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, datetime.time):
        return _format_time(value)
    return None
