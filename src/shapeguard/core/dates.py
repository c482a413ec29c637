"""Date parsing capability used by the string validator.

parse_date() never raises for malformed input: it returns ``pd.NaT`` (the
invalid-date marker) and callers test validity with is_valid_date().

Formats may be written with strftime directives (``%Y-%m-%d``) or with the
Unicode/date-fns tokens common in schemas shared with other systems
(``yyyy-MM-dd``). A format without any ``%`` is treated as token form and
translated before parsing.

Supported tokens: ``yyyy yy MMMM MMM MM M dd d HH H hh h mm m ss s SSS``.
Text in single quotes is literal (``yyyy-MM-dd'T'HH:mm``) and ``''`` is a
literal quote. Other letters (era, week, AM/PM, time zone) are not
translated and only match themselves.
"""

import re

import pandas as pd

# Longest tokens first so "yyyy" is not consumed as two "yy"
_TOKEN_DIRECTIVES: dict[str, str] = {
    "yyyy": "%Y",
    "yy": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "M": "%m",
    "dd": "%d",
    "d": "%d",
    "HH": "%H",
    "H": "%H",
    "hh": "%I",
    "h": "%I",
    "mm": "%M",
    "m": "%M",
    "ss": "%S",
    "s": "%S",
    "SSS": "%f",
}
_TOKEN_PATTERN = re.compile(
    "'(?:[^']|'')*'|"
    + "|".join(sorted(_TOKEN_DIRECTIVES, key=len, reverse=True))
)

# pandas reads these as the current time whatever the format says
_RELATIVE_KEYWORDS = frozenset({"now", "today"})


def _translate(match: re.Match[str]) -> str:
    token = match.group(0)
    if token.startswith("'"):
        if token == "''":
            return "'"
        return token[1:-1].replace("''", "'")
    return _TOKEN_DIRECTIVES[token]


def to_strftime(fmt: str) -> str:
    """Translate a token-style format into strftime directives.

    Formats already containing ``%`` are returned unchanged.
    """
    if "%" in fmt:
        return fmt
    return _TOKEN_PATTERN.sub(_translate, fmt)


def parse_date(text: str, fmt: str) -> pd.Timestamp:
    """Parse ``text`` with ``fmt``; return ``pd.NaT`` if it does not match.

    The whole string must match the format and the date must exist
    (``2024-02-30`` is invalid). Relative keywords such as ``"today"``
    never match.
    """
    if text.strip().lower() in _RELATIVE_KEYWORDS:
        return pd.NaT
    return pd.to_datetime(text, format=to_strftime(fmt), exact=True, errors="coerce")


def is_valid_date(parsed: pd.Timestamp) -> bool:
    """True unless ``parsed`` is the invalid-date marker."""
    return not pd.isna(parsed)
