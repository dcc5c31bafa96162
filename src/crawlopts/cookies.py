"""Cookie line parsing for browser cookie loading."""

from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from enum import Enum
from pathlib import Path
from typing import Any

from .exceptions import CookieFileError

# Called with (line, reason) for input that was dropped or partly ignored
InvalidHandler = Callable[[str, str], None]

# Prefix curl and browsers use to mark HttpOnly entries in cookies.txt
NETSCAPE_HTTPONLY_PREFIX = "#HttpOnly_"


class SameSite(Enum):
    """Same-site policy of a cookie."""

    UNSET = ""
    NONE = "None"
    LAX = "Lax"
    STRICT = "Strict"


@dataclass
class CookieRecord:
    """A single cookie with its typed attributes."""

    name: str
    value: str
    domain: str = ""
    expires: int = 0
    path: str = ""
    secure: bool = False
    http_only: bool = False
    same_site: SameSite = SameSite.UNSET

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict, with same_site as its string value."""
        data = asdict(self)
        data["same_site"] = self.same_site.value
        return data


def parse_http_date(value: str) -> int:
    """Parse an HTTP date like ``Wed, 21 Oct 2015 07:28:00 GMT``.

    Returns:
        Seconds since the Unix epoch

    Raises:
        ValueError: If the date cannot be parsed
    """
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError) as e:
        raise ValueError(f"invalid date {value!r}") from e
    if parsed is None:
        raise ValueError(f"invalid date {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def format_http_date(timestamp: int) -> str:
    """Format epoch seconds as an HTTP date."""
    return format_datetime(datetime.fromtimestamp(timestamp, timezone.utc), usegmt=True)


# --- Attribute setters ---
# Each setter receives the record and the attribute value (None when the
# attribute is bare) and raises ValueError for values it cannot use.

AttributeSetter = Callable[[CookieRecord, str | None], None]


def _string_attr(field: str) -> AttributeSetter:
    def setter(record: CookieRecord, value: str | None) -> None:
        if value is None:
            raise ValueError(f"{field} requires a value")
        setattr(record, field, value)

    return setter


def _flag_attr(field: str) -> AttributeSetter:
    def setter(record: CookieRecord, value: str | None) -> None:
        setattr(record, field, True)

    return setter


def _date_attr(field: str) -> AttributeSetter:
    def setter(record: CookieRecord, value: str | None) -> None:
        if value is None:
            raise ValueError(f"{field} requires a value")
        setattr(record, field, parse_http_date(value))

    return setter


def _enum_attr(field: str, enum: type[Enum]) -> AttributeSetter:
    def setter(record: CookieRecord, value: str | None) -> None:
        if not value:
            raise ValueError(f"{field} requires a value")
        try:
            setattr(record, field, enum(value))
        except ValueError as e:
            raise ValueError(f"unknown {field} value {value!r}") from e

    return setter


# Attribute names are matched lower-cased; unknown attributes are ignored
ATTRIBUTE_SETTERS: dict[str, AttributeSetter] = {
    "domain": _string_attr("domain"),
    "expires": _date_attr("expires"),
    "path": _string_attr("path"),
    "secure": _flag_attr("secure"),
    "httponly": _flag_attr("http_only"),
    "samesite": _enum_attr("same_site", SameSite),
}


def parse_cookie_line(line: str, on_invalid: InvalidHandler | None = None) -> CookieRecord | None:
    """Parse one ``name=value; Attr=value; Flag`` line.

    Returns None if the line is empty or has no leading ``name=value`` pair.
    Attribute values that cannot be used are skipped and reported through
    on_invalid; the rest of the line is still parsed.
    """
    tokens = [token.strip() for token in line.split(";")]
    tokens = [token for token in tokens if token]
    if not tokens:
        return None

    name, sep, value = tokens[0].partition("=")
    if not sep:
        if on_invalid:
            on_invalid(line, "missing name=value pair")
        return None

    record = CookieRecord(name=name.strip(), value=value.strip())

    for token in tokens[1:]:
        attr, sep, attr_value = token.partition("=")
        setter = ATTRIBUTE_SETTERS.get(attr.strip().lower())
        if setter is None:
            continue
        try:
            setter(record, attr_value.strip() if sep else None)
        except ValueError as e:
            if on_invalid:
                on_invalid(line, str(e))

    return record


def parse_cookie_lines(
    lines: Iterable[str], on_invalid: InvalidHandler | None = None
) -> list[CookieRecord]:
    """Parse cookie lines into records, one per non-empty line, in order."""
    cookies = []
    for line in lines:
        if not line:
            continue
        record = parse_cookie_line(line, on_invalid)
        if record is not None:
            cookies.append(record)
    return cookies


def parse_netscape_line(line: str) -> CookieRecord | None:
    """Parse a Netscape cookies.txt line.

    Format: domain, include_subdomains, path, secure, expires, name, value
    Fields are tab-separated. Returns None if the line is not in this format.
    """
    http_only = line.startswith(NETSCAPE_HTTPONLY_PREFIX)
    if http_only:
        line = line[len(NETSCAPE_HTTPONLY_PREFIX):]

    parts = line.split("\t")
    if len(parts) < 7:
        return None

    return CookieRecord(
        name=parts[5],
        value=parts[6],
        domain=parts[0],
        expires=int(parts[4]) if parts[4].isdigit() else 0,
        path=parts[2],
        secure=parts[3].upper() == "TRUE",
        http_only=http_only,
    )


def load_cookies_from_file(
    path: Path, on_invalid: InvalidHandler | None = None
) -> list[CookieRecord]:
    """Load cookies from a file.

    Netscape cookies.txt lines are converted directly, lines starting with #
    are comments, and anything else is parsed as a cookie line.

    Raises:
        CookieFileError: If the file cannot be read
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CookieFileError(f"Cannot read cookie file {path}: {e}") from e

    cookies = []
    for raw_line in text.splitlines():
        line = raw_line.strip("\r\n ")
        if not line:
            continue
        if line.startswith("#") and not line.startswith(NETSCAPE_HTTPONLY_PREFIX):
            continue
        netscape = parse_netscape_line(line)
        if netscape is not None:
            cookies.append(netscape)
            continue
        record = parse_cookie_line(line, on_invalid)
        if record is not None:
            cookies.append(record)
    return cookies


def format_cookie_line(record: CookieRecord) -> str:
    """Format a record as a cookie line that parses back to the same record."""
    parts = [f"{record.name}={record.value}"]
    if record.domain:
        parts.append(f"Domain={record.domain}")
    if record.expires:
        parts.append(f"Expires={format_http_date(record.expires)}")
    if record.path:
        parts.append(f"Path={record.path}")
    if record.secure:
        parts.append("Secure")
    if record.http_only:
        parts.append("HttpOnly")
    if record.same_site is not SameSite.UNSET:
        parts.append(f"SameSite={record.same_site.value}")
    return "; ".join(parts)


def format_cookie_header(cookies: list[CookieRecord]) -> str:
    """Format cookies as HTTP Cookie header value."""
    return "; ".join(f"{c.name}={c.value}" for c in cookies)
