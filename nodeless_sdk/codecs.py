"""
Location: nodeless_sdk/codecs.py

Summary:
    Wire codecs for the value types that need more than plain JSON:
    absolute URLs, UNIX-epoch timestamps carried as RFC3339 strings, and
    open-ended string enums that must survive tags the SDK does not know.

Usage:
    The Annotated aliases (Url, OptionalUrl, Timestamp, OptionalTimestamp)
    are used as field types by types.py so pydantic applies the codecs on
    validate and on JSON-mode dump. The plain functions are usable on
    their own.

Example:
    from nodeless_sdk.codecs import format_timestamp, parse_timestamp

    format_timestamp(1700000000)
    # '2023-11-14T22:13:20.000000Z'
    parse_timestamp("2023-11-14T22:13:20.123456Z")
    # 1700000000
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import AnyUrl, BeforeValidator, PlainSerializer, TypeAdapter, ValidationError

from .errors import InvalidTimestampError, InvalidUrlError


# strftime pattern for outgoing timestamps; %f is always six digits
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

# RFC3339 date-time: extended form only, seconds and offset required
_RFC3339_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)

_url_adapter = TypeAdapter(AnyUrl)


def parse_url(value: Any) -> AnyUrl:
    """
    Parse an absolute URL.

    Args:
        value: URL string

    Returns:
        Parsed AnyUrl

    Raises:
        InvalidUrlError: If value is not a string or not an absolute URL
    """
    if isinstance(value, AnyUrl):
        return value
    if not isinstance(value, str):
        raise InvalidUrlError(f"expected a URL string, got {type(value).__name__}")
    try:
        return _url_adapter.validate_python(value)
    except ValidationError as exc:
        raise InvalidUrlError(f"invalid URL {value!r}: {exc.errors()[0]['msg']}") from exc


def parse_optional_url(value: Any) -> Optional[AnyUrl]:
    """Parse a URL that may be absent; None and "" both mean no URL."""
    if value is None or value == "":
        return None
    return parse_url(value)


def format_url(url: AnyUrl) -> str:
    """Return the wire form of a URL."""
    return str(url)


def format_timestamp(epoch_seconds: int) -> str:
    """
    Format epoch seconds as the UTC wire timestamp.

    The fractional part is always six zeros since timestamps are kept
    as whole seconds.

    Args:
        epoch_seconds: Seconds since the UNIX epoch

    Returns:
        String like "2023-11-14T22:13:20.000000Z"

    Raises:
        InvalidTimestampError: If the value is outside the datetime range
    """
    try:
        moment = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidTimestampError(f"timestamp out of range: {epoch_seconds}") from exc
    return moment.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> int:
    """
    Parse an RFC3339 timestamp into whole epoch seconds.

    Any UTC offset is accepted and converted to UTC. Sub-second digits
    are dropped, so "...:00.123456Z" and "...:00.000000Z" give the same
    result.

    Args:
        value: RFC3339 timestamp string

    Returns:
        Seconds since the UNIX epoch

    Raises:
        InvalidTimestampError: If value is not a string or not an
                               RFC3339 date-time with a UTC offset
    """
    if not isinstance(value, str):
        raise InvalidTimestampError(f"expected a timestamp string, got {type(value).__name__}")

    # fromisoformat alone also takes basic-form and offset-less ISO 8601
    match = _RFC3339_RE.fullmatch(value)
    if match is None:
        raise InvalidTimestampError(f"invalid timestamp {value!r}")

    fraction, offset = match.group(1) or "", match.group(2)
    if offset in ("Z", "z"):
        offset = "+00:00"
    # Digits past microseconds are dropped anyway
    text = value[:19] + fraction[:7] + offset

    try:
        moment = datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidTimestampError(f"invalid timestamp {value!r}") from exc

    return int(moment.astimezone(timezone.utc).replace(microsecond=0).timestamp())


def _coerce_timestamp(value: Any) -> int:
    # Plain ints are epoch seconds already, as used when building request models
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return parse_timestamp(value)


Url = Annotated[
    AnyUrl,
    BeforeValidator(parse_url),
    PlainSerializer(format_url, return_type=str, when_used="json"),
]

OptionalUrl = Annotated[
    Optional[AnyUrl],
    BeforeValidator(parse_optional_url),
    PlainSerializer(format_url, return_type=str, when_used="json-unless-none"),
]

Timestamp = Annotated[
    int,
    BeforeValidator(_coerce_timestamp),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]

OptionalTimestamp = Optional[Timestamp]


class OpenEnum(str, Enum):
    """
    String enum that keeps tags it does not recognise.

    Looking up a known tag returns the named member. Any other string
    returns an UNKNOWN pseudo-member whose value is the original text,
    so decoding never fails and re-encoding gives back the same tag.
    Matching is case-sensitive.

    Example:
        class Color(OpenEnum):
            RED = "red"

        Color("red") is Color.RED        # True
        Color("teal").is_unknown         # True
        Color("teal").value              # 'teal'
    """

    @classmethod
    def _missing_(cls, value: object) -> Optional["OpenEnum"]:
        if not isinstance(value, str):
            return None
        member = str.__new__(cls, value)
        member._name_ = "UNKNOWN"
        member._value_ = value
        return member

    @property
    def is_unknown(self) -> bool:
        """True if the tag is not one of the named members."""
        return self._name_ == "UNKNOWN"

    def __str__(self) -> str:
        return self.value
