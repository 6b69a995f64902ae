"""Resolve a message handle into a MessageDescriptor."""

from __future__ import annotations

from datetime import timezone
from email import policy as email_policy
from email.errors import HeaderParseError
from email.header import decode_header, make_header
from email.parser import BytesParser
from email.utils import parsedate_to_datetime

from .errors import MessageParseError
from .models import MessageDescriptor, MessageHandle
from .store import MaildirStore

_HEADER_PARSER = BytesParser(policy=email_policy.compat32)


def parse_date(value: str | None) -> int:
    """Parse an RFC 2822 Date header into seconds since the epoch.

    Dates without a usable zone (e.g. ``-0000``) are taken as UTC.
    """
    if not value:
        raise MessageParseError("Broken Date header: missing")
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError) as e:
        raise MessageParseError(f"Broken Date header: {value!r}") from e
    if parsed is None:
        raise MessageParseError(f"Broken Date header: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def _header_text(headers, name: str) -> str:
    value = headers.get(name)
    if value is None:
        return ""
    return " ".join(str(value).split())


def _decode_subject(value: str) -> str:
    """Decode RFC 2047 encoded words, keeping the raw text if they are malformed."""
    try:
        return str(make_header(decode_header(value)))
    except (HeaderParseError, UnicodeError, LookupError):
        return value


def resolve_message(store: MaildirStore, handle: MessageHandle) -> MessageDescriptor:
    """Read flags and headers of one message and build its descriptor.

    Raises MessageParseError when the envelope can't be read or the Date
    header doesn't parse. Missing Subject/Date text defaults to "".
    """
    seen = store.is_seen(handle)
    flagged = store.is_flagged(handle)

    try:
        with store.open_message(handle) as f:
            headers = _HEADER_PARSER.parse(f, headersonly=True)
    except (OSError, ValueError) as e:
        raise MessageParseError(f"Can't parse mail {handle.identity}: {e}") from e

    date = _header_text(headers, "Date")
    subject = _decode_subject(_header_text(headers, "Subject"))
    resolved_timestamp = parse_date(date)

    return MessageDescriptor(
        subject=subject,
        date_header=date,
        resolved_timestamp=resolved_timestamp,
        identity=handle.identity,
        content_location=handle.path,
        seen=seen,
        flagged=flagged,
    )
