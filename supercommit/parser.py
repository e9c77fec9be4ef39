"""Commit-message mini-language.

    <ISSUE-KEY> [STATUS:<status>] [LOG:<time>[@<yyyy-mm-dd>]] [DATE:<yyyy-mm-dd>]
                [COMMENT:<text>] [PHASE:<phase>] [CAT:<phase>] [READY:<Yes|No|True|False|1|0|Y|N>]

Tokens may come in any order after the issue key and each may appear once.
LOG accepts ``2h``, ``1.5h``, ``1:30`` and ``90m``, optionally followed by
``@yyyy-mm-dd``.
"""

import re
from datetime import date, datetime

from supercommit.durations import parse_log, validate_date
from supercommit.errors import EmptyInputError, FormatError
from supercommit.models import ParsedDirectives
from supercommit.tokens import ensure_unique, extract_tokens

ISSUE_KEY_RE = re.compile(r"^([A-Z][A-Z0-9]{1,9}-[0-9]+)\b", re.ASCII)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_ZERO_WIDTH = re.compile("^[\u200b\u200c\u200d]+")

_READY_TRUE = {"y", "yes", "true", "1"}
_READY_FALSE = {"n", "no", "false", "0"}


def sanitize_first_line(message: str) -> str:
    """Return the first line without BOM, zero-width prefix or surrounding whitespace."""
    first = _LINE_BREAK.split(message, maxsplit=1)[0]
    first = first.removeprefix("\ufeff")
    first = _ZERO_WIDTH.sub("", first)
    return first.strip()


def extract_issue_key(line: str) -> str:
    m = ISSUE_KEY_RE.match(line)
    if not m:
        raise FormatError("missing or invalid issue key at start (e.g., ABC-123).")
    return m.group(1)


def parse_ready(value: str | None) -> bool | None:
    """Map READY values to True/False; anything unrecognised is None, never an error."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _READY_TRUE:
        return True
    if normalized in _READY_FALSE:
        return False
    return None


def resolve_phase(phase: str | None, cat: str | None) -> str | None:
    return phase or cat


def parse_commit_message(message: str, *, default_log_date: date | str | None = None) -> ParsedDirectives:
    """Parse the first line of a commit message into ParsedDirectives.

    default_log_date fills log_date when a LOG token carries no date and no
    DATE token is present. Left as None, such a log has log_date=None and the
    consumer decides (usually today).

    Raises FormatError (EmptyInputError for blank input) or CalendarError. The
    first failure wins.
    """
    if not isinstance(message, str) or not message.replace("\ufeff", "").strip():
        raise EmptyInputError()

    first_line = sanitize_first_line(message)
    issue = extract_issue_key(first_line)

    ensure_unique(first_line)
    tokens = extract_tokens(first_line)

    phase = resolve_phase(tokens["PHASE"], tokens["CAT"])
    ready = parse_ready(tokens["READY"])
    date_token = tokens["DATE"]

    log_hours: float | None = None
    log_date: str | None = None
    if tokens["LOG"]:
        log_hours, log_date = parse_log(tokens["LOG"], fallback_date=date_token)
        if log_date is None and default_log_date is not None:
            if isinstance(default_log_date, datetime):
                log_date = default_log_date.date().isoformat()
            elif isinstance(default_log_date, date):
                log_date = default_log_date.isoformat()
            else:
                log_date = validate_date(default_log_date)
    elif date_token:
        log_date = validate_date(date_token)

    status = tokens["STATUS"]
    if status is not None and not status.strip():
        raise FormatError("STATUS value cannot be empty.")

    return ParsedDirectives(
        issue=issue,
        status=status,
        log_hours=log_hours,
        log_date=log_date,
        comment=tokens["COMMENT"],
        phase=phase,
        ready=ready,
        first_line=first_line,
    )
