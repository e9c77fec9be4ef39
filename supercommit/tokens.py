"""Boundary-aware scanner for NAME:value tokens.

A value runs from the first non-space character after ``NAME:`` up to the
whitespace that precedes the next reserved ``NAME:``, or end of line. Only the
reserved names count as boundaries, so ``COMMENT:Fix HTTP:500`` keeps
``HTTP:500`` inside the comment.
"""

from collections.abc import Iterator

from supercommit.errors import FormatError

TOKEN_NAMES = ("STATUS", "LOG", "COMMENT", "PHASE", "DATE", "CAT", "READY")


def _starts_token(line: str, pos: int) -> bool:
    """True if a reserved NAME: begins exactly at pos."""
    return any(line.startswith(f"{name}:", pos) for name in TOKEN_NAMES)


def _value_end(line: str, start: int) -> int:
    # The first value character is always consumed, so scanning starts one past it.
    for pos in range(start + 1, len(line)):
        if line[pos].isspace() and _starts_token(line, pos + 1):
            return pos
    return len(line)


def iter_token_values(line: str, name: str) -> Iterator[tuple[int, str]]:
    """Yield (offset, value) for each non-overlapping NAME: match, left to right."""
    marker = f"{name}:"
    pos = 0
    while True:
        idx = line.find(marker, pos)
        if idx < 0:
            return
        if idx > 0 and not line[idx - 1].isspace():
            pos = idx + 1
            continue

        start = idx + len(marker)
        while start < len(line) and line[start].isspace():
            start += 1
        if start == len(line):
            # NAME: with nothing after it is not a token
            pos = idx + 1
            continue

        end = _value_end(line, start)
        yield idx, line[start:end].rstrip()
        pos = end


def get_token(line: str, name: str) -> str | None:
    """Return the trimmed value of the first NAME: token, or None."""
    for _, value in iter_token_values(line, name):
        value = value.strip()
        return value or None
    return None


def ensure_unique(line: str, names: tuple[str, ...] = TOKEN_NAMES) -> None:
    """Raise FormatError naming the first token that appears more than once."""
    for name in names:
        hits = iter_token_values(line, name)
        next(hits, None)
        if next(hits, None) is not None:
            raise FormatError(f"only one {name} token is allowed.", token=name)


def extract_tokens(line: str) -> dict[str, str | None]:
    return {name: get_token(line, name) for name in TOKEN_NAMES}
