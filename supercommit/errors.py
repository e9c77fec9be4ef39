"""Errors raised while parsing a commit message."""

FORMAT_PREFIX = "Super Commit format: "


class SuperCommitError(Exception):
    """Base class for every parse failure. Callers should skip downstream actions."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class FormatError(SuperCommitError):
    """The line does not follow the commit mini-language."""

    def __init__(self, detail: str, token: str | None = None) -> None:
        self.token = token  # offending token name, set for duplicates
        super().__init__(detail)

    def __str__(self) -> str:
        return f"{FORMAT_PREFIX}{self.detail}"


class EmptyInputError(FormatError):
    def __init__(self) -> None:
        super().__init__("commit message is empty.")


class CalendarError(SuperCommitError):
    """A date matched yyyy-mm-dd but names a day that does not exist (2025-02-30)."""
