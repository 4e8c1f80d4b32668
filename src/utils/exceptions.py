"""Custom exceptions for the Legal Scrutiny Report generator."""

from typing import Optional


class ScrutinyReportError(Exception):
    """Base exception for report generation errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class MalformedArchiveError(ScrutinyReportError):
    """Template bytes are not a readable .docx archive."""

    pass


class HistoryTemplateLookupError(ScrutinyReportError):
    """The bulk History of Title template lookup failed."""

    pass


class UnknownFieldError(ScrutinyReportError, KeyError):
    """A field name that the template scan did not produce."""

    def __str__(self) -> str:
        return ScrutinyReportError.__str__(self)


class DuplicatePlaceholderError(ScrutinyReportError):
    """A custom placeholder key already exists for the deed type."""

    pass
