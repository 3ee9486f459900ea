from __future__ import annotations


class CoverLetterError(Exception):
    """Base class for failures raised while building a cover letter."""

    status_code = 500


class MissingCredentialError(CoverLetterError):
    status_code = 400


class ValidationError(CoverLetterError):
    """Resolved contact info lacks a full name or an email address."""

    status_code = 400


class UpstreamError(CoverLetterError):
    """The model endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"AI API request failed with status {status_code}: {body}")
        self.upstream_status = status_code
        self.body = body


class MalformedResponseError(CoverLetterError):
    """The model endpoint answered, but without a text part to parse."""
