from typing import Optional

UPSTREAM_PREFIX = "Failed to generate tailored resume. "


class ResumeTailorError(Exception):
    """Base for every failure the API reports as ``{"error": message}``."""

    status_code = 500
    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# =========================
# Client errors (400)
# =========================
class ClientError(ResumeTailorError):
    status_code = 400


class InputMissing(ClientError):
    default_message = "Resume text or PDF file is required"


class ExtractionError(ClientError):
    default_message = "Failed to parse PDF file"


class NoSession(ClientError):
    default_message = "No session found. Please generate a resume first."


class NoTailoredResume(ClientError):
    default_message = "No tailored resume found. Please generate one first."


# =========================
# Upstream errors (500)
# =========================
class UpstreamError(ResumeTailorError):
    """The completion service call failed.

    ``upstream_message`` is the error text the service sent back, if any.
    The public message prefers it over the fixed hint for the failure kind.
    """

    status_code = 500
    hint = "Please try again later."

    def __init__(self, upstream_message: Optional[str] = None, status: Optional[int] = None):
        self.upstream_message = upstream_message
        self.status = status
        super().__init__(self.compose_message())

    def compose_message(self) -> str:
        if self.upstream_message:
            return UPSTREAM_PREFIX + self.upstream_message
        return UPSTREAM_PREFIX + self.hint


class UpstreamUnavailable(UpstreamError):
    pass


class UpstreamProtocolError(UpstreamError):
    pass


class _FixedHintError(UpstreamError):
    # 401/429 always carry their own hint; upstream text is only appended
    def compose_message(self) -> str:
        msg = UPSTREAM_PREFIX + self.hint
        if self.upstream_message:
            msg += f" ({self.upstream_message})"
        return msg


class AuthenticationFailed(_FixedHintError):
    hint = "Authentication failed. Please check your API key."


class RateLimited(_FixedHintError):
    hint = "Rate limit exceeded. Please try again later."


class PdfRenderError(ResumeTailorError):
    status_code = 500
    default_message = "Failed to generate PDF"
