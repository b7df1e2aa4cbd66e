"""Exception hierarchy for the Photo Studio.

Every error the studio raises on purpose derives from :class:`StudioError`,
so callers can separate expected failures (missing credential, upstream
refusal, storage trouble) from programming errors.

Hierarchy::

    StudioError
    ├── ConfigurationError          missing API credential
    ├── UpstreamGenerationError     generation service failed
    │   ├── NoCandidateError        no candidate in the response
    │   ├── NoImageDataError        candidate without an inline image
    │   └── UpstreamError           network/service failure
    ├── PersistenceError            record store or history API failure
    └── NotFoundError               delete target does not exist

    ValueError
    ├── UnknownBackgroundError      background type outside the fixed table
    └── SourceImageError            wrong number or shape of source images
"""

CONFIGURATION_MESSAGE = "API 키가 설정되지 않았습니다. 관리자에게 문의하세요."


class StudioError(Exception):
    """Base class for expected Photo Studio failures."""


class ConfigurationError(StudioError):
    """Raised when the Gemini API credential is not configured."""

    def __init__(self, message: str = CONFIGURATION_MESSAGE):
        super().__init__(message)


class UpstreamGenerationError(StudioError):
    """Raised when the generation service cannot produce a shot.

    Attributes:
        shot: Shot type ("front", "side" or "full") that failed, if known
    """

    def __init__(self, message: str, shot: str | None = None):
        super().__init__(message)
        self.shot = shot


class NoCandidateError(UpstreamGenerationError):
    """The service answered without any candidate response."""


class NoImageDataError(UpstreamGenerationError):
    """The first candidate did not contain an inline image attachment."""


class UpstreamError(UpstreamGenerationError):
    """Network or service-level failure while calling the generation API."""


class PersistenceError(StudioError):
    """Raised when the record store or the history API cannot complete a call."""


class NotFoundError(StudioError):
    """Raised when a history record targeted for deletion does not exist."""


class UnknownBackgroundError(ValueError):
    """Raised for a background type that is not solid, logo or showroom."""


class SourceImageError(ValueError):
    """Raised when the source images are missing, too many, or malformed."""
