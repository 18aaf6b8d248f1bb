"""Backend REST access: transport, errors and resource clients."""

from academy.api.errors import (
    ApiError,
    HTTPError,
    NotFoundError,
    ResponseFormatError,
    TransportError,
)
from academy.api.http import ApiClient
from academy.api.resources import (
    AcademicYearClient,
    ActivationCodeClient,
    AnalyticsClient,
    LessonClient,
    PaymentClient,
    SubjectClient,
    UnitClient,
    UserClient,
)
from academy.api.uploads import FileUploadClient, UploadError, UploadValidationError

__all__ = [
    "ApiClient",
    "ApiError",
    "HTTPError",
    "NotFoundError",
    "ResponseFormatError",
    "TransportError",
    "AcademicYearClient",
    "ActivationCodeClient",
    "AnalyticsClient",
    "FileUploadClient",
    "LessonClient",
    "PaymentClient",
    "SubjectClient",
    "UnitClient",
    "UploadError",
    "UploadValidationError",
    "UserClient",
]
