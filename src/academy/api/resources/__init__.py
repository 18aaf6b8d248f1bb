"""Per-resource clients for the academy backend."""

from academy.api.resources.academic_years import AcademicYearClient
from academy.api.resources.activation_codes import ActivationCodeClient
from academy.api.resources.analytics import AnalyticsClient
from academy.api.resources.lessons import LessonClient
from academy.api.resources.payments import PaymentClient
from academy.api.resources.subjects import SubjectClient
from academy.api.resources.units import UnitClient
from academy.api.resources.users import UserClient

__all__ = [
    "AcademicYearClient",
    "ActivationCodeClient",
    "AnalyticsClient",
    "LessonClient",
    "PaymentClient",
    "SubjectClient",
    "UnitClient",
    "UserClient",
]
