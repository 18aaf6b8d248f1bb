"""Resource models for the academy backend."""

from academy.models.academic_year import AcademicYear, StudentYear
from academy.models.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
)
from academy.models.analytics import DashboardOverview, UsersAnalytics
from academy.models.activation_code import (
    ActivationCode,
    CodeActivation,
    CodeDetails,
    CodeFilters,
    CodeGenerateRequest,
    CodeStats,
    CodeStatus,
    CodeUpdate,
    CodeValidationResult,
)
from academy.models.common import ApiModel, Filters, Page, Pagination
from academy.models.content import (
    Lecture,
    Lesson,
    LessonCreate,
    LessonDetail,
    LessonFilters,
    LessonUpdate,
    Subject,
    SubjectCreate,
    SubjectFilters,
    SubjectUpdate,
    Unit,
    UnitCreate,
    UnitUpdate,
    sort_by_order,
)
from academy.models.payment import (
    Payment,
    PaymentCreate,
    PaymentDisplayItem,
    PaymentFilters,
    PaymentStats,
    PaymentStatsOverview,
)
from academy.models.upload import UploadCompleted, UploadEvent, UploadKind, UploadProgress
from academy.models.user import User, UserCreate, UserFilters, UsersStatsOverview, UserUpdate

__all__ = [
    "AcademicYear",
    "StudentYear",
    "ActivationCode",
    "CodeActivation",
    "CodeDetails",
    "CodeFilters",
    "CodeGenerateRequest",
    "CodeStats",
    "CodeStatus",
    "CodeUpdate",
    "CodeValidationResult",
    "AuthResponse",
    "ChangePasswordRequest",
    "LoginRequest",
    "ProfileUpdate",
    "RegisterRequest",
    "DashboardOverview",
    "UsersAnalytics",
    "ApiModel",
    "Filters",
    "Page",
    "Pagination",
    "Lecture",
    "Lesson",
    "LessonCreate",
    "LessonDetail",
    "LessonFilters",
    "LessonUpdate",
    "Subject",
    "SubjectCreate",
    "SubjectFilters",
    "SubjectUpdate",
    "Unit",
    "UnitCreate",
    "UnitUpdate",
    "sort_by_order",
    "Payment",
    "PaymentCreate",
    "PaymentDisplayItem",
    "PaymentFilters",
    "PaymentStats",
    "PaymentStatsOverview",
    "UploadCompleted",
    "UploadEvent",
    "UploadKind",
    "UploadProgress",
    "User",
    "UserCreate",
    "UserFilters",
    "UsersStatsOverview",
    "UserUpdate",
]
