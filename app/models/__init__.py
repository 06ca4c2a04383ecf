"""SQLAlchemy ORM models."""
from app.models.base import Base, StringArray, TimestampMixin, UUIDMixin, array_overlap
from app.models.user import Profile, User
from app.models.advisor import Advisor, AdvisorApproval, AdvisorStatus
from app.models.investment_firm import (
    InvestmentFirm,
    InvestmentFirmClient,
    InvestmentFirmFeature,
    InvestmentFirmLeader,
    InvestmentFirmRegulatoryInfo,
    MoneyMakingMethod,
    SimilarFirm,
)
from app.models.accounting_firm import AccountingFirm
from app.models.blog import BlogCategory, BlogPost, BlogPostCategory, BlogPostStatus
from app.models.meeting_request import ContactMethod, MeetingRequest, MeetingRequestStatus
from app.models.newsletter import NewsletterSignup
from app.models.audit_log import AuditAction, AuditLog

__all__ = [
    "Base",
    "StringArray",
    "TimestampMixin",
    "UUIDMixin",
    "array_overlap",
    "User",
    "Profile",
    "Advisor",
    "AdvisorApproval",
    "AdvisorStatus",
    "InvestmentFirm",
    "InvestmentFirmClient",
    "InvestmentFirmFeature",
    "InvestmentFirmLeader",
    "InvestmentFirmRegulatoryInfo",
    "MoneyMakingMethod",
    "SimilarFirm",
    "AccountingFirm",
    "BlogCategory",
    "BlogPost",
    "BlogPostCategory",
    "BlogPostStatus",
    "ContactMethod",
    "MeetingRequest",
    "MeetingRequestStatus",
    "NewsletterSignup",
    "AuditAction",
    "AuditLog",
]
