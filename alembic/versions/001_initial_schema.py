"""Initial schema - accounts, directory listings, blog, intake forms, audit.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, ENUM, JSONB, UUID

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()"))


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def _text_array(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(name, ARRAY(sa.String), nullable=nullable, server_default=sa.text("'{}'"))


def _firm_child(table: str, *columns: sa.Column) -> None:
    op.create_table(
        table,
        _id(),
        sa.Column("firm_id", UUID(as_uuid=True), sa.ForeignKey("investment_firms.id", ondelete="CASCADE"), nullable=False),
        *columns,
    )
    op.create_index(f"ix_{table}_firm_id", table, ["firm_id"])


def upgrade() -> None:
    # --- ENUM types ---
    professional_type = sa.Enum(
        "Financial Advisor", "Wealth Manager", "Investment Advisor", "Financial Planner",
        "Tax Professional", "Retirement Specialist", "Insurance Agent", name="professional_type",
    )
    advisor_status = sa.Enum("draft", "pending_approval", "approved", "rejected", name="advisor_status")
    payout_frequency = sa.Enum(
        "Monthly", "Quarterly", "Semi-Annually", "Annually", "Asset Sold", name="payout_frequency",
    )
    withdrawal_type = sa.Enum("Anytime", "Limited", "Locked Period", "Scheduled", name="withdrawal_type")
    blog_post_status = sa.Enum("draft", "published", name="blog_post_status")
    contact_method = sa.Enum("email", "phone", name="contact_method")
    meeting_request_status = sa.Enum(
        "pending", "contacted", "completed", "cancelled", name="meeting_request_status",
    )
    audit_action = sa.Enum(
        "create", "update", "delete", "approve", "reject", "publish", "login", "logout", name="audit_action",
    )

    # --- 1. users ---
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean, server_default=sa.text("true")),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    # --- 2. profiles ---
    op.create_table(
        "profiles",
        sa.Column("id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("professional_type", professional_type, nullable=True),
        sa.Column("is_admin", sa.Boolean, nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )

    # --- 3. financial_advisors ---
    op.create_table(
        "financial_advisors",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(255), unique=True, nullable=False),
        sa.Column("firm_name", sa.String(255), nullable=True),
        sa.Column("position", sa.String(200), nullable=True),
        sa.Column("personal_bio", sa.Text, nullable=True),
        sa.Column("firm_bio", sa.Text, nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state_hq", sa.String(50), nullable=True),
        sa.Column("years_of_experience", sa.Integer, nullable=True),
        sa.Column("minimum", sa.String(100), nullable=True),
        sa.Column("minimum_amount", sa.Numeric(16, 2), nullable=True),
        sa.Column("headshot_url", sa.String(500), nullable=True),
        sa.Column("firm_logo_url", sa.String(500), nullable=True),
        sa.Column("website_url", sa.String(500), nullable=True),
        sa.Column("youtube_video_id", sa.String(50), nullable=True),
        sa.Column("scheduling_link", sa.String(500), nullable=True),
        sa.Column("primary_education", sa.String(255), nullable=True),
        sa.Column("secondary_education", sa.String(255), nullable=True),
        sa.Column("disclaimer", sa.Text, nullable=True),
        sa.Column("firm_aum", sa.String(100), nullable=True),
        sa.Column("firm_address", sa.String(500), nullable=True),
        sa.Column("advisor_sec_crd", sa.String(50), nullable=True),
        sa.Column("firm_sec_crd", sa.String(50), nullable=True),
        sa.Column("fiduciary", sa.Boolean, server_default=sa.text("false")),
        sa.Column("first_session_is_free", sa.Boolean, server_default=sa.text("false")),
        _text_array("advisor_services"),
        _text_array("professional_designations"),
        _text_array("licenses"),
        _text_array("compensation"),
        _text_array("client_type"),
        _text_array("states_registered_in"),
        sa.Column("status", advisor_status, nullable=False, server_default="draft"),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_by", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("rejection_reason", sa.Text, nullable=True),
        sa.Column("verified", sa.Boolean, server_default=sa.text("false")),
        sa.Column("premium", sa.Boolean, server_default=sa.text("false")),
        sa.Column("rating", sa.Float, nullable=True),
        sa.Column("calls_booked", sa.Integer, server_default=sa.text("0")),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, unique=True),
        *_timestamps(),
    )
    op.create_index("ix_financial_advisors_slug", "financial_advisors", ["slug"])
    op.create_index("ix_financial_advisors_state_hq", "financial_advisors", ["state_hq"])
    op.create_index("ix_financial_advisors_status", "financial_advisors", ["status"])
    op.create_index(
        "ix_financial_advisors_services", "financial_advisors", ["advisor_services"], postgresql_using="gin",
    )

    # --- 4. advisor_approvals ---
    existing_advisor_status = ENUM(name="advisor_status", create_type=False)
    op.create_table(
        "advisor_approvals",
        _id(),
        sa.Column("advisor_id", UUID(as_uuid=True), sa.ForeignKey("financial_advisors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("from_status", existing_advisor_status, nullable=False),
        sa.Column("to_status", existing_advisor_status, nullable=False),
        sa.Column("reviewer_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("comment", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_advisor_approvals_advisor_id", "advisor_approvals", ["advisor_id"])

    # --- 5. investment_firms ---
    op.create_table(
        "investment_firms",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), unique=True, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("long_description", sa.Text, nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("headquarters", sa.String(100), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("firm_link", sa.String(500), nullable=True),
        sa.Column("app_store_link", sa.String(500), nullable=True),
        sa.Column("play_store_link", sa.String(500), nullable=True),
        sa.Column("logo_url", sa.String(500), nullable=True),
        sa.Column("large_image_url", sa.String(500), nullable=True),
        sa.Column("small_image_url", sa.String(500), nullable=True),
        sa.Column("video_url", sa.String(500), nullable=True),
        sa.Column("video_title", sa.String(255), nullable=True),
        sa.Column("established", sa.Date, nullable=True),
        sa.Column("aum", sa.String(100), nullable=True),
        sa.Column("fees", sa.String(255), nullable=True),
        sa.Column("minimum_investment", sa.Numeric(16, 2), nullable=True),
        sa.Column("target_return", sa.String(100), nullable=True),
        sa.Column("payout", payout_frequency, nullable=True),
        sa.Column("withdrawal_type", withdrawal_type, nullable=True),
        sa.Column("investment_risks", sa.Text, nullable=True),
        sa.Column("liquidity", sa.Text, nullable=True),
        sa.Column("how_company_makes_money", sa.Text, nullable=True),
        sa.Column("how_you_make_money", sa.Text, nullable=True),
        _text_array("asset_class"),
        sa.Column("verified", sa.Boolean, server_default=sa.text("false")),
        sa.Column("rating", sa.Float, nullable=True),
        sa.Column("review_count", sa.Integer, server_default=sa.text("0")),
        *_timestamps(),
    )
    op.create_index("ix_investment_firms_name", "investment_firms", ["name"])
    op.create_index("ix_investment_firms_slug", "investment_firms", ["slug"])
    op.create_index("ix_investment_firms_headquarters", "investment_firms", ["headquarters"])

    # --- 6-10. investment firm child collections ---
    _firm_child("investment_firm_features", sa.Column("feature", sa.String(255), nullable=False))
    _firm_child(
        "investment_firm_leadership",
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("position", sa.String(200), nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("avatar_url", sa.String(500), nullable=True),
    )
    _firm_child(
        "money_making_methods",
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
    )
    _firm_child("investment_firm_clients", sa.Column("client_type", sa.String(200), nullable=False))
    _firm_child("investment_firm_regulatory_info", sa.Column("registration", sa.String(255), nullable=False))

    # --- 11. similar_firms ---
    op.create_table(
        "similar_firms",
        sa.Column("firm_id", UUID(as_uuid=True), sa.ForeignKey("investment_firms.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("similar_firm_id", UUID(as_uuid=True), sa.ForeignKey("investment_firms.id", ondelete="CASCADE"), primary_key=True),
    )

    # --- 12. accounting_firms ---
    op.create_table(
        "accounting_firms",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), unique=True, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("long_description", sa.Text, nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("headquarters", sa.String(100), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("logo_url", sa.String(500), nullable=True),
        sa.Column("large_image_url", sa.String(500), nullable=True),
        sa.Column("small_image_url", sa.String(500), nullable=True),
        sa.Column("video_url", sa.String(500), nullable=True),
        sa.Column("video_title", sa.String(255), nullable=True),
        sa.Column("minimum_fee", sa.String(100), nullable=True),
        sa.Column("minimum_fee_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("established", sa.String(50), nullable=True),
        sa.Column("employees", sa.String(50), nullable=True),
        _text_array("services"),
        _text_array("specialties"),
        _text_array("industries"),
        sa.Column("verified", sa.Boolean, server_default=sa.text("false")),
        sa.Column("premium", sa.Boolean, server_default=sa.text("false")),
        sa.Column("rating", sa.Float, nullable=True),
        sa.Column("review_count", sa.Integer, server_default=sa.text("0")),
        *_timestamps(),
    )
    op.create_index("ix_accounting_firms_name", "accounting_firms", ["name"])
    op.create_index("ix_accounting_firms_slug", "accounting_firms", ["slug"])

    # --- 13. blog_posts ---
    op.create_table(
        "blog_posts",
        _id(),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("slug", sa.String(500), unique=True, nullable=False),
        sa.Column("content", sa.Text, nullable=False, server_default=""),
        sa.Column("excerpt", sa.Text, nullable=True),
        sa.Column("cover_image_url", sa.String(500), nullable=True),
        sa.Column("status", blog_post_status, nullable=False, server_default="draft"),
        sa.Column("author_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_blog_posts_slug", "blog_posts", ["slug"])
    op.create_index("ix_blog_posts_status_published", "blog_posts", ["status", "published_at"])

    # --- 14. blog_categories ---
    op.create_table(
        "blog_categories",
        _id(),
        sa.Column("name", sa.String(100), unique=True, nullable=False),
        sa.Column("slug", sa.String(100), unique=True, nullable=False),
        *_timestamps(),
    )

    # --- 15. blog_post_categories ---
    op.create_table(
        "blog_post_categories",
        _id(),
        sa.Column("post_id", UUID(as_uuid=True), sa.ForeignKey("blog_posts.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "category_name", sa.String(100),
            sa.ForeignKey("blog_categories.name", ondelete="CASCADE"), nullable=False,
        ),
        sa.UniqueConstraint("post_id", "category_name", name="uq_blog_post_category"),
    )
    op.create_index("ix_blog_post_categories_post_id", "blog_post_categories", ["post_id"])

    # --- 16. meeting_requests ---
    op.create_table(
        "meeting_requests",
        _id(),
        sa.Column("advisor_id", UUID(as_uuid=True), sa.ForeignKey("financial_advisors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("preferred_contact_method", contact_method, nullable=False),
        _text_array("interested_in_discussing", nullable=False),
        sa.Column("message", sa.Text, nullable=True),
        sa.Column("status", meeting_request_status, nullable=False, server_default="pending"),
        *_timestamps(),
    )
    op.create_index("ix_meeting_requests_advisor_id", "meeting_requests", ["advisor_id"])

    # --- 17. newsletter_signups ---
    op.create_table(
        "newsletter_signups",
        _id(),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        *_timestamps(),
    )

    # --- 18. audit_logs ---
    op.create_table(
        "audit_logs",
        _id(),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("action", audit_action, nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=False),
        sa.Column("entity_id", UUID(as_uuid=True), nullable=True),
        sa.Column("changes", JSONB, nullable=True),
        sa.Column("ip_address", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.String(500), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])


def downgrade() -> None:
    for table in (
        "audit_logs",
        "newsletter_signups",
        "meeting_requests",
        "blog_post_categories",
        "blog_categories",
        "blog_posts",
        "accounting_firms",
        "similar_firms",
        "investment_firm_regulatory_info",
        "investment_firm_clients",
        "money_making_methods",
        "investment_firm_leadership",
        "investment_firm_features",
        "investment_firms",
        "advisor_approvals",
        "financial_advisors",
        "profiles",
        "users",
    ):
        op.drop_table(table)

    for enum_name in (
        "audit_action",
        "meeting_request_status",
        "contact_method",
        "blog_post_status",
        "withdrawal_type",
        "payout_frequency",
        "advisor_status",
        "professional_type",
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
