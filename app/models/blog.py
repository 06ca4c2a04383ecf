"""Blog post and category ORM models."""
import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin, pg_enum


class BlogPostStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class BlogPost(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "blog_posts"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(500), unique=True, nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[BlogPostStatus] = mapped_column(
        pg_enum(BlogPostStatus, name="blog_post_status"), nullable=False, default=BlogPostStatus.DRAFT
    )
    author_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    category_links = relationship(
        "BlogPostCategory", lazy="selectin", cascade="all, delete-orphan", passive_deletes=True,
        order_by="BlogPostCategory.category_name",
    )

    @property
    def categories(self) -> list[str]:
        return [link.category_name for link in self.category_links]


class BlogCategory(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "blog_categories"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


class BlogPostCategory(Base, UUIDMixin):
    __tablename__ = "blog_post_categories"
    __table_args__ = (UniqueConstraint("post_id", "category_name", name="uq_blog_post_category"),)

    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("blog_posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_name: Mapped[str] = mapped_column(
        String(100), ForeignKey("blog_categories.name", ondelete="CASCADE"), nullable=False
    )
