"""SQLAlchemy base model with UUID PK and timestamp mixins."""
import enum
import uuid
from datetime import datetime
from typing import Any, Iterable, Type

from sqlalchemy import JSON, Boolean, DateTime, Enum, String, func, literal
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import coercions, roles
from sqlalchemy.sql.expression import ColumnElement
from sqlalchemy.types import TypeDecorator


def pg_enum(enum_class: Type[enum.Enum], **kwargs: Any) -> Enum:
    """Create an SQLAlchemy Enum that stores enum VALUES (not names) in PostgreSQL.

    SQLAlchemy's default Enum uses Python enum *names* (e.g. 'PENDING_APPROVAL')
    as DB values. Our migrations store the *values* (e.g. 'pending_approval'),
    so we need this helper to set values_callable explicitly.
    """
    return Enum(
        enum_class,
        values_callable=lambda obj: [e.value for e in obj],
        **kwargs,
    )


class StringArray(TypeDecorator):
    """List of strings: ``VARCHAR[]`` on PostgreSQL, JSON everywhere else."""

    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(ARRAY(String))
        return dialect.type_descriptor(JSON())

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return [v.value if isinstance(v, enum.Enum) else v for v in value]


class array_overlap(ColumnElement):
    """True when a StringArray column shares at least one element with ``values``."""

    type = Boolean()
    inherit_cache = False

    def __init__(self, column: Any, values: Iterable[Any]):
        self.column = coercions.expect(roles.ExpressionElementRole, column)
        self.values = [v.value if isinstance(v, enum.Enum) else v for v in values]


def _overlap_params(element: array_overlap, compiler, **kw) -> str:
    return ", ".join(compiler.process(literal(v, String()), **kw) for v in element.values)


@compiles(array_overlap)
def _compile_array_overlap(element, compiler, **kw):
    column = compiler.process(element.column, **kw)
    return f"({column} && CAST(ARRAY[{_overlap_params(element, compiler, **kw)}] AS VARCHAR[]))"


@compiles(array_overlap, "sqlite")
def _compile_array_overlap_sqlite(element, compiler, **kw):
    column = compiler.process(element.column, **kw)
    return (
        f"EXISTS (SELECT 1 FROM json_each({column}) "
        f"WHERE json_each.value IN ({_overlap_params(element, compiler, **kw)}))"
    )


class Base(DeclarativeBase):
    pass


class UUIDMixin:
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )


class TimestampMixin:
    # server-generated timestamps are RETURNed on INSERT/UPDATE
    __mapper_args__ = {"eager_defaults": True}

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
