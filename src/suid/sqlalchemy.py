"""SQLAlchemy integration for Suid.

Provides a TypeDecorator and helpers for using Suids as typed columns.
Unlike the JSON form, the database form of a suid is its raw 64-bit
integer, stored as BIGINT.

Example:
    from sqlalchemy.orm import DeclarativeBase, Mapped
    from suid import Suid
    from suid.sqlalchemy import suid_column

    class Base(DeclarativeBase):
        pass

    class Document(Base):
        __tablename__ = "documents"

        id: Mapped[Suid] = suid_column(primary_key=True)
        parent_id: Mapped[Suid | None] = suid_column(nullable=True)
        title: Mapped[str]
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypedDict, Unpack, cast

from sqlalchemy import BigInteger
from sqlalchemy.orm import mapped_column
from sqlalchemy.types import TypeDecorator

from suid import Suid


if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Dialect
    from sqlalchemy.orm import MappedColumn


class SuidColumnKwargs(TypedDict, total=False):
    """Keyword arguments for suid_column, matching mapped_column's common options."""

    primary_key: bool
    nullable: bool
    default: object
    default_factory: Callable[[], object]
    index: bool
    unique: bool
    insert_default: object
    onupdate: object


class SuidColumn(TypeDecorator[Suid]):
    """SQLAlchemy TypeDecorator for Suid storage as BIGINT.

    Binds Suid objects as their raw integer value on write and turns
    integers back into Suid objects on read.

    Example:
        id: Mapped[Suid] = mapped_column(SuidColumn(), primary_key=True)
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(
        self,
        value: Suid | int | str | None,
        dialect: Dialect,  # noqa: ARG002
    ) -> int | None:
        """Convert Suid to its integer value for database storage.

        Integers are range-checked and strings parsed as base-36 before
        storing, so bad values fail at write time rather than read time.
        """
        if value is None:
            return None
        if isinstance(value, Suid):
            return value.value
        if isinstance(value, str):
            return Suid.from_string(value).value  # Raises SuidFormatError if invalid
        return Suid(value).value

    def process_result_value(
        self,
        value: int | None,
        dialect: Dialect,  # noqa: ARG002
    ) -> Suid | None:
        """Convert database integer to Suid object."""
        if value is None:
            return None
        return Suid(value)


def suid_column(**kwargs: Unpack[SuidColumnKwargs]) -> MappedColumn[Any]:
    """Create a mapped_column storing a Suid (pure SQLAlchemy).

    Args:
        **kwargs: Additional arguments passed to mapped_column.
            Supports: primary_key, nullable, default, default_factory,
            index, unique, insert_default, onupdate.

    Returns:
        A mapped_column configured with SuidColumn.
    """
    return mapped_column(SuidColumn(), **kwargs)


class SuidFieldKwargs(TypedDict, total=False):
    """Keyword arguments for suid_field, matching SQLModel Field's common options."""

    default: object
    default_factory: Callable[[], object]
    primary_key: bool
    index: bool
    unique: bool


def suid_field(**kwargs: Unpack[SuidFieldKwargs]) -> Any:  # noqa: ANN401 - return type matches SQLModel's Field
    """Create a SQLModel Field storing a Suid.

    Example:
        from sqlmodel import SQLModel
        from suid import Suid
        from suid.sqlalchemy import suid_field

        class Document(SQLModel, table=True):
            id: Suid = suid_field(primary_key=True)
            parent_id: Suid | None = suid_field(default=None)
    """
    # Import here to avoid hard dependency on sqlmodel
    from sqlmodel import Field

    # SQLModel's sa_type is typed as type[Any] but accepts TypeEngine instances.
    sa_type = cast("type[Any]", SuidColumn())
    return Field(sa_type=sa_type, **kwargs)


__all__ = ["SuidColumn", "suid_column", "suid_field"]
