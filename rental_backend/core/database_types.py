"""Custom database types shared by all models."""

import enum
import uuid

from sqlalchemy import Enum, String, TypeDecorator


class UUID(TypeDecorator):
    """Portable UUID type.

    Stores UUIDs as CHAR(36) strings so the same models run on PostgreSQL
    and SQLite. Values are exposed to Python as plain strings.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """Convert UUID to string when saving to database."""
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return str(value)
        return str(value).strip().lower()

    def process_result_value(self, value, dialect):
        """Return the stored string unchanged."""
        if value is None:
            return value
        return str(value)


def StringEnum(enum_class: type[enum.Enum]) -> Enum:
    """Enum column stored as its lowercase value in a VARCHAR.

    Avoids native database enum types so the same migration runs on
    PostgreSQL and SQLite.
    """
    return Enum(
        enum_class,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        validate_strings=True,
        length=32,
    )
