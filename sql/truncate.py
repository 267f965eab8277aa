"""TRUNCATE TABLE statement builders."""

from enum import Enum
from typing import Generic, Optional, Type, TypeVar

from sql.base import Statement
from sql.schema import table_name

T = TypeVar('T', bound=Enum)


class TruncateCommand(Statement):
    """Renders ``TRUNCATE TABLE <table>;``."""

    def __init__(self, table: str, strict: Optional[bool] = None):
        super().__init__(strict=strict)
        self._table = table
        self._append(f"TRUNCATE TABLE {table}")

    @property
    def table(self) -> str:
        return self._table


class TypedTruncateCommand(TruncateCommand, Generic[T]):
    def __init__(self, schema: Type[T], strict: Optional[bool] = None):
        super().__init__(table_name(schema), strict=strict)
        self._bind_schemas(schema)
