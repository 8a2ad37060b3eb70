"""Query predicates understood by the document store."""

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any


class QueryMethod(StrEnum):
    """Predicate kinds."""

    EQUAL = "equal"
    NOT_EQUAL = "notEqual"
    SEARCH = "search"
    ORDER_ASC = "orderAsc"
    ORDER_DESC = "orderDesc"
    LIMIT = "limit"
    OFFSET = "offset"
    CURSOR_AFTER = "cursorAfter"
    CURSOR_BEFORE = "cursorBefore"
    SELECT = "select"


FILTER_METHODS = frozenset({QueryMethod.EQUAL, QueryMethod.NOT_EQUAL, QueryMethod.SEARCH})
CURSOR_METHODS = frozenset({QueryMethod.CURSOR_AFTER, QueryMethod.CURSOR_BEFORE})


@dataclass(frozen=True)
class Query:
    """Single predicate: method applied to an attribute with values."""

    method: QueryMethod
    attribute: str = ""
    values: tuple[Any, ...] = ()

    @property
    def value(self) -> Any:
        return self.values[0] if self.values else None

    def with_value(self, value: Any) -> "Query":
        return replace(self, values=(value,))

    @property
    def is_filter(self) -> bool:
        return self.method in FILTER_METHODS

    @property
    def is_cursor(self) -> bool:
        return self.method in CURSOR_METHODS

    @classmethod
    def equal(cls, attribute: str, values: list[Any]) -> "Query":
        return cls(QueryMethod.EQUAL, attribute, tuple(values))

    @classmethod
    def not_equal(cls, attribute: str, value: Any) -> "Query":
        return cls(QueryMethod.NOT_EQUAL, attribute, (value,))

    @classmethod
    def search(cls, attribute: str, value: str) -> "Query":
        return cls(QueryMethod.SEARCH, attribute, (value,))

    @classmethod
    def order_asc(cls, attribute: str = "") -> "Query":
        return cls(QueryMethod.ORDER_ASC, attribute)

    @classmethod
    def order_desc(cls, attribute: str = "") -> "Query":
        return cls(QueryMethod.ORDER_DESC, attribute)

    @classmethod
    def limit(cls, value: int) -> "Query":
        return cls(QueryMethod.LIMIT, values=(value,))

    @classmethod
    def offset(cls, value: int) -> "Query":
        return cls(QueryMethod.OFFSET, values=(value,))

    @classmethod
    def cursor_after(cls, value: Any) -> "Query":
        return cls(QueryMethod.CURSOR_AFTER, values=(value,))

    @classmethod
    def cursor_before(cls, value: Any) -> "Query":
        return cls(QueryMethod.CURSOR_BEFORE, values=(value,))

    @classmethod
    def select(cls, attributes: list[str]) -> "Query":
        return cls(QueryMethod.SELECT, values=tuple(attributes))

    @staticmethod
    def group_by_type(queries: list["Query"]) -> "GroupedQueries":
        """Split predicates into filters, paging, cursor, ordering and selection."""
        grouped = GroupedQueries()
        for query in queries:
            if query.is_filter:
                grouped.filters.append(query)
            elif query.method is QueryMethod.LIMIT:
                if grouped.limit is None:
                    grouped.limit = int(query.value)
            elif query.method is QueryMethod.OFFSET:
                if grouped.offset is None:
                    grouped.offset = int(query.value)
            elif query.is_cursor:
                if grouped.cursor is None:
                    grouped.cursor = query.value
                    grouped.cursor_direction = query.method
            elif query.method in (QueryMethod.ORDER_ASC, QueryMethod.ORDER_DESC):
                grouped.orders.append(query)
            elif query.method is QueryMethod.SELECT:
                grouped.selections.extend(query.values)
        return grouped


@dataclass
class GroupedQueries:
    """Predicates grouped by purpose."""

    filters: list[Query] = field(default_factory=list)
    limit: int | None = None
    offset: int | None = None
    cursor: Any = None
    cursor_direction: QueryMethod | None = None
    orders: list[Query] = field(default_factory=list)
    selections: list[str] = field(default_factory=list)
