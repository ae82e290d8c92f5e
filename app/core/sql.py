"""
Parameterized SQL fragment compilation.

Builds WHERE and SET fragments from sparse inputs without ever interpolating
user values into the statement text. Fragments are assembled as an ordered
list of (template, value) pairs and rendered once, at the end, into the
placeholder syntax of the target dialect:

- numeric:  $1, $2, ...        (asyncpg / raw PostgreSQL style)
- named:    :p1, :p2, ...      (SQLAlchemy text() bind parameters)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from app.core.exceptions import InvalidArgumentError

# Marks a predicate that carries no bound value (e.g. "equity > 0")
_NO_VALUE = object()


@dataclass(frozen=True)
class Dialect:
    """Placeholder syntax and operator spelling for one SQL backend."""
    name: str
    placeholder_style: str = "numeric"
    ilike: str = "ILIKE"

    def placeholder(self, index: int) -> str:
        """Render the 1-based placeholder for the index-th bound value."""
        if self.placeholder_style == "numeric":
            return f"${index}"
        if self.placeholder_style == "named":
            return f":p{index}"
        raise ValueError(f"Unknown placeholder style: {self.placeholder_style}")

    def bind_params(self, values: List[Any], start: int = 1) -> Union[List[Any], Dict[str, Any]]:
        """Convert an ordered value list into the form the driver expects."""
        if self.placeholder_style == "named":
            return {f"p{index}": value for index, value in enumerate(values, start)}
        return list(values)


POSTGRES = Dialect(name="postgresql")
POSTGRES_NAMED = Dialect(name="postgresql", placeholder_style="named")
SQLITE_NAMED = Dialect(name="sqlite", placeholder_style="named", ilike="LIKE")


def dialect_for(bind: Any) -> Dialect:
    """
    Pick the named-placeholder dialect for a SQLAlchemy Session, Connection or Engine.

    SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII.
    """
    if hasattr(bind, "get_bind"):
        bind = bind.get_bind()
    if bind.dialect.name == "sqlite":
        return SQLITE_NAMED
    return POSTGRES_NAMED


class SqlBuilder:
    """
    Ordered list of SQL templates and their bound values.

    Each template contains one "{}" where its value's placeholder goes, or
    none when added without a value. Placeholders are numbered only in
    render(), so the order of add() calls is the order of the parameters.
    """

    def __init__(self, dialect: Dialect = POSTGRES, start: int = 1):
        self.dialect = dialect
        self.start = start
        self._parts: List[Tuple[str, Any]] = []

    def add(self, template: str, value: Any = _NO_VALUE) -> "SqlBuilder":
        self._parts.append((template, value))
        return self

    def __len__(self) -> int:
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)

    def render(self, separator: str) -> Tuple[str, List[Any]]:
        """
        Join all templates with `separator`, numbering placeholders from `start`.

        Returns:
            Tuple of (sql_text, ordered_values)
        """
        rendered: List[str] = []
        values: List[Any] = []

        for template, value in self._parts:
            if value is _NO_VALUE:
                rendered.append(template)
                continue
            values.append(value)
            rendered.append(template.format(self.dialect.placeholder(self.start + len(values) - 1)))

        return separator.join(rendered), values


def compile_filter(
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
    dialect: Dialect = POSTGRES,
) -> Tuple[str, List[Any]]:
    """
    Compile optional job search criteria into a WHERE fragment.

    Predicates are always emitted in the same order (min_salary, has_equity,
    title). has_equity only constrains when it is True; False behaves like
    an absent value.

    Args:
        title: Case-insensitive substring the title must contain
        min_salary: Inclusive lower salary bound
        has_equity: Restrict to jobs offering non-zero equity
        dialect: Target placeholder syntax

    Returns:
        ("WHERE ...", values), or ("", []) when no criteria were given
    """
    builder = SqlBuilder(dialect)

    if min_salary is not None:
        builder.add("salary >= {}", min_salary)

    if has_equity is True:
        builder.add("equity > 0")

    if title is not None:
        builder.add(f"title {dialect.ilike} {{}}", f"%{title}%")

    if not builder:
        return "", []

    where, values = builder.render(" AND ")
    return f"WHERE {where}", values


def compile_partial_update(
    fields: Mapping[str, Any],
    column_names: Optional[Mapping[str, str]] = None,
    dialect: Dialect = POSTGRES,
) -> Tuple[str, List[Any]]:
    """
    Compile a sparse field -> value mapping into the body of a SET clause.

    Fields keep the mapping's iteration order. Names missing from
    column_names are used as the column name unchanged. The caller binds any
    further placeholders (e.g. the row id) starting at len(values) + 1.

    Example:
        compile_partial_update({"a": 1, "b": 2}, {"b": "b_col"})
        -> ('"a"=$1,"b_col"=$2', [1, 2])

    Raises:
        InvalidArgumentError: If fields is empty
    """
    if not fields:
        raise InvalidArgumentError("No data")

    column_names = column_names or {}
    builder = SqlBuilder(dialect)

    for field, value in fields.items():
        column = column_names.get(field, field)
        builder.add(f'"{column}"={{}}', value)

    return builder.render(",")
