"""
Search Query Builder - SearchFilter -> parameterized SQL

Turns untrusted, optional search parameters into one WHERE clause that
feeds both the page query and the count query. Every caller-supplied
value becomes a positional bind argument; only fixed fragments from this
module ever reach the SQL text.

Ordering is created_at DESC with id DESC as tie-break so pages are
stable when several contracts share a timestamp.
"""
from dataclasses import dataclass
from typing import List, Tuple

from models.domain.search import SearchFilter

CONTRACT_COLUMNS = """
    id, contract_id, wasm_hash, name, description, publisher_id,
    network, category, tags, is_verified, created_at, updated_at
"""

ORDER_BY = "ORDER BY created_at DESC, id DESC"


def escape_like(term: str) -> str:
    """Escape LIKE metacharacters so the term matches literally"""
    return (
        term.replace('\\', '\\\\')
            .replace('%', '\\%')
            .replace('_', '\\_')
    )


@dataclass(frozen=True)
class QueryPlan:
    """Page + count statements sharing one filter and argument list"""
    page_sql: str
    count_sql: str
    filter_args: Tuple
    limit: int
    offset: int

    @property
    def page_args(self) -> Tuple:
        return self.filter_args + (self.limit, self.offset)


def build_where(search: SearchFilter) -> Tuple[str, List]:
    """
    Compose AND-ed predicates for the supplied filters.

    Returns:
        (where_clause, args) - clause is "" when no filter applies
    """
    conditions: List[str] = []
    args: List = []

    def bind(value) -> str:
        args.append(value)
        return f"${len(args)}"

    term = search.search_term
    if term is not None:
        placeholder = bind(f"%{escape_like(term)}%")
        conditions.append(
            f"(name ILIKE {placeholder} ESCAPE '\\' "
            f"OR description ILIKE {placeholder} ESCAPE '\\')"
        )

    if search.verified_only:
        conditions.append("is_verified = TRUE")

    if search.category is not None:
        conditions.append(f"category = {bind(search.category)}")

    if search.network is not None:
        conditions.append(f"network = {bind(search.network)}")

    if not conditions:
        return "", args
    return "WHERE " + " AND ".join(conditions), args


def build_search_query(search: SearchFilter) -> QueryPlan:
    """Build the bounded page query and its matching count query."""
    where, args = build_where(search)
    limit = search.effective_page_size
    offset = search.offset

    n = len(args)
    page_sql = (
        f"SELECT {CONTRACT_COLUMNS} FROM contracts {where} "
        f"{ORDER_BY} LIMIT ${n + 1} OFFSET ${n + 2}"
    )
    count_sql = f"SELECT COUNT(*) FROM contracts {where}"

    return QueryPlan(
        page_sql=page_sql,
        count_sql=count_sql,
        filter_args=tuple(args),
        limit=limit,
        offset=offset,
    )
