"""
Repository layer consumed by the search service.

The service only depends on the two protocols below; the SQLAlchemy
implementations compile the criteria tree into a single SQL query.
A repository may also offer ``interrupt()``, which the service calls to
abort a query that outlived the search timeout.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Protocol, Sequence, Tuple

from sqlalchemy import and_, false, or_, true
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, joinedload
from structlog import get_logger

from ..exceptions import RepositoryUnavailableError
from ..models import Category, Product
from .criteria import AllOf, AnyOf, CategoryIn, Criterion, FieldMatch, PriceBetween

logger = get_logger(__name__)

# Connection-level failures that mean the store cannot be reached
UNAVAILABLE_ERRORS = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    TimeoutError,
)

TEXT_COLUMNS = {
    "name": Product.name,
    "description": Product.description,
}


@dataclass(frozen=True)
class ProductRecord:
    id: int
    name: str
    description: str
    price: float
    stock: int
    category_name: Optional[str] = None
    images: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_model(cls, product: Product) -> "ProductRecord":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description or "",
            price=product.price,
            stock=product.stock or 0,
            category_name=product.category_name,
            images=tuple(product.images or ()),
        )


class CategoryRef(NamedTuple):
    id: int
    name: str


class ProductRepository(Protocol):
    def find(self, criteria: Criterion, sort_by_price: bool = True) -> List[ProductRecord]:
        ...


class CategoryRepository(Protocol):
    def find_by_name_substrings(self, substrings: Sequence[str]) -> List[CategoryRef]:
        ...


def compile_criteria(criterion: Criterion):
    """Turn a criteria tree into a SQLAlchemy boolean clause."""
    if isinstance(criterion, FieldMatch):
        column = TEXT_COLUMNS.get(criterion.field)
        if column is None:
            raise ValueError(f"Unsupported search field: {criterion.field}")
        # autoescape keeps % and _ in user text literal
        return column.icontains(criterion.term, autoescape=True)
    if isinstance(criterion, PriceBetween):
        bounds = []
        if criterion.min is not None:
            bounds.append(Product.price >= criterion.min)
        if criterion.max is not None:
            bounds.append(Product.price <= criterion.max)
        return and_(true(), *bounds)
    if isinstance(criterion, CategoryIn):
        return Product.category_id.in_(criterion.ids)
    if isinstance(criterion, AnyOf):
        if not criterion.clauses:
            return false()
        return or_(*[compile_criteria(clause) for clause in criterion.clauses])
    if isinstance(criterion, AllOf):
        return and_(true(), *[compile_criteria(clause) for clause in criterion.clauses])
    raise TypeError(f"Unknown criterion type: {type(criterion).__name__}")


class _InterruptibleRepository:
    """
    Base for SQL repositories whose running statement can be aborted from
    another thread.

    The DBAPI connection in use is remembered while a query runs so that
    ``interrupt`` can reach it: sqlite3 exposes ``interrupt()``, psycopg
    exposes ``cancel()``.
    """

    def __init__(self, db: Session):
        self.db = db
        self._active_connection = None

    def _execute(self, query, event: str):
        try:
            self._active_connection = self.db.connection().connection.driver_connection
            return query.all()
        except UNAVAILABLE_ERRORS as e:
            logger.error(event, error=str(e))
            raise RepositoryUnavailableError(type(e).__name__) from e
        finally:
            self._active_connection = None

    def interrupt(self) -> bool:
        connection = self._active_connection
        if connection is None:
            return False
        for name in ("interrupt", "cancel"):
            abort = getattr(connection, name, None)
            if callable(abort):
                logger.info("repository_query_interrupted", method=name)
                abort()
                return True
        return False


class SqlProductRepository(_InterruptibleRepository):
    def find(self, criteria: Criterion, sort_by_price: bool = True) -> List[ProductRecord]:
        query = (
            self.db.query(Product)
            .options(joinedload(Product.category))
            .filter(compile_criteria(criteria))
        )
        if sort_by_price:
            query = query.order_by(Product.price.asc(), Product.id.asc())

        products = self._execute(query, "product_repository_unavailable")
        return [ProductRecord.from_model(product) for product in products]


class SqlCategoryRepository(_InterruptibleRepository):
    def find_by_name_substrings(self, substrings: Sequence[str]) -> List[CategoryRef]:
        if not substrings:
            return []

        query = self.db.query(Category.id, Category.name).filter(
            or_(*[Category.name.icontains(substring, autoescape=True) for substring in substrings])
        )
        rows = self._execute(query, "category_repository_unavailable")
        return [CategoryRef(row.id, row.name) for row in rows]
