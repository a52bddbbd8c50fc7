"""
Registry of the record collections served by the API.

Each ``Collection`` enumerates the columns of its table in insert
order together with their SQL type.  Services build every statement
from these definitions, so table and column names never come from
request data.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.errors import UnknownCollectionError


@dataclass(frozen=True)
class Field:
    name: str
    sql_type: str = "TEXT"


@dataclass(frozen=True)
class Collection:
    """Description of one record collection.

    Attributes
    ----------
    name : str
        Public name used in URLs and service calls.
    table : str
        SQLite table holding the records.
    label : str
        Singular noun used in user-facing messages.
    fields : Tuple[Field, ...]
        Data columns in insert order (``id`` excluded).
    default_sort : Tuple[str, str]
        Column and direction used when listing without explicit sort.
    search_fields : Tuple[str, ...]
        Columns matched by ``search``.
    search_exact : bool
        Match the search term exactly instead of as a substring.
    """

    name: str
    table: str
    label: str
    fields: Tuple[Field, ...]
    default_sort: Tuple[str, str]
    search_fields: Tuple[str, ...]
    search_exact: bool = False

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def sortable(self) -> Tuple[str, ...]:
        return ("id",) + self.field_names


CUSTOMERS = Collection(
    name="customers",
    table="customers",
    label="customer",
    fields=(
        Field("legal_name"),
        Field("registration_date"),
        Field("tax_id"),
        Field("full_name"),
        Field("address"),
        Field("neighborhood"),
        Field("postal_code"),
        Field("city"),
        Field("region"),
        Field("phone"),
    ),
    default_sort=("legal_name", "ASC"),
    search_fields=("legal_name", "tax_id"),
)

PRODUCTS = Collection(
    name="products",
    table="products",
    label="product",
    fields=(
        Field("item"),
        Field("code"),
        Field("quantity", "INTEGER"),
        Field("serial_number"),
        Field("entry_date"),
        Field("exit_date"),
        Field("description"),
    ),
    default_sort=("entry_date", "DESC"),
    search_fields=("code",),
    search_exact=True,
)

COLLECTIONS: Dict[str, Collection] = {c.name: c for c in (CUSTOMERS, PRODUCTS)}


def get_collection(name: str) -> Collection:
    """Return the registered collection called ``name``.

    Raises
    ------
    UnknownCollectionError
        If no collection with that name is registered.
    """
    collection: Optional[Collection] = COLLECTIONS.get(name)
    if collection is None:
        raise UnknownCollectionError(f"Unknown collection: {name!r}")
    return collection
