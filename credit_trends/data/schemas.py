"""
Record and filter-selection schemas.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional


@dataclass(frozen=True)
class TaxCreditRecord:
    """One tax-credit observation row."""
    year: int
    state: str
    credit_type: str
    sector: str
    claimed_amount: float
    claims_count: int
    income_bracket: str
    source: str


class Dimension(str, Enum):
    YEARS = "years"
    STATES = "states"
    CREDIT_TYPES = "credit_types"
    SECTORS = "sectors"
    INCOME_BRACKETS = "income_brackets"

    @property
    def field(self) -> str:
        """Record field (and frame column) this dimension filters on."""
        return _DIMENSION_FIELDS[self]

    @property
    def label(self) -> str:
        return _DIMENSION_LABELS[self]

    @classmethod
    def parse(cls, value: "str | Dimension") -> "Dimension":
        """Accept enum members, values ("credit_types") or camelCase ("creditTypes")."""
        if isinstance(value, Dimension):
            return value
        key = str(value).strip()
        for dim in cls:
            if key in (dim.value, _camel(dim.value), dim.field):
                return dim
        raise ValueError(f"Unknown dimension: {value!r}. Valid: {[d.value for d in cls]}")


_DIMENSION_FIELDS = {
    Dimension.YEARS: "year",
    Dimension.STATES: "state",
    Dimension.CREDIT_TYPES: "credit_type",
    Dimension.SECTORS: "sector",
    Dimension.INCOME_BRACKETS: "income_bracket",
}

_DIMENSION_LABELS = {
    Dimension.YEARS: "Year",
    Dimension.STATES: "State",
    Dimension.CREDIT_TYPES: "Credit Type",
    Dimension.SECTORS: "Sector",
    Dimension.INCOME_BRACKETS: "Income Bracket",
}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.title() for p in rest)


@dataclass
class FilterSelection:
    """Per-dimension value sets. An empty set places no restriction on that dimension."""
    years: set[int] = field(default_factory=set)
    states: set[str] = field(default_factory=set)
    credit_types: set[str] = field(default_factory=set)
    sectors: set[str] = field(default_factory=set)
    income_brackets: set[str] = field(default_factory=set)

    def values(self, dimension: "str | Dimension") -> set:
        return getattr(self, Dimension.parse(dimension).value)

    def add(self, dimension: "str | Dimension", value) -> None:
        dim = Dimension.parse(dimension)
        self.values(dim).add(coerce_filter_value(dim, value))

    def remove(self, dimension: "str | Dimension", value) -> None:
        dim = Dimension.parse(dimension)
        self.values(dim).discard(coerce_filter_value(dim, value))

    def clear_all(self) -> None:
        for dim in Dimension:
            self.values(dim).clear()

    def is_empty(self) -> bool:
        return self.active_count() == 0

    def active_count(self) -> int:
        """Total number of selected values across all dimensions."""
        return sum(len(self.values(dim)) for dim in Dimension)

    def copy(self) -> "FilterSelection":
        return FilterSelection(**{dim.value: set(self.values(dim)) for dim in Dimension})

    def to_dict(self) -> dict[str, list]:
        """Sorted lists per dimension (JSON-friendly)."""
        return {dim.value: sorted(self.values(dim)) for dim in Dimension}


def coerce_filter_value(dimension: "str | Dimension", value):
    """Normalise a filter value arriving from HTTP/CLI to the record field's type."""
    dim = Dimension.parse(dimension)
    if dim == Dimension.YEARS:
        if isinstance(value, bool):
            raise ValueError(f"Invalid year: {value!r}")
        try:
            return int(str(value).strip())
        except ValueError:
            raise ValueError(f"Invalid year: {value!r}") from None
    return str(value).strip()


def selection_from_mapping(raw: Optional[Mapping[str, Iterable]]) -> FilterSelection:
    """Build a selection from ``{dimension: [values]}``, ignoring blank values."""
    selection = FilterSelection()
    for key, values in (raw or {}).items():
        if not values:
            continue
        dim = Dimension.parse(key)
        for v in values:
            if v is None or str(v).strip() == "":
                continue
            selection.add(dim, v)
    return selection
