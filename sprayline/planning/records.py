"""
Plain value records consumed by the planning calculators.

Records are immutable and know nothing about storage. ``from_row`` accepts
both the datastore's snake_case columns and the camelCase keys sent by the
dashboard forms.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple, Union

from sprayline.datetime_utils import to_day, WEEKDAY_INDICES


class RecordError(ValueError):
    """Raised when a row cannot be turned into a planning record."""


_MISSING = object()


def _pick(row: Mapping[str, Any], *keys: str, default: Any = _MISSING) -> Any:
    """Return the value of the first key present in row."""
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    if default is _MISSING:
        raise RecordError(f"Missing required field: {keys[0]}")
    return default


def _number(row: Mapping[str, Any], *keys: str, default: Any = _MISSING) -> float:
    value = _pick(row, *keys, default=default)
    if isinstance(value, bool):
        raise RecordError(f"Field {keys[0]} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RecordError(f"Field {keys[0]} must be a number, got {value!r}")


def _quantity(row: Mapping[str, Any], *keys: str, default: Any = _MISSING) -> Union[int, float]:
    value = _number(row, *keys, default=default)
    return int(value) if value.is_integer() else value


def _day(row: Mapping[str, Any], *keys: str) -> date:
    value = _pick(row, *keys)
    try:
        return to_day(value)
    except (TypeError, ValueError):
        raise RecordError(f"Field {keys[0]} must be an ISO date, got {value!r}")


class ProductType(Enum):
    """Kind of work a product goes through."""
    SPRAY = "spray"
    ADJUSTMENT = "adjustment"

    @classmethod
    def parse(cls, value: Any) -> "ProductType":
        if isinstance(value, cls):
            return value
        labels = {
            'spray': cls.SPRAY,
            'aspercao': cls.SPRAY,
            'adjustment': cls.ADJUSTMENT,
            'ajustagem': cls.ADJUSTMENT,
        }
        normalized = str(value).strip().lower()
        if normalized not in labels:
            raise RecordError(f"Unknown product type: {value!r}")
        return labels[normalized]


@dataclass(frozen=True)
class Product:
    """A catalog product; production_time is minutes per unit."""
    id: str
    name: str
    production_time: float
    type: ProductType = ProductType.SPRAY

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Product":
        return cls(
            id=str(_pick(row, 'id')),
            name=str(_pick(row, 'name', default='')),
            production_time=_number(row, 'production_time', 'productionTime'),
            type=ProductType.parse(_pick(row, 'type', default=ProductType.SPRAY)),
        )


@dataclass(frozen=True)
class Nozzle:
    """A spray nozzle; flow_rate is grams per second."""
    id: str
    name: str
    flow_rate: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Nozzle":
        return cls(
            id=str(_pick(row, 'id')),
            name=str(_pick(row, 'name', default='')),
            flow_rate=_number(row, 'flow_rate', 'flowRate'),
        )


@dataclass(frozen=True)
class Employee:
    id: str
    name: str
    hours_per_day: float
    working_days: FrozenSet[int] = frozenset()

    def works_on(self, weekday: int) -> bool:
        return weekday in self.working_days

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Employee":
        raw_days = _pick(row, 'working_days', 'workingDays', default=())
        try:
            working_days = frozenset(int(day) for day in raw_days)
        except (TypeError, ValueError):
            raise RecordError(f"Field working_days must be a list of weekday indices, got {raw_days!r}")
        invalid = sorted(day for day in working_days if day not in WEEKDAY_INDICES)
        if invalid:
            raise RecordError(f"Weekday indices must be between 0 and 6, got {invalid}")
        return cls(
            id=str(_pick(row, 'id')),
            name=str(_pick(row, 'name', default='')),
            hours_per_day=_number(row, 'hours_per_day', 'hoursPerDay'),
            working_days=working_days,
        )


@dataclass(frozen=True)
class Assignment:
    """Planned (and produced) units for one employee."""
    employee_id: str
    quantity: Union[int, float]
    real_quantity: Union[int, float] = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Assignment":
        return cls(
            employee_id=str(_pick(row, 'employee_id', 'employeeId')),
            quantity=_quantity(row, 'quantity'),
            real_quantity=_quantity(row, 'real_quantity', 'realQuantity', default=0),
        )


def _assignments(rows: Iterable[Mapping[str, Any]]) -> Tuple[Assignment, ...]:
    return tuple(Assignment.from_row(row) for row in rows)


@dataclass(frozen=True)
class ProductGroup:
    """One product of a spray batch with its assignments."""
    product_id: str
    assignments: Tuple[Assignment, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ProductGroup":
        return cls(
            product_id=str(_pick(row, 'product_id', 'productId')),
            assignments=_assignments(_pick(row, 'assignments', 'batch_assignments', default=())),
        )


@dataclass(frozen=True)
class SprayBatch:
    """
    A spray work order.

    real_production_time is in hours and real_input_kg in kilograms; both
    stay 0 until production data is entered.
    """
    id: str
    name: str
    nozzle_id: str
    start_date: date
    products: Tuple[ProductGroup, ...] = ()
    real_production_time: float = 0.0
    real_input_kg: float = 0.0

    def all_assignments(self) -> Tuple[Assignment, ...]:
        return tuple(a for group in self.products for a in group.assignments)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SprayBatch":
        return cls(
            id=str(_pick(row, 'id', default='')),
            name=str(_pick(row, 'name', default='')),
            nozzle_id=str(_pick(row, 'nozzle_id', 'nozzleId')),
            start_date=_day(row, 'start_date', 'startDate'),
            products=tuple(
                ProductGroup.from_row(group)
                for group in _pick(row, 'products', 'batch_products', default=())
            ),
            real_production_time=_number(row, 'real_production_time', 'realProductionTime', default=0.0),
            real_input_kg=_number(row, 'real_input_kg', 'realInputKg', default=0.0),
        )


@dataclass(frozen=True)
class AdjustmentBatch:
    """A single-product adjustment work order; real_time is in hours."""
    id: str
    name: str
    product_id: str
    start_date: date
    assignments: Tuple[Assignment, ...] = ()
    real_time: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AdjustmentBatch":
        return cls(
            id=str(_pick(row, 'id', default='')),
            name=str(_pick(row, 'name', default='')),
            product_id=str(_pick(row, 'product_id', 'productId')),
            start_date=_day(row, 'start_date', 'startDate'),
            assignments=_assignments(_pick(row, 'assignments', 'adjustment_assignments', default=())),
            real_time=_number(row, 'real_time', 'realTime', default=0.0),
        )


def index_by_id(records) -> Dict[str, Any]:
    """Return records keyed by id; mappings are returned as-is."""
    if records is None:
        return {}
    if isinstance(records, Mapping):
        return dict(records)
    return {record.id: record for record in records}


@dataclass(frozen=True)
class Catalog:
    """Snapshot of the reference data one calculation reads."""
    products: Dict[str, Product] = field(default_factory=dict)
    nozzles: Dict[str, Nozzle] = field(default_factory=dict)
    employees: Dict[str, Employee] = field(default_factory=dict)

    @classmethod
    def build(cls, products=(), nozzles=(), employees=()) -> "Catalog":
        return cls(
            products=index_by_id(products),
            nozzles=index_by_id(nozzles),
            employees=index_by_id(employees),
        )

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "Catalog":
        """Build a catalog from ``{products: [...], nozzles: [...], employees: [...]}`` rows."""
        payload = payload or {}
        return cls.build(
            products=[Product.from_row(row) for row in payload.get('products') or ()],
            nozzles=[Nozzle.from_row(row) for row in payload.get('nozzles') or ()],
            employees=[Employee.from_row(row) for row in payload.get('employees') or ()],
        )

    def product(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    def nozzle(self, nozzle_id: str) -> Optional[Nozzle]:
        return self.nozzles.get(nozzle_id)

    def employee(self, employee_id: str) -> Optional[Employee]:
        return self.employees.get(employee_id)
