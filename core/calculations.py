# core/calculations.py

import re
from collections import defaultdict
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Iterable, Union

from models.enums import CalculationType, RecordType, UnitStatus


CENTS = Decimal("0.01")

# Working precision for rent arithmetic; results that still do not fit are rejected
RENT_PRECISION = 60

# Leading numeric prefix, the way a browser's parseFloat reads form input
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    "5" -> 5, "7.5%" -> 7.5, "" / "abc" / None -> 0.
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, (int, float, Decimal)):
        return Decimal(str(value))

    match = _LEADING_NUMBER.match(value)
    if not match:
        return Decimal(0)
    return Decimal(match.group(1))


# -----------------------------------------------------
# RENT ESCALATION
# -----------------------------------------------------
def calculate_new_rent(
    current_rent: Union[int, float, Decimal],
    calculation_type: CalculationType,
    percentage_increase: str = "5",
    fixed_increase: str = "50",
) -> Decimal:
    """
    Raises ValueError when the result is not a finite amount that can be
    shown to the cent.
    """
    with localcontext() as ctx:
        ctx.prec = RENT_PRECISION
        try:
            current = Decimal(str(current_rent))
            if CalculationType(calculation_type) == CalculationType.percentage:
                new_rent = current * (1 + parse_amount(percentage_increase) / 100)
            else:
                new_rent = current + parse_amount(fixed_increase)
            return new_rent.quantize(CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise ValueError(f"Rent amount out of range: {current_rent!r}") from e


# -----------------------------------------------------
# OCCUPANCY
# -----------------------------------------------------
def occupancy_rate(units: Iterable) -> float:
    """Percent of units whose status is occupied; 0.0 when there are none."""
    units = list(units)
    if not units:
        return 0.0
    occupied = sum(1 for u in units if u.status == UnitStatus.occupied)
    return round(occupied / len(units) * 100, 1)


def occupancy_by_property(properties: Iterable, units: Iterable) -> list:
    units_by_property = defaultdict(list)
    for unit in units:
        units_by_property[unit.property_id].append(unit)

    return [
        {
            "property_id": p.id,
            "name": p.name,
            "units": len(units_by_property[p.id]),
            "occupied": sum(
                1 for u in units_by_property[p.id] if u.status == UnitStatus.occupied
            ),
            "occupancy": occupancy_rate(units_by_property[p.id]),
        }
        for p in properties
    ]


# -----------------------------------------------------
# FINANCIAL SUMMARY
# -----------------------------------------------------
def summarize_financials(records: Iterable) -> dict:
    income = Decimal(0)
    expenses = Decimal(0)
    by_property = defaultdict(lambda: {"income": Decimal(0), "expense": Decimal(0)})
    by_category = defaultdict(Decimal)

    for record in records:
        amount = Decimal(str(record.amount))
        if record.type == RecordType.income:
            income += amount
        else:
            expenses += amount
        by_property[record.property_id][record.type.value] += amount
        by_category[(record.type.value, record.category)] += amount

    return {
        "total_income": float(income),
        "total_expenses": float(expenses),
        "net_income": float(income - expenses),
        "by_property": [
            {
                "property_id": property_id,
                "income": float(totals["income"]),
                "expense": float(totals["expense"]),
                "net": float(totals["income"] - totals["expense"]),
            }
            for property_id, totals in sorted(by_property.items())
        ],
        "by_category": [
            {"type": record_type, "category": category, "amount": float(amount)}
            for (record_type, category), amount in sorted(by_category.items())
        ],
    }
