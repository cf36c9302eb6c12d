from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, Type

from pydantic import BaseModel

from leakscan.schemas import (
    DuplicateSubscriptions,
    MispricedServices,
    Overprovisioned,
    SlaBreaches,
    UnbilledWork,
    UnusedLicenses,
)


@dataclass(frozen=True)
class Bucket:
    kind: str
    field: str  # attribute on ContractAnalysis / LicenseAnalysis
    model: Type[BaseModel]
    items_field: str
    result_type: str
    title: str
    severity: str
    describe: Callable[[int], str]


CONTRACT_BUCKETS = (
    Bucket("unbilled_work", "unbilled_work", UnbilledWork, "items",
           "revenue_leak", "Unbilled Work", "critical",
           lambda n: f"{n} items of unbilled work detected"),
    Bucket("sla_breaches", "sla_breaches", SlaBreaches, "violations",
           "revenue_leak", "SLA Breaches", "medium",
           lambda n: f"{n} SLA violations requiring credits"),
    Bucket("mispriced_services", "mispriced_services", MispricedServices, "services",
           "revenue_leak", "Mispriced Services", "opportunity",
           lambda n: "Services priced below market rate"),
)

LICENSE_BUCKETS = (
    Bucket("unused_licenses", "unused_licenses", UnusedLicenses, "licenses",
           "cost_waste", "Unused Licenses", "critical",
           lambda n: f"{n} inactive licenses found"),
    Bucket("duplicate_subscriptions", "duplicate_subscriptions", DuplicateSubscriptions, "duplicates",
           "cost_waste", "Duplicate Subscriptions", "medium",
           lambda n: f"{n} duplicate tools found"),
    Bucket("overprovisioned", "overprovisioned", Overprovisioned, "services",
           "cost_waste", "Overprovisioned Services", "medium",
           lambda n: f"{n} services with excessive capacity"),
)

BUCKETS: Dict[str, Bucket] = {b.kind: b for b in CONTRACT_BUCKETS + LICENSE_BUCKETS}


def decimal_str(value) -> str:
    """Render a number as a plain decimal string: 1200.0 -> "1200", 12.50 -> "12.5"."""

    d = value if isinstance(value, Decimal) else Decimal(str(value))
    if d == d.to_integral_value():
        return format(d.quantize(Decimal(1)), "f")
    return format(d.normalize(), "f")
