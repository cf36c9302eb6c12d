from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

FileType = Literal["contract", "worklog", "license"]
ResultType = Literal["revenue_leak", "cost_waste"]
Severity = Literal["critical", "medium", "low", "opportunity"]
BucketKind = Literal[
    "unbilled_work",
    "sla_breaches",
    "mispriced_services",
    "unused_licenses",
    "duplicate_subscriptions",
    "overprovisioned",
]

FILE_TYPES = ("contract", "worklog", "license")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _non_negative_amount(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        parsed = Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal amount: {value!r}") from exc
    if not parsed.is_finite() or parsed < 0:
        raise ValueError(f"amount must be a non-negative number: {value!r}")
    return value


# --- users ---

class InsertUser(CamelModel):
    username: str
    password: str


class User(InsertUser):
    id: str


class PublicUser(CamelModel):
    id: str
    username: str


# --- uploaded files ---

class InsertFile(CamelModel):
    filename: str
    original_name: str
    type: FileType
    size: int = Field(ge=0)
    content: Optional[str] = None
    processed: bool = False


class UploadedFile(InsertFile):
    id: str
    uploaded_at: datetime


# --- analyzer buckets ---
# Item fields are optional and unknown keys are kept: the model reply is only
# checked for shape, not content.

class BucketItem(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class UnbilledItem(BucketItem):
    client: Optional[str] = None
    amount: Optional[float] = None
    description: Optional[str] = None
    hours: Optional[float] = None


class SlaViolation(BucketItem):
    type: Optional[str] = None
    amount: Optional[float] = None
    description: Optional[str] = None


class MispricedService(BucketItem):
    service: Optional[str] = None
    current_price: Optional[float] = None
    market_price: Optional[float] = None
    difference: Optional[float] = None


class UnusedLicense(BucketItem):
    tool: Optional[str] = None
    monthly_price: Optional[float] = None
    last_used: Optional[str] = None
    users: Optional[int] = None


class DuplicateSubscription(BucketItem):
    tools: List[str] = Field(default_factory=list)
    monthly_price: Optional[float] = None
    functionality: Optional[str] = None


class OverprovisionedService(BucketItem):
    service: Optional[str] = None
    current_users: Optional[int] = None
    active_users: Optional[int] = None
    monthly_savings: Optional[float] = None


class UnbilledWork(CamelModel):
    total: float = 0
    items: List[UnbilledItem] = Field(default_factory=list)


class SlaBreaches(CamelModel):
    total: float = 0
    violations: List[SlaViolation] = Field(default_factory=list)


class MispricedServices(CamelModel):
    total: float = 0
    services: List[MispricedService] = Field(default_factory=list)


class UnusedLicenses(CamelModel):
    total: float = 0
    licenses: List[UnusedLicense] = Field(default_factory=list)


class DuplicateSubscriptions(CamelModel):
    total: float = 0
    duplicates: List[DuplicateSubscription] = Field(default_factory=list)


class Overprovisioned(CamelModel):
    total: float = 0
    services: List[OverprovisionedService] = Field(default_factory=list)


class ContractAnalysis(CamelModel):
    unbilled_work: UnbilledWork
    sla_breaches: SlaBreaches
    mispriced_services: MispricedServices


class LicenseAnalysis(CamelModel):
    unused_licenses: UnusedLicenses
    duplicate_subscriptions: DuplicateSubscriptions
    overprovisioned: Overprovisioned


# --- analysis results ---

class InsertAnalysisResult(CamelModel):
    run_id: str
    bucket: BucketKind
    type: ResultType
    title: str
    amount: str
    description: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    severity: Severity

    @field_validator("amount")
    @classmethod
    def check_amount(cls, value):
        return _non_negative_amount(value)


class AnalysisResult(InsertAnalysisResult):
    id: str
    created_at: datetime


class AnalysisRun(CamelModel):
    success: bool = True
    results: List[AnalysisResult]


# --- proposals ---

class InsertProposal(CamelModel):
    title: str
    content: str
    total_impact: Optional[str] = None
    one_time_recovery: Optional[str] = None
    annual_savings: Optional[str] = None

    @field_validator("total_impact", "one_time_recovery", "annual_savings")
    @classmethod
    def check_amounts(cls, value):
        return _non_negative_amount(value)


class Proposal(InsertProposal):
    id: str
    created_at: datetime


class ProposalRequest(CamelModel):
    client_name: Optional[str] = None


class DemoRequest(CamelModel):
    type: Optional[str] = None
