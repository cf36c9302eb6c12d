"""Shared fixtures: an app wired to a fresh store and a scripted fake LLM."""

import pytest
from fastapi.testclient import TestClient

from leakscan.main import create_app
from leakscan.schemas import ContractAnalysis, LicenseAnalysis
from leakscan.storage import MemStorage


def contract_analysis(unbilled=0, sla=0, mispriced=0, **extra) -> ContractAnalysis:
    data = {
        "unbilledWork": {"total": unbilled, "items": extra.get("items", [])},
        "slaBreaches": {"total": sla, "violations": extra.get("violations", [])},
        "mispricedServices": {"total": mispriced, "services": extra.get("services", [])},
    }
    return ContractAnalysis.model_validate(data)


def license_analysis(unused=0, duplicates=0, overprovisioned=0, **extra) -> LicenseAnalysis:
    data = {
        "unusedLicenses": {"total": unused, "licenses": extra.get("licenses", [])},
        "duplicateSubscriptions": {"total": duplicates, "duplicates": extra.get("duplicates", [])},
        "overprovisioned": {"total": overprovisioned, "services": extra.get("services", [])},
    }
    return LicenseAnalysis.model_validate(data)


class FakeLLM:
    """Records calls and returns canned analyses; set `fail_on` to make one call raise."""

    def __init__(self, contract=None, licenses=None, proposal_text="Proposal body"):
        self.contract = contract or contract_analysis()
        self.licenses = licenses or license_analysis()
        self.proposal_text = proposal_text
        self.fail_on = None
        self.calls = []

    def _maybe_fail(self, name):
        self.calls.append(name)
        if self.fail_on == name:
            raise RuntimeError(f"{name} exploded")

    async def analyze_contract(self, contract_text, work_logs):
        self._maybe_fail("analyze_contract")
        self.last_contract_args = (contract_text, work_logs)
        return self.contract

    async def analyze_licenses(self, license_data):
        self._maybe_fail("analyze_licenses")
        self.last_license_args = license_data
        return self.licenses

    async def generate_proposal(self, contract, licenses, client_name=None):
        self._maybe_fail("generate_proposal")
        self.last_proposal_args = (contract, licenses, client_name)
        return self.proposal_text


@pytest.fixture
def storage():
    return MemStorage()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def client(storage, llm):
    with TestClient(create_app(storage=storage, llm=llm)) as c:
        yield c
