import asyncio

import pytest

from conftest import FakeLLM, contract_analysis, license_analysis
from leakscan.services.analysis_service import AnalysisService
from leakscan.services.buckets import decimal_str
from leakscan.services.file_intake import FileIntakeService


def _load(storage, *demos):
    intake = FileIntakeService(storage)
    for d in demos:
        intake.load_demo(d)


def test_no_files_no_results(storage, llm):
    results = asyncio.run(AnalysisService(storage, llm).run())
    assert results == []
    assert llm.calls == []
    assert storage.get_analysis_results() == []


def test_contract_needs_worklogs_too(storage, llm):
    _load(storage, "contract")
    assert asyncio.run(AnalysisService(storage, llm).run()) == []
    assert llm.calls == []


def test_combined_text_joins_with_blank_lines(storage, llm):
    intake = FileIntakeService(storage)
    intake.save_upload("a.txt", "contract", b"first")
    intake.save_upload("b.txt", "contract", b"second")
    assert AnalysisService(storage, llm).combined_text("contract") == "first\n\nsecond"


def test_single_unbilled_bucket(storage):
    llm = FakeLLM(contract=contract_analysis(unbilled=1200, items=[
        {"client": "TechFlow", "amount": 1200, "description": "Recovery", "hours": 8},
    ]))
    _load(storage, "contract", "logs")

    results = asyncio.run(AnalysisService(storage, llm).run())

    assert len(results) == 1
    r = results[0]
    assert (r.type, r.title, r.severity, r.amount) == ("revenue_leak", "Unbilled Work", "critical", "1200")
    assert r.bucket == "unbilled_work"
    assert r.description == "1 items of unbilled work detected"
    assert r.details["items"][0]["client"] == "TechFlow"
    assert storage.get_analysis_results() == results


def test_all_buckets_map_to_fixed_tuples(storage):
    llm = FakeLLM(
        contract=contract_analysis(unbilled=1, sla=2, mispriced=3),
        licenses=license_analysis(unused=4, duplicates=5, overprovisioned=6.5),
    )
    _load(storage, "contract", "logs", "licenses")

    results = asyncio.run(AnalysisService(storage, llm).run())

    assert [(r.type, r.title, r.severity, r.amount) for r in results] == [
        ("revenue_leak", "Unbilled Work", "critical", "1"),
        ("revenue_leak", "SLA Breaches", "medium", "2"),
        ("revenue_leak", "Mispriced Services", "opportunity", "3"),
        ("cost_waste", "Unused Licenses", "critical", "4"),
        ("cost_waste", "Duplicate Subscriptions", "medium", "5"),
        ("cost_waste", "Overprovisioned Services", "medium", "6.5"),
    ]
    assert len({r.run_id for r in results}) == 1


def test_zero_and_negative_totals_are_skipped(storage):
    llm = FakeLLM(licenses=license_analysis(unused=0, duplicates=-3, overprovisioned=40))
    _load(storage, "licenses")

    results = asyncio.run(AnalysisService(storage, llm).run())

    assert [r.title for r in results] == ["Overprovisioned Services"]
    assert llm.calls == ["analyze_licenses"]


def test_repeated_runs_accumulate(storage):
    llm = FakeLLM(contract=contract_analysis(unbilled=100, sla=50))
    _load(storage, "contract", "logs")
    svc = AnalysisService(storage, llm)

    first = asyncio.run(svc.run())
    second = asyncio.run(svc.run())

    assert len(first) == len(second) == 2
    assert len(storage.get_analysis_results()) == 4
    assert first[0].run_id != second[0].run_id


def test_license_failure_keeps_contract_results(storage):
    llm = FakeLLM(contract=contract_analysis(unbilled=100))
    llm.fail_on = "analyze_licenses"
    _load(storage, "contract", "logs", "licenses")

    with pytest.raises(RuntimeError):
        asyncio.run(AnalysisService(storage, llm).run())

    assert [r.title for r in storage.get_analysis_results()] == ["Unbilled Work"]


@pytest.mark.parametrize("value,expected", [
    (1200, "1200"), (1200.0, "1200"), (12.5, "12.5"), ("0.10", "0.1"), (1e7, "10000000"),
])
def test_decimal_str(value, expected):
    assert decimal_str(value) == expected
