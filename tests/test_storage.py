from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from leakscan.schemas import InsertAnalysisResult, InsertFile, InsertProposal, InsertUser
from leakscan.storage import MemStorage, RecordNotFound, UsernameTaken


def _file(name="a.txt", file_type="contract", **kw):
    return InsertFile(filename=name, original_name=name, type=file_type, size=3, **kw)


def test_create_file_applies_defaults(storage):
    rec = storage.create_file(_file())
    assert rec.id
    assert rec.content is None
    assert rec.processed is False
    assert rec.uploaded_at.tzinfo is not None
    assert storage.get_file(rec.id) == rec


def test_files_by_type_keeps_insertion_order(storage):
    a = storage.create_file(_file("a.csv", "worklog"))
    storage.create_file(_file("b.txt", "contract"))
    c = storage.create_file(_file("c.json", "worklog"))
    assert [f.id for f in storage.get_files_by_type("worklog")] == [a.id, c.id]
    assert len(storage.get_files()) == 3
    assert storage.get_files_by_type("license") == []


def test_file_type_must_be_enumerated():
    with pytest.raises(ValidationError):
        _file(file_type="invoice")


def test_update_file_content(storage):
    rec = storage.create_file(_file())
    updated = storage.update_file_content(rec.id, "hello", True)
    assert updated.content == "hello"
    assert updated.processed is True
    assert storage.get_file(rec.id).content == "hello"


def test_update_unknown_file_raises(storage):
    with pytest.raises(RecordNotFound):
        storage.update_file_content("missing", "x", True)


def test_usernames_are_unique(storage):
    user = storage.create_user(InsertUser(username="ops", password="h"))
    assert storage.get_user(user.id) == user
    assert storage.get_user_by_username("ops") == user
    with pytest.raises(UsernameTaken):
        storage.create_user(InsertUser(username="ops", password="other"))


def test_analysis_amount_must_be_non_negative():
    with pytest.raises(ValidationError):
        InsertAnalysisResult(run_id="r", bucket="unbilled_work", type="revenue_leak",
                             title="Unbilled Work", amount="-5", severity="critical")
    with pytest.raises(ValidationError):
        InsertAnalysisResult(run_id="r", bucket="unbilled_work", type="revenue_leak",
                             title="Unbilled Work", amount="lots", severity="critical")


def test_results_filtered_by_type(storage):
    leak = storage.create_analysis_result(InsertAnalysisResult(
        run_id="r", bucket="unbilled_work", type="revenue_leak",
        title="Unbilled Work", amount="10", severity="critical"))
    storage.create_analysis_result(InsertAnalysisResult(
        run_id="r", bucket="unused_licenses", type="cost_waste",
        title="Unused Licenses", amount="4", severity="critical"))
    assert storage.get_analysis_results_by_type("revenue_leak") == [leak]
    assert leak.description is None and leak.details is None


def test_latest_proposal_empty(storage):
    assert storage.get_latest_proposal() is None


def test_latest_proposal_by_created_at():
    t1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = iter([t1 + timedelta(hours=1), t1])
    store = MemStorage(clock=lambda: next(ticks))
    newer = store.create_proposal(InsertProposal(title="newer", content="b"))
    store.create_proposal(InsertProposal(title="older", content="a"))
    assert store.get_latest_proposal() == newer
    assert len(store.get_proposals()) == 2


def test_latest_proposal_tie_goes_to_later_insert():
    t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    store = MemStorage(clock=lambda: t)
    store.create_proposal(InsertProposal(title="first", content="a"))
    second = store.create_proposal(InsertProposal(title="second", content="b"))
    assert store.get_latest_proposal() == second
