from __future__ import annotations

import pytest

from payment_tester.catalog import TestCase
from payment_tester.runner import ResultStatus, ResultStore, TestResult, grade, summarize

CASE = TestCase(id=1, name="One", category="valid", expected_status=200, expected_code="AP00")


@pytest.mark.parametrize(
    "http_status, body, expected",
    [
        (200, {"status_code": "AP00"}, True),
        (200, {"status_code": "AP00", "extra": [1, 2]}, True),
        (200, {"status_code": "AP02"}, False),
        (400, {"status_code": "AP00"}, False),
        (200, {"status_code": "ap00"}, False),
        (200, {"status_code": 0}, False),
        (200, {}, False),
        (200, ["AP00"], False),
        (200, None, False),
    ],
)
def test_grade(http_status, body, expected) -> None:
    assert grade(CASE, http_status, body) is expected


def test_grade_does_not_modify_body() -> None:
    body = {"status_code": "AP00"}
    assert grade(CASE, 200, body) is grade(CASE, 200, body)
    assert body == {"status_code": "AP00"}


def test_result_constructors() -> None:
    running = TestResult.running()
    assert running.status == ResultStatus.RUNNING
    assert not running.is_terminal

    complete = TestResult.complete(passed=True, response={"status_code": "AP00"}, status_code=200)
    assert complete.is_terminal
    assert complete.response_code == "AP00"

    failed = TestResult.failed("Connection failed")
    assert failed.is_terminal
    assert failed.passed is False
    assert failed.to_dict() == {
        "status": "error",
        "passed": False,
        "status_code": None,
        "response_code": None,
        "error": "Connection failed",
        "response": None,
    }


def test_store_point_writes_replace_entries() -> None:
    store = ResultStore()
    assert store.get(1) is None
    store.set(1, TestResult.complete(True, {"status_code": "AP00"}, 200))
    store.set(2, TestResult.running())
    replacement = TestResult.failed("boom")
    store.set(1, replacement)

    assert store.get(1) is replacement
    assert store.get(2).status == ResultStatus.RUNNING
    assert len(store) == 2
    assert 2 in store

    snapshot = store.get_all()
    store.clear()
    assert len(store) == 0
    assert set(snapshot) == {1, 2}


def test_summarize(catalog) -> None:
    store = ResultStore()
    assert summarize(catalog, store).to_dict() == {"total": 4, "passed": 0, "failed": 0, "pending": 4}

    store.set(1, TestResult.complete(True, {"status_code": "AP00"}, 200))
    store.set(2, TestResult.complete(False, {"status_code": "AP00"}, 200))
    store.set(3, TestResult.failed("timeout"))
    store.set(4, TestResult.running())
    store.set(99, TestResult.complete(True, {}, 200))

    summary = summarize(catalog, store)
    assert (summary.passed, summary.failed, summary.pending) == (1, 2, 1)
    assert summary.completed == 3
    assert summary.total == 4
    assert not summary.all_passed


def test_summary_all_passed(catalog) -> None:
    store = ResultStore()
    for case in catalog:
        store.set(case.id, TestResult.complete(True, {}, 200))
    assert summarize(catalog, store).all_passed
