from __future__ import annotations

import pytest

from payment_tester.catalog import TestCatalog, parse_catalog_data
from payment_tester.config import HarnessConfig
from payment_tester.runner.executor import ExecutionEngine

from .fakes import FakeClient, RecordingSleep, make_case


@pytest.fixture
def catalog() -> TestCatalog:
    return parse_catalog_data({
        "cases": [
            make_case(1),
            make_case(2, code="AP02"),
            make_case(3, category="invalid", status=400, code="AC01"),
            make_case(4, category="invalid", status=400, code="CU01"),
        ]
    })


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_engine(catalog, sleep):
    def factory(client: FakeClient, delay: float = 0.5) -> ExecutionEngine:
        config = HarnessConfig(endpoint="http://api.test/payment-instructions", inter_call_delay=delay)
        return ExecutionEngine(catalog, client, config=config, sleep=sleep)

    return factory


@pytest.fixture(autouse=True)
def _no_endpoint_env(monkeypatch, tmp_path):
    monkeypatch.delenv("PAYMENT_API_URL", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
