from __future__ import annotations

import pytest

from payment_tester.config import HarnessConfig, load_endpoint
from payment_tester.transport import DEFAULT_ENDPOINT


def test_default_endpoint(tmp_path) -> None:
    assert load_endpoint(tmp_path / "missing") == DEFAULT_ENDPOINT


def test_endpoint_from_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("PAYMENT_API_URL", " http://localhost:3000/payment-instructions ")
    assert load_endpoint(tmp_path / "missing") == "http://localhost:3000/payment-instructions"


def test_endpoint_from_env_file(tmp_path) -> None:
    env_path = tmp_path / "env"
    env_path.write_text(
        "# local overrides\n\nOTHER=1\nPAYMENT_API_URL=http://staging.test/pi\n",
        encoding="utf-8",
    )
    assert load_endpoint(env_path) == "http://staging.test/pi"


def test_env_file_in_home_directory(tmp_path) -> None:
    env_dir = tmp_path / ".payment-tester"
    env_dir.mkdir()
    (env_dir / "env").write_text("PAYMENT_API_URL=http://home.test/pi\n", encoding="utf-8")
    assert load_endpoint() == "http://home.test/pi"
    assert HarnessConfig().endpoint == "http://home.test/pi"


def test_config_defaults() -> None:
    config = HarnessConfig()
    assert config.endpoint == DEFAULT_ENDPOINT
    assert config.inter_call_delay == 0.5
    assert config.request_timeout is None
    assert config.save_report is False


@pytest.mark.parametrize("kwargs", [{"inter_call_delay": -1}, {"request_timeout": 0}])
def test_config_rejects_bad_values(kwargs) -> None:
    with pytest.raises(ValueError):
        HarnessConfig(**kwargs)
