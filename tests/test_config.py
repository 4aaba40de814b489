from __future__ import annotations

import pytest

from repobatch.config import Settings


def test_defaults_from_empty_env():
    settings = Settings.from_env({})

    assert settings.token is None
    assert settings.api_url == "https://api.github.com"
    assert settings.max_workers is None
    assert settings.timeout == 30


def test_values_from_env():
    settings = Settings.from_env({
        "GITHUB_TOKEN": "t0ken",
        "REPOBATCH_API_URL": "https://ghe.example.com/api/v3",
        "REPOBATCH_MAX_WORKERS": "8",
        "REPOBATCH_TIMEOUT": "10",
    })

    assert settings == Settings(
        token="t0ken",
        api_url="https://ghe.example.com/api/v3",
        max_workers=8,
        timeout=10,
    )


@pytest.mark.parametrize("raw", ["eight", "0", "-2"])
def test_bad_integers_name_the_variable(raw):
    with pytest.raises(ValueError, match="REPOBATCH_MAX_WORKERS"):
        Settings.from_env({"REPOBATCH_MAX_WORKERS": raw})
