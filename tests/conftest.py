from __future__ import annotations

import pytest

from travel_ai.config.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        serpapi_key=None,
        flight_api_key=None,
        mapping_api_key=None,
        log_dir=tmp_path / "logs",
    )
