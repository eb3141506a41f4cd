from __future__ import annotations

import pytest

from core.settings import Settings
from services.api.main import create_app


@pytest.fixture()
def base_dir(tmp_path):
    return tmp_path / "videos"


@pytest.fixture()
def settings(base_dir) -> Settings:
    return Settings(
        port=3000,
        video_base_dir=base_dir,
        public_base_url="http://relay.test",
        log_level="WARNING",
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)
