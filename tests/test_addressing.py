from __future__ import annotations

from pathlib import Path

import pytest

from core.exceptions import ValidationError
from core.storage.addressing import address_for, filename_for, normalize_identifier


def test_address_layout(tmp_path):
    path = address_for(tmp_path, "channeltest", "1")
    assert path == tmp_path / "channeltest" / "channeltest_w_1_full.mp4"


def test_address_is_deterministic(tmp_path):
    assert address_for(tmp_path, "abc", "7") == address_for(tmp_path, "abc", "7")
    assert address_for(tmp_path, "abc", "7") != address_for(tmp_path, "abc", "8")


@pytest.mark.parametrize("schema, worker_id", [(" abc", "7"), ("abc ", "7"), ("abc", "7\n"), ("abc", "\t7")])
def test_padded_identifiers_rejected(tmp_path, schema, worker_id):
    with pytest.raises(ValidationError) as excinfo:
        address_for(tmp_path, schema, worker_id)
    assert "whitespace" in excinfo.value.message


def test_inner_spaces_are_kept(tmp_path):
    assert address_for(tmp_path, "my channel", "7").name == "my channel_w_7_full.mp4"


def test_filename_for():
    assert filename_for("tenant", "42") == "tenant_w_42_full.mp4"


@pytest.mark.parametrize("schema, worker_id", [("", "1"), ("abc", ""), (None, "1"), ("abc", None), ("   ", "1")])
def test_missing_identifiers_rejected(tmp_path, schema, worker_id):
    with pytest.raises(ValidationError):
        address_for(tmp_path, schema, worker_id)


@pytest.mark.parametrize(
    "value",
    ["../etc", "a/b", "..", ".", "a\\b", "nul\x00byte", "/abs"],
)
def test_traversal_values_rejected(tmp_path, value):
    with pytest.raises(ValidationError):
        address_for(tmp_path, value, "1")
    with pytest.raises(ValidationError):
        address_for(tmp_path, "abc", value)


def test_dots_inside_names_are_allowed(tmp_path):
    path = address_for(tmp_path, "v1.2", "a..b")
    assert path.parent == tmp_path / "v1.2"
    assert path.name == "v1.2_w_a..b_full.mp4"


def test_overlong_filename_rejected(tmp_path):
    with pytest.raises(ValidationError) as excinfo:
        address_for(tmp_path, "s" * 200, "w" * 100)
    assert "too long" in excinfo.value.message


def test_normalize_identifier_reports_field():
    with pytest.raises(ValidationError) as excinfo:
        normalize_identifier("worker_id", "")
    assert excinfo.value.details == {"field": "worker_id"}


def test_path_stays_under_base_dir(tmp_path):
    path = address_for(tmp_path, "x", "y")
    assert Path(tmp_path).resolve() in path.resolve().parents
