import json

import pytest

from autosave.core.fields import BoolField
from autosave.core.observable import ObservableSettings
from autosave.core.snapshot import decode_snapshot, encode_snapshot, load_snapshot


class _Flags(ObservableSettings):
    field_one = BoolField(key="FieldOne")
    field_two = BoolField(key="FieldTwo")


def test_encode_uses_declaration_order_and_indentation():
    settings = _Flags()
    settings.field_two = True

    data = encode_snapshot(settings.snapshot(), indent=2)

    assert data == b'{\n  "FieldOne": false,\n  "FieldTwo": true\n}'
    assert json.loads(data) == {"FieldOne": False, "FieldTwo": True}


def test_encode_is_byte_identical_for_equal_state():
    settings = _Flags()
    first = encode_snapshot(settings.snapshot())
    second = encode_snapshot(settings.snapshot())
    assert first == second


def test_encode_keeps_non_ascii_as_utf8():
    data = encode_snapshot({"name": "café"})
    assert "café".encode("utf-8") in data


def test_encode_rejects_unserializable_values():
    with pytest.raises(TypeError):
        encode_snapshot({"handle": object()})


def test_decode_requires_object_root():
    assert decode_snapshot('{"FieldOne": true}') == {"FieldOne": True}
    with pytest.raises(ValueError):
        decode_snapshot(b"[true, false]")


def test_load_snapshot_missing_file(tmp_path):
    settings = _Flags()
    assert load_snapshot(settings, tmp_path / "absent.json") is False
    assert settings.snapshot() == {"FieldOne": False, "FieldTwo": False}


def test_load_snapshot_malformed_file_keeps_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    settings = _Flags()

    assert load_snapshot(settings, path) is False
    assert settings.snapshot() == {"FieldOne": False, "FieldTwo": False}


def test_load_snapshot_restores_without_notifications(tmp_path):
    path = tmp_path / "settings.json"
    path.write_bytes(b'{"FieldOne": true, "FieldTwo": false}')
    settings = _Flags()
    events = []
    settings.subscribe(events.append)

    assert load_snapshot(settings, path) is True
    assert settings.field_one is True
    assert events == []


def test_encode_rejects_nan_and_infinity():
    with pytest.raises(ValueError):
        encode_snapshot({"ratio": float("nan")})
    with pytest.raises(ValueError):
        encode_snapshot({"ratio": float("inf")})
