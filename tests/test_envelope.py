from typing import Any

import pytest

from conftest import envelope
from permitdesk.core.domain.envelope import ApiErrorEnvelope, decode_envelope, unwrap_data
from permitdesk.core.domain.models import Domain, Menu
from permitdesk.core.errors import EnvelopeError


def test_decode_list_keeps_order_and_meta():
    payload = envelope(
        [{"id": 2, "code": "B", "name": "Beta"}, {"id": 1, "code": "A", "name": "Alpha"}],
        meta={"page": 2, "limit": 2, "total": 5},
    )

    decoded = decode_envelope(payload, list[Domain])

    assert [d.id for d in decoded.data] == [2, 1]
    assert decoded.meta.page == 2
    assert decoded.meta.total == 5
    assert decoded.success is True


def test_unknown_fields_are_ignored():
    payload = envelope({"id": 3, "code": "X", "name": "Ops", "region": "north"}, message="fine")
    payload["extra"] = True

    domain = unwrap_data(payload, Domain)

    assert domain == Domain(id=3, code="X", name="Ops")


def test_nested_menu_tree_is_decoded():
    payload = envelope(
        [{"id": 1, "name": "Master", "path": "/master", "children": [{"id": 2, "name": "Domains", "path": "/domains"}]}]
    )

    menus = unwrap_data(payload, list[Menu])

    assert menus[0].children[0].path == "/domains"


def test_mismatched_shape_raises_envelope_error():
    payload = envelope({"id": "not-a-number", "code": "X", "name": "Y"})

    with pytest.raises(EnvelopeError) as exc_info:
        unwrap_data(payload, Domain)

    assert exc_info.value.payload == payload


def test_missing_data_is_an_error_unless_allowed():
    payload = envelope(None, message="deleted")

    with pytest.raises(EnvelopeError):
        unwrap_data(payload, Domain)
    assert unwrap_data(payload, Any, allow_none=True) is None


class TestErrorEnvelope:
    def test_top_level_message_first(self):
        body = ApiErrorEnvelope.model_validate({"message": "top", "error": {"message": "nested"}})
        assert body.resolved_message() == "top"

    def test_nested_message_second(self):
        body = ApiErrorEnvelope.model_validate({"success": False, "error": {"code": "X", "message": "nested"}})
        assert body.resolved_message() == "nested"

    def test_no_message_at_all(self):
        body = ApiErrorEnvelope.model_validate({"success": False})
        assert body.resolved_message() is None


def test_null_list_data_reads_as_empty_list():
    payload = {"success": True, "message": "OK", "data": None, "meta": {"page": 1, "limit": 10, "total": 0}}

    decoded = decode_envelope(payload, list[Domain])

    assert decoded.data == []
    assert decoded.meta.total == 0
    assert unwrap_data(payload, list[Domain]) == []


def test_null_data_is_still_an_error_for_single_entities():
    with pytest.raises(EnvelopeError):
        unwrap_data({"success": True, "data": None}, Domain)


def test_error_message_names_the_full_list_type():
    with pytest.raises(EnvelopeError, match=r"ApiResponse\[list\[.*Domain\]\]"):
        decode_envelope(envelope([{"id": "x"}]), list[Domain])
