import inspect

import pytest
from pydantic import ValidationError

from permitdesk.adapters.resources import build_query
from permitdesk.core.domain import requests
from permitdesk.core.domain.requests import DomainListParams, RequestModel, UpdateProfileRequest

FILTER_MODELS = sorted(
    (cls for name, cls in inspect.getmembers(requests, inspect.isclass) if name.endswith("ListParams")),
    key=lambda cls: cls.__name__,
)


def test_every_filter_model_is_per_resource():
    assert FILTER_MODELS
    assert all(cls.__name__ != "ListParams" for cls in FILTER_MODELS)
    assert all(issubclass(cls, RequestModel) for cls in FILTER_MODELS)


@pytest.mark.parametrize("model", FILTER_MODELS, ids=lambda cls: cls.__name__)
def test_filter_models_page_and_reject_unknown_fields(model):
    assert model(page=2, limit=5).model_dump(exclude_none=True) == {"page": 2, "limit": 5}

    with pytest.raises(ValidationError):
        model(unknown="x")
    with pytest.raises(ValidationError):
        model(page=0)


def test_filters_come_before_pagination_in_the_query():
    params = DomainListParams(page=1, is_active=True, name="Ops")
    assert build_query(params) == "name=Ops&is_active=true&page=1"


def test_profile_update_only_sends_given_fields():
    body = UpdateProfileRequest(full_name="Site Admin", phone_number="555-0101")
    assert body.model_dump(exclude_none=True) == {"full_name": "Site Admin", "phone_number": "555-0101"}
