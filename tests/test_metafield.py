import logging

import pytest

from shopifygql.base import GraphQLClient, ShopifyError, UserErrorsError
from shopifygql.metafield import MetafieldService


class Recorder:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, payload):
        self.calls.append(payload)
        return self.responses.pop(0)


class FakeBulk:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.queries = []

    def bulk_query(self, query):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.result


def make(*responses, bulk=None):
    recorder = Recorder(*responses)
    return MetafieldService(GraphQLClient(recorder), bulk or FakeBulk([])), recorder


def test_list_all_returns_bulk_items():
    items = [{"id": "gid://shopify/Metafield/1", "key": "color"}]
    bulk = FakeBulk(items)
    service, _ = make(bulk=bulk)
    assert service.list_all_shop_metafields() == items
    assert "metafields" in bulk.queries[0]


def test_list_by_namespace_substitutes_namespace():
    bulk = FakeBulk([])
    service, _ = make(bulk=bulk)
    assert service.list_shop_metafields_by_namespace("custom") == []
    assert 'metafields(namespace: "custom")' in bulk.queries[0]
    assert "$namespace" not in bulk.queries[0]


def test_list_wraps_bulk_errors():
    service, _ = make(bulk=FakeBulk(error=ShopifyError("failed")))
    with pytest.raises(ShopifyError, match="^bulk query: failed$"):
        service.list_all_shop_metafields()


def test_get_by_key_returns_metafield():
    metafield = {"id": "m1", "namespace": "custom", "key": "color", "value": "red"}
    service, recorder = make({"data": {"shop": {"metafield": metafield}}})
    assert service.get_shop_metafield_by_key("custom", "color") == metafield
    assert recorder.calls[0]["variables"] == {"namespace": "custom", "key": "color"}


def test_get_by_key_missing_returns_none():
    service, _ = make({"data": {"shop": {"metafield": None}}})
    assert service.get_shop_metafield_by_key("custom", "absent") is None


def test_get_by_key_wraps_errors():
    service, _ = make({"errors": [{"message": "bad"}]})
    with pytest.raises(ShopifyError, match="^query: bad$"):
        service.get_shop_metafield_by_key("custom", "color")


def test_delete_sends_input():
    service, recorder = make({"data": {"metafieldDelete": {"userErrors": []}}})
    service.delete({"id": "m1"})
    assert recorder.calls[0]["variables"] == {"input": {"id": "m1"}}


def test_delete_raises_user_errors():
    errors = [{"field": ["id"], "message": "missing"}]
    service, _ = make({"data": {"metafieldDelete": {"userErrors": errors}}})
    with pytest.raises(UserErrorsError) as info:
        service.delete({"id": "m1"})
    assert info.value.user_errors == errors


def test_delete_bulk_continues_after_failures(caplog):
    failing = {"errors": [{"message": "boom"}]}
    ok = {"data": {"metafieldDelete": {"userErrors": []}}}
    service, recorder = make(failing, ok)
    with caplog.at_level(logging.WARNING):
        assert service.delete_bulk([{"id": "m1"}, {"id": "m2"}]) is None
    assert [call["variables"]["input"]["id"] for call in recorder.calls] == ["m1", "m2"]
    assert "Couldn't delete metafield" in caplog.text