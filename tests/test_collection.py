import logging

import pytest

from shopifygql.base import GraphQLClient, ShopifyError, UserErrorsError
from shopifygql.collection import CollectionService


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
    return CollectionService(GraphQLClient(recorder), bulk or FakeBulk([])), recorder


def test_list_all_returns_bulk_items():
    items = [{"id": "gid://shopify/Collection/1", "handle": "summer"}]
    bulk = FakeBulk(items)
    service, _ = make(bulk=bulk)
    assert service.list_all() == items
    assert "collections" in bulk.queries[0]
    assert "handle" in bulk.queries[0]


def test_list_all_wraps_errors():
    service, _ = make(bulk=FakeBulk(error=ShopifyError("boom")))
    with pytest.raises(ShopifyError, match="^bulk query: boom$"):
        service.list_all()


def test_get_follows_product_pages():
    first = {"data": {"collection": {
        "id": "c1",
        "products": {
            "edges": [{"node": {"id": "p1"}, "cursor": "a"}, {"node": {"id": "p2"}, "cursor": "b"}],
            "pageInfo": {"hasNextPage": True},
        },
    }}}
    second = {"data": {"collection": {
        "id": "c1",
        "products": {
            "edges": [{"node": {"id": "p3"}, "cursor": "c"}],
            "pageInfo": {"hasNextPage": False},
        },
    }}}
    service, recorder = make(first, second)
    collection = service.get("c1")
    ids = [edge["node"]["id"] for edge in collection["products"]["edges"]]
    assert ids == ["p1", "p2", "p3"]
    assert recorder.calls[0]["variables"] == {"id": "c1"}
    assert recorder.calls[1]["variables"] == {"id": "c1", "cursor": "b"}


def test_get_single_page_makes_one_request():
    page = {"data": {"collection": {
        "id": "c1",
        "products": {"edges": [{"node": {"id": "p1"}, "cursor": "a"}], "pageInfo": {"hasNextPage": False}},
    }}}
    service, recorder = make(page)
    assert service.get("c1")["id"] == "c1"
    assert len(recorder.calls) == 1


def test_get_unknown_collection_returns_none():
    service, _ = make({"data": {"collection": None}})
    assert service.get("missing") is None


def test_get_wraps_query_errors():
    service, _ = make({"errors": [{"message": "bad"}]})
    with pytest.raises(ShopifyError, match="^query: bad$"):
        service.get("c1")


def test_create_returns_id_and_sends_input():
    collection_input = {"title": "Summer"}
    service, recorder = make({"data": {"collectionCreate": {"collection": {"id": "gid://shopify/Collection/7"}, "userErrors": []}}})
    assert service.create(collection_input) == "gid://shopify/Collection/7"
    assert recorder.calls[0]["variables"] == {"input": collection_input}
    assert "collectionCreate(input: $input)" in recorder.calls[0]["query"]


def test_create_raises_user_errors():
    errors = [{"field": ["title"], "message": "blank"}]
    service, _ = make({"data": {"collectionCreate": {"collection": None, "userErrors": errors}}})
    with pytest.raises(UserErrorsError) as info:
        service.create({"title": ""})
    assert info.value.user_errors == errors


def test_create_bulk_continues_after_failures(caplog):
    failing = {"data": {"collectionCreate": {"userErrors": [{"message": "taken"}]}}}
    ok = {"data": {"collectionCreate": {"collection": {"id": "x"}, "userErrors": []}}}
    service, recorder = make(failing, ok)
    with caplog.at_level(logging.WARNING):
        assert service.create_bulk([{"title": "a"}, {"title": "b"}]) is None
    assert len(recorder.calls) == 2
    assert "Couldn't create collection" in caplog.text


def test_update_wraps_transport_errors():
    service, _ = make({"errors": [{"message": "denied"}]})
    with pytest.raises(ShopifyError, match="^mutation: denied$"):
        service.update({"id": "c1"})


def test_update_raises_user_errors():
    errors = [{"field": ["id"], "message": "not found"}]
    service, recorder = make({"data": {"collectionUpdate": {"userErrors": errors}}})
    with pytest.raises(UserErrorsError) as info:
        service.update({"id": "c1"})
    assert info.value.user_errors == errors
    assert recorder.calls[0]["variables"] == {"input": {"id": "c1"}}