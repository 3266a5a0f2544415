import pytest

from shopifygql.base import GraphQLClient
from shopifygql.bulk import BulkOperationService
from shopifygql.client import Client


class RecordingTransport:
    def __init__(self, response):
        self.response = response
        self.payloads = []

    def __call__(self, payload):
        self.payloads.append(payload)
        return self.response


def test_missing_graphql_client_is_rejected():
    with pytest.raises(ValueError):
        Client(None)


def test_graphql_client_is_returned():
    gql = GraphQLClient(RecordingTransport({"data": {}}))
    client = Client(gql)
    assert client.graphql_client() is gql


def test_services_share_graphql_client():
    gql = GraphQLClient(RecordingTransport({"data": {}}))
    client = Client(gql)
    services = [
        client.product,
        client.inventory,
        client.collection,
        client.order,
        client.fulfillment,
        client.location,
        client.metafield,
        client.bulk_operation,
    ]
    assert all(service.gql is gql for service in services)


def test_bulk_services_share_one_bulk_operation_service():
    client = Client(GraphQLClient(RecordingTransport({"data": {}})))
    assert isinstance(client.bulk_operation, BulkOperationService)
    assert client.product.bulk is client.bulk_operation
    assert client.collection.bulk is client.bulk_operation
    assert client.order.bulk is client.bulk_operation
    assert client.metafield.bulk is client.bulk_operation


def test_service_calls_go_through_transport():
    location = {"id": "gid://shopify/Location/1", "name": "Main"}
    transport = RecordingTransport({"data": {"location": location}})
    client = Client(GraphQLClient(transport))
    assert client.location.get("gid://shopify/Location/1") == location
    assert transport.payloads[0]["variables"] == {"id": "gid://shopify/Location/1"}