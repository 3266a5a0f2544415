"""Entry point bundling every service around one GraphQL client."""

from .bulk import BulkOperationService
from .collection import CollectionService
from .fulfillment import FulfillmentService
from .inventory import InventoryService
from .location import LocationService
from .metafield import MetafieldService
from .order import OrderService
from .product import ProductService

DEFAULT_API_VERSION = "2025-01"


class Client:
    """Shopify Admin API client exposing one attribute per service."""

    def __init__(self, gql):
        if gql is None:
            raise ValueError("GraphQL client not set")
        self._gql = gql
        self.bulk_operation = BulkOperationService(gql)
        self.product = ProductService(gql, self.bulk_operation)
        self.inventory = InventoryService(gql)
        self.collection = CollectionService(gql, self.bulk_operation)
        self.order = OrderService(gql, self.bulk_operation)
        self.fulfillment = FulfillmentService(gql)
        self.location = LocationService(gql)
        self.metafield = MetafieldService(gql, self.bulk_operation)

    def graphql_client(self):
        """Return the GraphQL client the services share."""
        return self._gql