"""Collection queries and mutations."""

import logging

from .base import ShopifyError, UserErrorsError, run_mutation

logger = logging.getLogger(__name__)

_COLLECTION_FIELDS = """
    id
    handle
    title

    products(first: 250, after: $cursor) {
      edges {
        node {
          id
        }
        cursor
      }
      pageInfo {
        hasNextPage
      }
    }
"""

_COLLECTION_BULK_FIELDS = """
    id
    handle
    title
"""

_LIST_ALL_QUERY = f"""
{{
  collections {{
    edges {{
      node {{
        {_COLLECTION_BULK_FIELDS}
      }}
    }}
  }}
}}
"""

_GET_QUERY = f"""
query collection($id: ID!, $cursor: String) {{
  collection(id: $id) {{
    {_COLLECTION_FIELDS}
  }}
}}
"""

_CREATE_MUTATION = """
mutation collectionCreate($input: CollectionInput!) {
  collectionCreate(input: $input) {
    collection { id }
    userErrors { field message }
  }
}
"""

_UPDATE_MUTATION = """
mutation collectionUpdate($input: CollectionInput!) {
  collectionUpdate(input: $input) {
    userErrors { field message }
  }
}
"""


def _mutate(gql, query, variables, result_field):
    try:
        return run_mutation(gql, query, variables, result_field)
    except UserErrorsError:
        raise
    except ShopifyError as exc:
        raise ShopifyError(f"mutation: {exc}") from exc


class CollectionService:
    """Reads and writes the shop's collections."""

    def __init__(self, gql, bulk):
        self.gql = gql
        self.bulk = bulk

    def list_all(self):
        """Return every collection through a bulk query."""
        try:
            return self.bulk.bulk_query(_LIST_ALL_QUERY)
        except ShopifyError as exc:
            raise ShopifyError(f"bulk query: {exc}") from exc

    def get(self, collection_id):
        """Return one collection with all its products, or None if it is unknown."""
        collection = self._get_page(collection_id, None)
        if collection is None:
            return None

        products = collection.get("products")
        if products is None:
            products = collection["products"] = {}
        edges = products.get("edges")
        if edges is None:
            edges = products["edges"] = []

        page = products
        page_edges = list(edges)
        while (page.get("pageInfo") or {}).get("hasNextPage") and page_edges:
            cursor = page_edges[-1]["cursor"]
            next_collection = self._get_page(collection_id, cursor)
            if next_collection is None:
                raise ShopifyError(f"collection {collection_id} vanished while paging")
            page = next_collection.get("products") or {}
            page_edges = page.get("edges") or []
            edges.extend(page_edges)
        return collection

    def _get_page(self, collection_id, cursor):
        variables = {"id": collection_id}
        if cursor:
            variables["cursor"] = cursor
        try:
            data = self.gql.execute(_GET_QUERY, variables)
        except ShopifyError as exc:
            raise ShopifyError(f"query: {exc}") from exc
        return data.get("collection")

    def create(self, collection):
        """Create a collection and return its ID."""
        result = _mutate(self.gql, _CREATE_MUTATION, {"input": collection}, "collectionCreate")
        created = result.get("collection") or {}
        return created.get("id")

    def create_bulk(self, collections):
        """Create each collection in turn, logging the ones that fail."""
        for collection in collections:
            try:
                self.create(collection)
            except ShopifyError as exc:
                logger.warning("Couldn't create collection (%s): %s", collection, exc)

    def update(self, collection):
        """Update a collection."""
        _mutate(self.gql, _UPDATE_MUTATION, {"input": collection}, "collectionUpdate")