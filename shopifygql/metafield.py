"""Shop metafield queries and mutations."""

import logging

from .base import ShopifyError, UserErrorsError, run_mutation

logger = logging.getLogger(__name__)

_METAFIELD_NODE = """
          node {
            createdAt
            description
            id
            key
            legacyResourceId
            namespace
            ownerType
            updatedAt
            value
            type
          }
"""

_LIST_ALL_QUERY = f"""
{{
  shop {{
    metafields {{
      edges {{
        {_METAFIELD_NODE}
      }}
    }}
  }}
}}
"""

_LIST_BY_NAMESPACE_QUERY = f"""
{{
  shop {{
    metafields(namespace: "$namespace") {{
      edges {{
        {_METAFIELD_NODE}
      }}
    }}
  }}
}}
"""

_GET_BY_KEY_QUERY = """
query shopMetafield($namespace: String!, $key: String!) {
  shop {
    metafield(namespace: $namespace, key: $key) {
      createdAt
      description
      id
      key
      legacyResourceId
      namespace
      ownerType
      updatedAt
      value
      type
    }
  }
}
"""

_DELETE_MUTATION = """
mutation metafieldDelete($input: MetafieldIdentifierInput!) {
  metafieldDelete(input: $input) {
    userErrors { field message }
  }
}
"""


class MetafieldService:
    """Reads and deletes shop metafields."""

    def __init__(self, gql, bulk):
        self.gql = gql
        self.bulk = bulk

    def _bulk(self, query):
        try:
            return self.bulk.bulk_query(query)
        except ShopifyError as exc:
            raise ShopifyError(f"bulk query: {exc}") from exc

    def list_all_shop_metafields(self):
        """Return every shop metafield through a bulk query."""
        return self._bulk(_LIST_ALL_QUERY)

    def list_shop_metafields_by_namespace(self, namespace):
        """Return the shop metafields in ``namespace`` through a bulk query."""
        return self._bulk(_LIST_BY_NAMESPACE_QUERY.replace("$namespace", namespace))

    def get_shop_metafield_by_key(self, namespace, key):
        """Return the shop metafield with ``namespace`` and ``key``, or None."""
        try:
            data = self.gql.execute(_GET_BY_KEY_QUERY, {"namespace": namespace, "key": key})
        except ShopifyError as exc:
            raise ShopifyError(f"query: {exc}") from exc
        return (data.get("shop") or {}).get("metafield")

    def delete(self, metafield):
        """Delete one metafield."""
        try:
            run_mutation(self.gql, _DELETE_MUTATION, {"input": metafield}, "metafieldDelete")
        except UserErrorsError:
            raise
        except ShopifyError as exc:
            raise ShopifyError(f"mutation: {exc}") from exc

    def delete_bulk(self, metafields):
        """Delete each metafield in turn, logging the ones that fail."""
        for metafield in metafields:
            try:
                self.delete(metafield)
            except ShopifyError as exc:
                logger.warning("Couldn't delete metafield (%s): %s", metafield, exc)