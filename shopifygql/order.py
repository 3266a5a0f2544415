"""Order queries and mutations."""

from .base import ShopifyError, UserErrorsError, run_mutation
from .list_options import ListOptions

_ORDER_BASE_FIELDS = """
    id
    legacyResourceId
    name
    createdAt
    customer {
      id
      legacyResourceId
      firstName
      displayName
      email
    }
    clientIp
    shippingAddress {
      address1
      address2
      city
      province
      country
      zip
    }
    shippingLine {
      originalPriceSet {
        presentmentMoney {
          amount
          currencyCode
        }
        shopMoney {
          amount
          currencyCode
        }
      }
      title
    }
    taxLines {
      priceSet {
        presentmentMoney {
          amount
          currencyCode
        }
        shopMoney {
          amount
          currencyCode
        }
      }
      rate
      ratePercentage
      title
    }
    totalReceivedSet {
      presentmentMoney {
        amount
        currencyCode
      }
      shopMoney {
        amount
        currencyCode
      }
    }
    note
    tags
    transactions {
      processedAt
      status
      kind
      test
      amountSet {
        shopMoney {
          amount
          currencyCode
        }
      }
    }
    updatedAt
"""

_ORDER_LIGHT_FIELDS = """
    id
    legacyResourceId
    name
    createdAt
    customer {
      id
      legacyResourceId
      firstName
      displayName
      email
    }
    shippingAddress {
      address1
      address2
      city
      province
      country
      zip
    }
    shippingLine {
      title
    }
    totalReceivedSet {
      shopMoney {
        amount
      }
    }
    note
    tags
"""

_MONEY_BAG = """{
      presentmentMoney {
        amount
        currencyCode
      }
      shopMoney {
        amount
        currencyCode
      }
    }"""

_LINE_ITEM_FRAGMENT = f"""
fragment lineItem on LineItem {{
    id
    sku
    quantity
    fulfillableQuantity
    fulfillmentStatus
    product {{
      id
      legacyResourceId
    }}
    vendor
    title
    variantTitle
    variant {{
      id
      legacyResourceId
      selectedOptions {{
        name
        value
      }}
    }}
    originalTotalSet {_MONEY_BAG}
    originalUnitPriceSet {_MONEY_BAG}
    discountedUnitPriceSet {_MONEY_BAG}
    discountedTotalSet {_MONEY_BAG}
}}
"""

_LINE_ITEM_FRAGMENT_LIGHT = """
fragment lineItem on LineItem {
    id
    sku
    quantity
    fulfillableQuantity
    fulfillmentStatus
    vendor
    title
    variantTitle
}
"""

_GET_QUERY = f"""
query order($id: ID!) {{
  node(id: $id) {{
    ... on Order {{
      {_ORDER_BASE_FIELDS}
      lineItems(first: 50) {{
        edges {{
          node {{
            ...lineItem
          }}
        }}
      }}
      fulfillmentOrders(first: 5) {{
        edges {{
          node {{
            id
            status
            lineItems(first: 50) {{
              edges {{
                node {{
                  id
                  remainingQuantity
                  totalQuantity
                  lineItem {{
                    sku
                  }}
                }}
              }}
            }}
          }}
        }}
      }}
    }}
  }}
}}

{_LINE_ITEM_FRAGMENT}
"""

_BULK_LIST_QUERY = f"""
{{
  orders(query: "$query") {{
    edges {{
      node {{
        {_ORDER_BASE_FIELDS}
        lineItems {{
          edges {{
            node {{
              ...lineItem
            }}
          }}
        }}
      }}
    }}
  }}
}}

{_LINE_ITEM_FRAGMENT}
"""

_LIST_AFTER_CURSOR_QUERY = f"""
query orders($query: String, $first: Int, $last: Int, $before: String, $after: String, $reverse: Boolean) {{
  orders(query: $query, first: $first, last: $last, before: $before, after: $after, reverse: $reverse) {{
    edges {{
      node {{
        {_ORDER_LIGHT_FIELDS}

        lineItems(first: 25) {{
          edges {{
            node {{
              ...lineItem
            }}
          }}
        }}
      }}
      cursor
    }}
    pageInfo {{
      hasNextPage
    }}
  }}
}}

{_LINE_ITEM_FRAGMENT_LIGHT}
"""

_UPDATE_MUTATION = """
mutation orderUpdate($input: OrderInput!) {
  orderUpdate(input: $input) {
    userErrors { field message }
  }
}
"""


class OrderService:
    """Reads and updates the shop's orders."""

    def __init__(self, gql, bulk):
        self.gql = gql
        self.bulk = bulk

    def _bulk(self, query):
        try:
            return self.bulk.bulk_query(query)
        except ShopifyError as exc:
            raise ShopifyError(f"bulk query: {exc}") from exc

    def get(self, order_id):
        """Return one order with its line items and fulfillment orders, or None."""
        try:
            data = self.gql.execute(_GET_QUERY, {"id": order_id})
        except ShopifyError as exc:
            raise ShopifyError(f"query: {exc}") from exc
        return data.get("node")

    def list(self, opts):
        """Return the orders matching ``opts.query`` through a bulk query."""
        return self._bulk(_BULK_LIST_QUERY.replace("$query", opts.query))

    def list_all(self):
        """Return every order through a bulk query."""
        return self._bulk(_BULK_LIST_QUERY)

    def list_after_cursor(self, opts=None):
        """Return one page of orders with the first and last cursors of the page."""
        if opts is None:
            opts = ListOptions()
        try:
            data = self.gql.execute(_LIST_AFTER_CURSOR_QUERY, opts.to_variables())
        except ShopifyError as exc:
            raise ShopifyError(f"query: {exc}") from exc

        edges = (data.get("orders") or {}).get("edges") or []
        if not edges:
            return [], None, None
        orders = [edge.get("node") for edge in edges]
        return orders, edges[0].get("cursor", ""), edges[-1].get("cursor", "")

    def update(self, order_input):
        """Update an order."""
        try:
            run_mutation(self.gql, _UPDATE_MUTATION, {"input": order_input}, "orderUpdate")
        except UserErrorsError:
            raise
        except ShopifyError as exc:
            raise ShopifyError(f"mutation: {exc}") from exc