# shopifygql

A Python client for the Shopify Admin GraphQL API. It wraps common
queries and mutations for products, collections, orders, inventory,
locations, metafields and fulfillments. Large listings go through
Shopify bulk operations. The JSONL result file is downloaded and rebuilt
into nested dictionaries.

Results are plain decoded JSON (dicts and lists) as the API returns them.
The package does not map them onto model classes.

## Installation

```
pip install shopifygql
```

The package has no dependencies beyond the standard library.

## Connecting to a store

`shopifygql.client.Client` takes any object with an
`execute(query, variables)` method. That method must send a GraphQL
document to the store and return the `data` part of the response.

`shopifygql.base.GraphQLClient` provides such an object on top of a
*transport* callable. The transport receives a dict with `query` and,
when there are any, `variables`. It must return the decoded JSON
response. `GraphQLClient.execute` then does the following:

- It raises `ShopifyError` when the response has an `errors` entry.
- It raises `ShopifyError` when the response has no `data`.
- Otherwise it returns `data`.

The package ships no transport: no HTTP code, no authentication, and no
reading of credentials from the environment. You write the transport
yourself, for example with `urllib`:

```python
import json
import urllib.request

from shopifygql.base import GraphQLClient
from shopifygql.client import DEFAULT_API_VERSION, Client

ACCESS_TOKEN = "token"
ENDPOINT = f"https://shop.example.com/admin/api/{DEFAULT_API_VERSION}/graphql.json"


def transport(payload):
    request = urllib.request.Request(
        ENDPOINT,
        data=json.dumps(payload).encode(),
        headers={
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": ACCESS_TOKEN,
        },
    )
    with urllib.request.urlopen(request) as response:
        return json.load(response)


client = Client(GraphQLClient(transport))
```

`Client(None)` raises `ValueError`. `client.graphql_client()` returns
the object passed in.

## Services

A `Client` has one attribute per service. All of them share the same
GraphQL client.

| Attribute | Methods |
|---|---|
| `client.product` | `list(query)`, `list_all()`, `get(product_id)`, `create(product, media)`, `update(product, media)`, `delete(product)`, `variants_bulk_create(product_id, variants, strategy)`, `variants_bulk_update(product_id, variants)`, `variants_bulk_reorder(product_id, positions)`, `media_create(product_id, media)` |
| `client.collection` | `list_all()`, `get(collection_id)`, `create(collection)`, `create_bulk(collections)`, `update(collection)` |
| `client.order` | `get(order_id)`, `list(opts)`, `list_all()`, `list_after_cursor(opts)`, `update(order_input)` |
| `client.inventory` | `update(item_id, item_input)`, `adjust(location_id, adjustments)`, `adjust_quantities(reason, name, reference_document_uri, changes)`, `set_on_hand_quantities(reason, reference_document_uri, set_quantities)`, `activate_inventory(location_id, item_id)` |
| `client.location` | `get(location_id)` |
| `client.metafield` | `list_all_shop_metafields()`, `list_shop_metafields_by_namespace(namespace)`, `get_shop_metafield_by_key(namespace, key)`, `delete(metafield)`, `delete_bulk(metafields)` |
| `client.fulfillment` | `create(fulfillment)` |
| `client.bulk_operation` | see below |

The service methods behave as follows:

- **Mutation inputs.** These are dicts in the shape the Admin API expects for the mutation's input type.
- **`create` methods.** These return the new object's ID.
- **Single-object getters.** These return `None` when the object is unknown.
- **`product.get` and `collection.get`.** These follow `pageInfo.hasNextPage` and gather every variant or product edge into the one returned dict.
- **`create_bulk` and `delete_bulk`.** These log a warning for each item that fails and carry on.

```python
for collection in client.collection.list_all():
    print(collection["handle"])

product = client.product.get("gid://shopify/Product/1")
print(product["title"], len(product["variants"]["edges"]))
```

### Paginated orders

`shopifygql.list_options.ListOptions` holds the following fields:
`query`, `first`, `last`, `after`, `before` and `reverse`.
`to_variables()` turns them into query variables:

- `after` is used in preference to `before`.
- `first` is used in preference to `last`.
- Empty or zero values are left out.

```python
from shopifygql.list_options import ListOptions

orders, first_cursor, last_cursor = client.order.list_after_cursor(
    ListOptions(query="status:open", first=50)
)
```

An empty page gives `([], None, None)`.

## Bulk operations

```python
items = client.bulk_operation.bulk_query("""
{
  products {
    edges { node { id variants { edges { node { id } } } } }
  }
}
""")
```

`bulk_query` runs these steps in order:

1. It waits for any pending operation to finish.
2. It starts the query.
3. It checks that the current operation has the new ID.
4. It polls until the operation completes.
5. It downloads the result into a temporary `.jsonl` file and parses it.
6. It removes the file.

It returns the list of top-level records. A record with a `__parentId` is attached to its parent. It goes under the connection name, as `{"edges": [{"node": ...}, ...]}`, for example `product["variants"]["edges"]`. Nesting works to any depth.

Child records must carry an `id` of the form `gid://shopify/<Type>/<number>`. The supported types and the connection each one goes under are:

- `LineItem` and `FulfillmentOrderLineItem` → `lineItems`
- `FulfillmentOrder` → `fulfillmentOrders`
- `MediaImage`, `Video`, `Model3d` and `ExternalVideo` → `media`
- `Metafield` → `metafields`
- `Order` → `orders`
- `Product` → `products`
- `ProductVariant` → `variants`
- `ProductImage` → `images`
- `Collection` → `collections`
- `InventoryLevel` → `inventoryLevels`

Any other type raises `ShopifyError`.

`BulkOperationService` has these lower-level methods:

- `post_bulk_query`
- `get_current_bulk_query`, which returns a `BulkOperation` dataclass with a `BulkOperationStatus` status
- `wait_for_current_bulk_query`
- `should_get_bulk_query_result_url` and `get_current_bulk_query_result_url`
- `cancel_running_bulk_query`

Polling waits `poll_interval` seconds between requests. The default is 1.0.

If you already have a result file, `shopifygql.bulk.parse_bulk_query_result(path)` parses it directly.

## Errors

Failed requests and API user errors are raised as
`shopifygql.base.ShopifyError`. Each service prefixes the message with
the step that failed. User errors reported by a mutation raise the
subclass `UserErrorsError`, whose `user_errors` attribute holds the list
the API returned.

## Running the tests

```
pip install -e ".[test]"
pytest
```