"""Product queries and mutations."""

from .base import ShopifyError, UserErrorsError, run_mutation

_PRODUCT_BASE_FIELDS = """
    id
    legacyResourceId
    handle
    options {
      id
      name
      values
      position
    }
    tags
    title
    description
    descriptionPlainSummary
    priceRangeV2 {
      minVariantPrice {
        amount
        currencyCode
      }
      maxVariantPrice {
        amount
        currencyCode
      }
    }
    productType
    vendor
    totalInventory
    onlineStoreUrl
    descriptionHtml
    seo {
      description
      title
    }
    templateSuffix
    customProductType
    featuredImage {
      id
      altText
      height
      width
      url
    }
"""

_VARIANT_NODE_FIELDS = """
          id
          legacyResourceId
          title
          displayName
          sku
          selectedOptions {
            name
            value
            optionValue {
              id
              name
            }
          }
          position
          image {
            id
            altText
            height
            width
            url
          }
          compareAtPrice
          price
          inventoryQuantity
          inventoryItem {
            id
            legacyResourceId
            sku
          }
          availableForSale
"""

_PRODUCT_FIELDS = f"""
    {_PRODUCT_BASE_FIELDS}
    variants(first: 100, after: $cursor) {{
      edges {{
        node {{
          {_VARIANT_NODE_FIELDS}
        }}
        cursor
      }}
      pageInfo {{
        hasNextPage
      }}
    }}
"""

_PRODUCT_BULK_FIELDS = f"""
    {_PRODUCT_BASE_FIELDS}
    metafields {{
      edges {{
        node {{
          id
          legacyResourceId
          namespace
          key
          value
          type
        }}
      }}
    }}
    variants {{
      edges {{
        node {{
          {_VARIANT_NODE_FIELDS}
        }}
      }}
    }}
"""

_LIST_ALL_QUERY = f"""
{{
  products {{
    edges {{
      node {{
        {_PRODUCT_BULK_FIELDS}
      }}
    }}
  }}
}}
"""

_LIST_QUERY = f"""
{{
  products(query: "$query") {{
    edges {{
      node {{
        {_PRODUCT_BULK_FIELDS}
      }}
    }}
  }}
}}
"""

_GET_QUERY = f"""
query product($id: ID!, $cursor: String) {{
  product(id: $id) {{
    {_PRODUCT_FIELDS}
  }}
}}
"""

_CREATE_MUTATION = """
mutation productCreate($product: ProductCreateInput, $media: [CreateMediaInput!]) {
  productCreate(product: $product, media: $media) {
    product { id }
    userErrors { field message }
  }
}
"""

_UPDATE_MUTATION = """
mutation productUpdate($product: ProductUpdateInput, $media: [CreateMediaInput!]) {
  productUpdate(product: $product, media: $media) {
    userErrors { field message }
  }
}
"""

_DELETE_MUTATION = """
mutation productDelete($input: ProductDeleteInput!) {
  productDelete(input: $input) {
    userErrors { field message }
  }
}
"""

_VARIANTS_BULK_CREATE_MUTATION = """
mutation productVariantsBulkCreate($productId: ID!, $variants: [ProductVariantsBulkInput!]!, $strategy: ProductVariantsBulkCreateStrategy) {
  productVariantsBulkCreate(productId: $productId, variants: $variants, strategy: $strategy) {
    userErrors { field message }
  }
}
"""

_VARIANTS_BULK_UPDATE_MUTATION = """
mutation productVariantsBulkUpdate($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkUpdate(productId: $productId, variants: $variants) {
    userErrors { field message }
  }
}
"""

_VARIANTS_BULK_REORDER_MUTATION = """
mutation productVariantsBulkReorder($positions: [ProductVariantPositionInput!]!, $productId: ID!) {
  productVariantsBulkReorder(positions: $positions, productId: $productId) {
    userErrors { field message }
  }
}
"""

_MEDIA_CREATE_MUTATION = """
mutation productCreateMedia($productId: ID!, $media: [CreateMediaInput!]!) {
  productCreateMedia(productId: $productId, media: $media) {
    mediaUserErrors { field message }
  }
}
"""


def _mutate(gql, query, variables, result_field, errors_field="userErrors"):
    try:
        return run_mutation(gql, query, variables, result_field, errors_field)
    except UserErrorsError:
        raise
    except ShopifyError as exc:
        raise ShopifyError(f"mutation: {exc}") from exc


def _optional_list(values):
    return None if values is None else list(values)


class ProductService:
    """Reads and writes the shop's products and their variants."""

    def __init__(self, gql, bulk):
        self.gql = gql
        self.bulk = bulk

    def list_all(self):
        """Return every product through a bulk query."""
        return self.bulk.bulk_query(_LIST_ALL_QUERY)

    def list(self, query):
        """Return the products matching the search ``query`` through a bulk query."""
        try:
            return self.bulk.bulk_query(_LIST_QUERY.replace("$query", query))
        except ShopifyError as exc:
            raise ShopifyError(f"bulk query: {exc}") from exc

    def get(self, product_id):
        """Return one product with all its variants, or None if it is unknown."""
        product = self._get_page(product_id, None)
        if product is None:
            return None

        variants = product.get("variants")
        if variants is None:
            variants = product["variants"] = {}
        edges = variants.get("edges")
        if edges is None:
            edges = variants["edges"] = []

        page = variants
        page_edges = list(edges)
        while (page.get("pageInfo") or {}).get("hasNextPage") and page_edges:
            cursor = page_edges[-1]["cursor"]
            try:
                next_product = self._get_page(product_id, cursor)
            except ShopifyError as exc:
                raise ShopifyError(f"get page: {exc}") from exc
            if next_product is None:
                raise ShopifyError(f"product {product_id} vanished while paging")
            page = next_product.get("variants") or {}
            page_edges = page.get("edges") or []
            edges.extend(page_edges)
        return product

    def _get_page(self, product_id, cursor):
        variables = {"id": product_id}
        if cursor:
            variables["cursor"] = cursor
        try:
            data = self.gql.execute(_GET_QUERY, variables)
        except ShopifyError as exc:
            raise ShopifyError(f"query: {exc}") from exc
        return data.get("product")

    def create(self, product, media):
        """Create a product with optional media and return its ID."""
        variables = {"product": product, "media": _optional_list(media)}
        result = _mutate(self.gql, _CREATE_MUTATION, variables, "productCreate")
        created = result.get("product") or {}
        return created.get("id")

    def update(self, product, media):
        """Update a product, adding optional media."""
        variables = {"product": product, "media": _optional_list(media)}
        _mutate(self.gql, _UPDATE_MUTATION, variables, "productUpdate")

    def delete(self, product):
        """Delete a product."""
        _mutate(self.gql, _DELETE_MUTATION, {"input": product}, "productDelete")

    def variants_bulk_create(self, product_id, variants, strategy):
        """Create several variants of a product at once."""
        variables = {
            "productId": product_id,
            "variants": list(variants),
            "strategy": getattr(strategy, "value", strategy),
        }
        _mutate(self.gql, _VARIANTS_BULK_CREATE_MUTATION, variables, "productVariantsBulkCreate")

    def variants_bulk_update(self, product_id, variants):
        """Update several variants of a product at once."""
        variables = {"productId": product_id, "variants": list(variants)}
        _mutate(self.gql, _VARIANTS_BULK_UPDATE_MUTATION, variables, "productVariantsBulkUpdate")

    def variants_bulk_reorder(self, product_id, positions):
        """Move variants of a product to new positions."""
        variables = {"productId": product_id, "positions": list(positions)}
        _mutate(self.gql, _VARIANTS_BULK_REORDER_MUTATION, variables, "productVariantsBulkReorder")

    def media_create(self, product_id, media):
        """Attach media to a product."""
        variables = {"productId": product_id, "media": list(media)}
        _mutate(
            self.gql,
            _MEDIA_CREATE_MUTATION,
            variables,
            "productCreateMedia",
            "mediaUserErrors",
        )