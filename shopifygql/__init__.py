"""Client for the Shopify Admin GraphQL API: services for products, collections,
orders, inventory, locations, metafields, fulfillments and bulk operations."""

__version__ = "9.0.0"