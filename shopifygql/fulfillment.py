"""Fulfillment mutations."""

from .base import ShopifyError, UserErrorsError, run_mutation

_CREATE_MUTATION = """
mutation fulfillmentCreateV2($fulfillment: FulfillmentV2Input!) {
  fulfillmentCreateV2(fulfillment: $fulfillment) {
    userErrors { field message }
  }
}
"""


class FulfillmentService:
    """Creates fulfillments."""

    def __init__(self, gql):
        self.gql = gql

    def create(self, fulfillment):
        """Create a fulfillment from its input."""
        try:
            run_mutation(self.gql, _CREATE_MUTATION, {"fulfillment": fulfillment}, "fulfillmentCreateV2")
        except UserErrorsError:
            raise
        except ShopifyError as exc:
            raise ShopifyError(f"mutation: {exc}") from exc