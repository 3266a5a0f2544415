"""Inventory mutations."""

from .base import ShopifyError, UserErrorsError, run_mutation

_UPDATE_MUTATION = """
mutation inventoryItemUpdate($id: ID!, $input: InventoryItemInput!) {
  inventoryItemUpdate(id: $id, input: $input) {
    userErrors { field message }
  }
}
"""

_BULK_ADJUST_MUTATION = """
mutation inventoryBulkAdjustQuantityAtLocation($locationId: ID!, $inventoryItemAdjustments: [InventoryAdjustItemInput!]!) {
  inventoryBulkAdjustQuantityAtLocation(locationId: $locationId, inventoryItemAdjustments: $inventoryItemAdjustments) {
    userErrors { field message }
  }
}
"""

_ADJUST_QUANTITIES_MUTATION = """
mutation inventoryAdjustQuantities($input: InventoryAdjustQuantitiesInput!) {
  inventoryAdjustQuantities(input: $input) {
    userErrors { field message }
  }
}
"""

_SET_ON_HAND_MUTATION = """
mutation inventorySetOnHandQuantities($input: InventorySetOnHandQuantitiesInput!) {
  inventorySetOnHandQuantities(input: $input) {
    userErrors { field message }
  }
}
"""

_ACTIVATE_MUTATION = """
mutation inventoryActivate($itemID: ID!, $locationId: ID!) {
  inventoryActivate(inventoryItemId: $itemID, locationId: $locationId) {
    userErrors { field message }
  }
}
"""


def _mutate(gql, query, variables, result_field):
    try:
        run_mutation(gql, query, variables, result_field)
    except UserErrorsError:
        raise
    except ShopifyError as exc:
        raise ShopifyError(f"mutation: {exc}") from exc


class InventoryService:
    """Updates inventory items and quantities."""

    def __init__(self, gql):
        self.gql = gql

    def update(self, item_id, item_input):
        """Update an inventory item."""
        _mutate(self.gql, _UPDATE_MUTATION, {"id": item_id, "input": item_input}, "inventoryItemUpdate")

    def adjust(self, location_id, adjustments):
        """Adjust quantities of several items at one location."""
        variables = {"locationId": location_id, "inventoryItemAdjustments": list(adjustments)}
        _mutate(self.gql, _BULK_ADJUST_MUTATION, variables, "inventoryBulkAdjustQuantityAtLocation")

    def adjust_quantities(self, reason, name, reference_document_uri, changes):
        """Apply quantity changes of the named quantity for ``reason``."""
        payload = {"name": name, "reason": reason, "changes": list(changes)}
        if reference_document_uri is not None:
            payload["referenceDocumentUri"] = reference_document_uri
        _mutate(self.gql, _ADJUST_QUANTITIES_MUTATION, {"input": payload}, "inventoryAdjustQuantities")

    def set_on_hand_quantities(self, reason, reference_document_uri, set_quantities):
        """Set on-hand quantities for ``reason``."""
        payload = {"reason": reason, "setQuantities": list(set_quantities)}
        if reference_document_uri is not None:
            payload["referenceDocumentUri"] = reference_document_uri
        _mutate(self.gql, _SET_ON_HAND_MUTATION, {"input": payload}, "inventorySetOnHandQuantities")

    def activate_inventory(self, location_id, item_id):
        """Stock an inventory item at a location."""
        variables = {"itemID": item_id, "locationId": location_id}
        _mutate(self.gql, _ACTIVATE_MUTATION, variables, "inventoryActivate")