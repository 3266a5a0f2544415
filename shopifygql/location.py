"""Location queries."""

from .base import ShopifyError

_GET_QUERY = """
query location($id: ID!) {
  location(id: $id) {
    id
    name
  }
}
"""


class LocationService:
    """Reads the shop's locations."""

    def __init__(self, gql):
        self.gql = gql

    def get(self, location_id):
        """Return the location's ID and name, or None if it is unknown."""
        try:
            data = self.gql.execute(_GET_QUERY, {"id": location_id})
        except ShopifyError as exc:
            raise ShopifyError(f"query: {exc}") from exc
        return data.get("location")