"""GraphQL execution and error types shared by the services."""

import json
from collections.abc import Mapping


class ShopifyError(Exception):
    """Raised when a request to the Shopify API fails."""


class UserErrorsError(ShopifyError):
    """Raised when a mutation reports user errors."""

    def __init__(self, user_errors):
        self.user_errors = list(user_errors)
        super().__init__(json.dumps(self.user_errors, indent=4))


def _error_message(error):
    if isinstance(error, Mapping) and "message" in error:
        return str(error["message"])
    return str(error)


class GraphQLClient:
    """Runs GraphQL documents through a transport callable.

    The transport receives the request payload, a dict with ``query`` and
    optionally ``variables``, and returns the decoded JSON response.
    """

    def __init__(self, transport):
        self.transport = transport

    def execute(self, query, variables=None):
        """Run ``query`` and return the ``data`` part of the response."""
        payload = {"query": query}
        if variables:
            payload["variables"] = dict(variables)
        response = self.transport(payload)
        if not isinstance(response, Mapping):
            raise ShopifyError("malformed GraphQL response")
        errors = response.get("errors")
        if errors:
            raise ShopifyError("; ".join(_error_message(e) for e in errors))
        data = response.get("data")
        if data is None:
            raise ShopifyError("GraphQL response holds no data")
        return data


def run_mutation(gql, query, variables, result_field, errors_field="userErrors"):
    """Run a mutation and return its payload, raising on user errors."""
    data = gql.execute(query, variables)
    result = data.get(result_field) or {}
    user_errors = result.get(errors_field) or []
    if user_errors:
        raise UserErrorsError(user_errors)
    return result