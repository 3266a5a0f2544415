"""Bulk operations: running, polling, cancelling and reading results."""

import contextlib
import enum
import json
import logging
import os
import re
import tempfile
import time
from dataclasses import dataclass

from .base import ShopifyError, UserErrorsError, run_mutation
from .files import download_file
from .randstr import random_string

logger = logging.getLogger(__name__)

_GID_RE = re.compile(r"^gid://shopify/(\w+)/\d+", re.ASCII)

_CONNECTIONS = {
    "LineItem": "lineItems",
    "FulfillmentOrderLineItem": "lineItems",
    "FulfillmentOrder": "fulfillmentOrders",
    "MediaImage": "media",
    "Video": "media",
    "Model3d": "media",
    "ExternalVideo": "media",
    "Metafield": "metafields",
    "Order": "orders",
    "Product": "products",
    "ProductVariant": "variants",
    "ProductImage": "images",
    "Collection": "collections",
    "InventoryLevel": "inventoryLevels",
}

_RUN_QUERY_MUTATION = """
mutation bulkOperationRunQuery($query: String!) {
  bulkOperationRunQuery(query: $query) {
    bulkOperation { id }
    userErrors { field message }
  }
}
"""

_CANCEL_MUTATION = """
mutation bulkOperationCancel($id: ID!) {
  bulkOperationCancel(id: $id) {
    bulkOperation { id status }
    userErrors { field message }
  }
}
"""

_CURRENT_QUERY = """
query {
  currentBulkOperation {
    id
    status
    errorCode
    createdAt
    completedAt
    objectCount
    rootObjectCount
    fileSize
    url
    partialDataUrl
    query
  }
}
"""


class BulkOperationStatus(enum.Enum):
    """State of a bulk operation."""

    CREATED = "CREATED"
    RUNNING = "RUNNING"
    CANCELING = "CANCELING"
    CANCELED = "CANCELED"
    COMPLETED = "COMPLETED"
    EXPIRED = "EXPIRED"
    FAILED = "FAILED"


_PENDING = {BulkOperationStatus.CREATED, BulkOperationStatus.RUNNING, BulkOperationStatus.CANCELING}
_ACTIVE = {BulkOperationStatus.CREATED, BulkOperationStatus.RUNNING}


@dataclass
class BulkOperation:
    """Snapshot of the shop's current bulk operation."""

    id: str = ""
    status: BulkOperationStatus | None = None
    error_code: str | None = None
    created_at: str | None = None
    completed_at: str | None = None
    object_count: str = ""
    root_object_count: str = ""
    file_size: str | None = None
    url: str | None = None
    partial_data_url: str | None = None
    query: str | None = None


def _opt_str(value):
    return None if value is None else str(value)


def parse_bulk_operation(data):
    """Build a BulkOperation from its JSON form; None gives an empty one."""
    if not data:
        return BulkOperation()
    status = data.get("status")
    if status:
        try:
            status = BulkOperationStatus(status)
        except ValueError:
            raise ShopifyError(f"unknown bulk operation status {status!r}") from None
    else:
        status = None
    return BulkOperation(
        id=data.get("id") or "",
        status=status,
        error_code=data.get("errorCode"),
        created_at=data.get("createdAt"),
        completed_at=data.get("completedAt"),
        object_count=_opt_str(data.get("objectCount")) or "",
        root_object_count=_opt_str(data.get("rootObjectCount")) or "",
        file_size=_opt_str(data.get("fileSize")),
        url=data.get("url"),
        partial_data_url=data.get("partialDataUrl"),
        query=data.get("query"),
    )


def conclude_object_type(gid):
    """Return the resource type of ``gid`` and the connection it belongs in."""
    match = _GID_RE.match(gid)
    if match is None:
        raise ShopifyError(f"malformed gid=`{gid}`")
    resource = match.group(1)
    try:
        return resource, _CONNECTIONS[resource]
    except KeyError:
        raise ShopifyError(f"`{resource}` not implemented type") from None


def parse_bulk_query_result(path):
    """Read a bulk result JSONL file into top-level items with nested connections."""
    items = []
    sink = {}
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ShopifyError(f"unmarshalling: {exc}") from exc
            if not isinstance(obj, dict):
                raise ShopifyError("unmarshalling: result line is not an object")

            if "__parentId" not in obj:
                items.append(obj)
                continue

            parent_id = str(obj.pop("__parentId"))
            gid = obj.get("id")
            if gid is None:
                raise ShopifyError("The connection type must query the `id` field")
            _, connection = conclude_object_type(str(gid))
            sink.setdefault(parent_id, {}).setdefault(connection, []).append({"node": obj})

    if sink:
        try:
            attach_nested_connections(sink, items)
        except ShopifyError as exc:
            raise ShopifyError(f"error processing nested connections: {exc}") from exc
    return items


def attach_nested_connections(sink, items):
    """Attach edges collected in ``sink`` to their parents among ``items``."""
    for item in items:
        parent = item
        if isinstance(parent, dict) and "node" in parent:
            parent = parent["node"]
        if not isinstance(parent, dict) or "id" not in parent:
            raise ShopifyError("No ID field on the first level")
        parent_id = parent["id"]
        if not isinstance(parent_id, str):
            raise ShopifyError("ID field on the first level is not a string")

        connections = sink.get(parent_id)
        if connections is None:
            continue
        for name, edges in connections.items():
            parent[name] = {"edges": edges}
            try:
                attach_nested_connections(sink, edges)
            except ShopifyError as exc:
                raise ShopifyError(f"error attaching a nested connection: {exc}") from exc


class BulkOperationService:
    """Runs bulk queries and tracks the shop's current bulk operation."""

    def __init__(self, gql, poll_interval=1.0):
        self.gql = gql
        self.poll_interval = poll_interval

    def post_bulk_query(self, query):
        """Start a bulk query and return the new operation's ID."""
        try:
            result = run_mutation(self.gql, _RUN_QUERY_MUTATION, {"query": query}, "bulkOperationRunQuery")
        except ShopifyError as exc:
            raise ShopifyError(f"error posting bulk query: {exc}") from exc
        operation = result.get("bulkOperation")
        if not operation:
            return None
        return operation.get("id")

    def get_current_bulk_query(self):
        """Return the shop's current bulk operation."""
        try:
            data = self.gql.execute(_CURRENT_QUERY, None)
        except ShopifyError as exc:
            raise ShopifyError(f"query: {exc}") from exc
        return parse_bulk_operation(data.get("currentBulkOperation"))

    def get_current_bulk_query_result_url(self):
        """Wait for the current operation and return its result URL."""
        return self.should_get_bulk_query_result_url(None)

    def wait_for_current_bulk_query(self, interval=None):
        """Poll until the current operation is no longer pending, then return it."""
        if interval is None:
            interval = self.poll_interval
        operation = self._current_for_wait()
        while operation.status in _PENDING:
            logger.debug("Bulk operation is still %s...", operation.status.value)
            time.sleep(interval)
            operation = self._current_for_wait()
        logger.debug(
            "Bulk operation ready, latest status=%s",
            operation.status.value if operation.status else "",
        )
        return operation

    def _current_for_wait(self):
        try:
            return self.get_current_bulk_query()
        except ShopifyError as exc:
            raise ShopifyError(f"CurrentBulkOperation query error: {exc}") from exc

    def should_get_bulk_query_result_url(self, operation_id):
        """Wait for the operation and return its result URL, or None if it found nothing."""
        try:
            operation = self.get_current_bulk_query()
        except ShopifyError as exc:
            raise ShopifyError(f"error getting current bulk operation: {exc}") from exc

        if operation_id is not None and operation.id != operation_id:
            raise ShopifyError(
                f"Bulk operation ID doesn't match, got={operation.id}, want={operation_id}"
            )

        operation = self.wait_for_current_bulk_query(self.poll_interval)
        if operation.status is not BulkOperationStatus.COMPLETED:
            status = operation.status.value if operation.status else ""
            raise ShopifyError(
                f"Bulk operation didn't complete, status={status}, error_code={operation.error_code}"
            )
        if operation.error_code:
            raise ShopifyError(f"Bulk operation error: {operation.error_code}")
        if operation.object_count == "0":
            return None
        if operation.url is None:
            raise ShopifyError("empty URL result")
        return operation.url

    def cancel_running_bulk_query(self):
        """Cancel the current operation if it is still active and wait for it to stop."""
        operation = self.get_current_bulk_query()
        if operation.status not in _ACTIVE:
            return

        logger.debug("Canceling running operation")
        try:
            run_mutation(self.gql, _CANCEL_MUTATION, {"id": operation.id}, "bulkOperationCancel")
        except UserErrorsError:
            raise
        except ShopifyError as exc:
            raise ShopifyError(f"mutation: {exc}") from exc

        operation = self.get_current_bulk_query()
        while operation.status in _PENDING:
            logger.debug("Bulk operation still %s...", operation.status.value)
            time.sleep(self.poll_interval)
            try:
                operation = self.get_current_bulk_query()
            except ShopifyError as exc:
                raise ShopifyError(f"get current bulk query: {exc}") from exc
        logger.debug("Bulk operation cancelled")

    def bulk_query(self, query):
        """Run ``query`` as a bulk operation and return the parsed items."""
        self.wait_for_current_bulk_query(self.poll_interval)

        try:
            operation_id = self.post_bulk_query(query)
        except ShopifyError as exc:
            raise ShopifyError(f"post bulk query: {exc}") from exc
        if operation_id is None:
            raise ShopifyError("Posted operation ID is nil")

        try:
            url = self.should_get_bulk_query_result_url(operation_id)
        except ShopifyError as exc:
            raise ShopifyError(f"get bulk query result URL: {exc}") from exc
        if not url:
            raise ShopifyError("Operation result URL is empty")

        result_file = os.path.join(tempfile.gettempdir(), random_string(10) + ".jsonl")
        try:
            try:
                download_file(result_file, url)
            except OSError as exc:
                raise ShopifyError(f"download file: {exc}") from exc
            try:
                return parse_bulk_query_result(result_file)
            except ShopifyError as exc:
                raise ShopifyError(f"parse bulk query result: {exc}") from exc
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.remove(result_file)