"""Pagination and filter options for list queries."""

from dataclasses import dataclass


@dataclass
class ListOptions:
    """Search query and cursor settings for a paginated list."""

    query: str = ""
    first: int = 0
    last: int = 0
    after: str = ""
    before: str = ""
    reverse: bool = False

    def to_variables(self):
        """Return the GraphQL variables these options stand for."""
        variables = {"query": self.query, "reverse": self.reverse}
        if self.after:
            variables["after"] = self.after
        elif self.before:
            variables["before"] = self.before
        if self.first > 0:
            variables["first"] = self.first
        elif self.last > 0:
            variables["last"] = self.last
        return variables