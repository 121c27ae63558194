"""Wire tokens for filter operators and sort directions."""

from __future__ import annotations

from enum import Enum


class FilterOperator(str, Enum):
    """Comparison operators understood by the filters parameter.

    The value is the token transmitted in the query key, e.g.
    ``filters[title][$eq]``.
    """

    # Comparison
    eq = "$eq"
    ne = "$ne"
    gt = "$gt"
    gte = "$gte"
    lt = "$lt"
    lte = "$lte"

    # String
    contains = "$contains"
    containsi = "$containsi"
    notcontains = "$notcontains"
    notcontainsi = "$notcontainsi"
    startsWith = "$startsWith"
    endsWith = "$endsWith"

    # Array
    in_ = "$in"
    notIn = "$notIn"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> FilterOperator:
        """Look up an operator by wire token (``$eq``) or bare name (``eq``).

        Raises:
            ValueError: If no operator matches.
        """
        token = text if text.startswith("$") else f"${text}"
        for op in cls:
            if op.value == token:
                return op
        raise ValueError(f"Unknown filter operator: {text!r}")


class SortDirection(str, Enum):
    """Sort order appended to a field as ``field:asc`` or ``field:desc``."""

    asc = "asc"
    desc = "desc"

    def __str__(self) -> str:
        return self.value
