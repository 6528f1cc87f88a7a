"""Variant generation as a pure function.

regenerate(rows) -> list[Variant]. No state, no side effects: the caller
replaces its whole variant list with the result. Any per-variant edits made
on the previous list are therefore gone after every call.

Example::

    rows = [
        AttributeRow(id=1, attribute_key="color", values=["Red", "Blue"]),
        AttributeRow(id=2, attribute_key="size", values=["S", "M"]),
    ]
    [v.display_name for v in regenerate(rows)]
    # ['Red / S', 'Red / M', 'Blue / S', 'Blue / M']
"""

from itertools import product
from typing import Iterable

from product_engine.config import VariantConfig
from product_engine.models.rows import AttributeRow, Variant


def group_attributes(rows: Iterable[AttributeRow]) -> dict[str, list[str]]:
    """Map attribute key -> values for rows that can contribute.

    Rows with an empty key or no values are skipped. A repeated key keeps
    the position where it was first seen but takes the later row's values.
    """
    groups: dict[str, list[str]] = {}
    for row in rows:
        if not row.attribute_key or not row.values:
            continue
        groups[row.attribute_key] = list(row.values)
    return groups


def regenerate(
    rows: Iterable[AttributeRow],
    config: VariantConfig | None = None,
) -> list[Variant]:
    """Expand attribute rows into the full, freshly numbered variant list.

    The first attribute varies slowest. Every variant starts with
    ``apply=True``.
    """
    config = config or VariantConfig()
    groups = group_attributes(rows)
    if not groups:
        return []

    keys = list(groups)
    variants = []
    for index, combo in enumerate(product(*groups.values())):
        name = config.name_separator.join(combo) or config.placeholder_name
        variants.append(
            Variant(
                id=index,
                assignment=list(zip(keys, combo)),
                display_name=name,
                apply=True,
            )
        )
    return variants
