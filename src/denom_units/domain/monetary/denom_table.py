from __future__ import annotations

# Bulk registration of denominations from an in-memory pandas DataFrame.
# Each row is handed to `DenomRegistry.register_denom` in DataFrame order.

import logging

import pandas as pd

from denom_units.domain.monetary.denom_registry import DenomRegistry

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("denom", "unit", "base_denom", "base_unit")


def register_denoms_from_dataframe(registry: DenomRegistry, df: pd.DataFrame) -> int:
    """Register one denomination per row of $df.

    Input DataFrame has to meet these requirements:
    - Columns: denom, unit, base_denom, base_unit. Extra columns are ignored.
    - Units: strings or numbers. Prefer strings (or `Decimal` objects), because float
      columns already lost precision before reaching the registry.

    Rows are registered one by one. If a row fails, the error propagates and the rows
    before it stay registered.

    Args:
        registry: Registry receiving the denominations.
        df: Source table with one row per denomination.

    Returns:
        int: Number of registered rows.

    Raises:
        ValueError: If $df is not a DataFrame or misses a required column.
        InvalidDenomError: If a row's denom is not a valid denomination name.
        AlreadyRegisteredError: If a row's denom is already registered.
    """
    # Check: $df must be a pandas DataFrame
    if not isinstance(df, pd.DataFrame):
        raise ValueError(f"Cannot call `register_denoms_from_dataframe` because $df is not a pandas DataFrame (got type '{type(df).__name__}')")

    # Check: required columns present
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        missing_cols = ", ".join(sorted(missing))
        raise ValueError(f"Cannot call `register_denoms_from_dataframe` because $df is missing required columns: {missing_cols}")

    count = 0
    for row in df.loc[:, list(REQUIRED_COLUMNS)].itertuples(index=False):
        registry.register_denom(row.denom, row.unit, row.base_denom, row.base_unit)
        count += 1

    logger.debug(f"Registered {count} denom(s) from DataFrame")
    return count
