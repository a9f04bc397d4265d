from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from collector_editions.config import get_config
from collector_editions.logging import get_logger

from ..interface import OrderSnapshotSource
from ..models import Order, OrderFilters

logger = get_logger(__name__)

ORDERS_FILE = "orders.csv"
LINE_ITEMS_FILE = "order_line_items.csv"

_TRUE_STRINGS = {"true", "1", "yes", "t", "y"}


def _column(df: pd.DataFrame, name: str) -> pd.Series:
    """Column by name, or an all-missing column when the CSV lacks it."""
    if name in df.columns:
        return df[name]
    return pd.Series(None, index=df.index, dtype=object)


def _utc(ts) -> pd.Timestamp:
    ts = pd.Timestamp(ts)
    return ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")


@dataclass
class _Tables:
    orders: pd.DataFrame
    line_items: pd.DataFrame


class CsvOrderSnapshotSource(OrderSnapshotSource):
    """
    CSV-backed snapshot source.
    - Loads orders.csv and order_line_items.csv from `data_dir` once at construction.
    - Every get_orders call filters the loaded frames and builds fresh Order
      models, mirroring a database query that nests line items under orders.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            config = get_config()
            data_dir = config.data_dir

        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            self.data_dir = (repo_root or current) / self.data_dir

        self._tables = self._load_tables(self.data_dir)
        logger.info(
            f"Loaded {len(self._tables.orders)} orders and {len(self._tables.line_items)} line items from {self.data_dir}"
        )

    # ---------- loading helpers ----------

    @staticmethod
    def _load_tables(data_dir: Path) -> _Tables:
        if not data_dir.exists():
            raise FileNotFoundError(
                f"Data directory not found: {data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m collector_editions.backend.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )

        required_files = [ORDERS_FILE, LINE_ITEMS_FILE]
        missing_files = [f for f in required_files if not (data_dir / f).exists()]

        if missing_files:
            raise FileNotFoundError(
                f"Required CSV files missing in {data_dir}:\n"
                f"  Missing: {', '.join(missing_files)}\n"
                f"  Expected files: {', '.join(required_files)}"
            )

        try:
            # Identifiers must keep leading zeros and never turn into floats
            orders = pd.read_csv(data_dir / ORDERS_FILE, dtype=str)
            line_items = pd.read_csv(data_dir / LINE_ITEMS_FILE, dtype=str)
        except Exception as e:
            raise RuntimeError(
                f"Error reading CSV files from {data_dir}: {e}\n"
                f"Please check that the CSV files are valid and readable."
            ) from e

        for column in ("id", "processed_at"):
            if column not in orders.columns:
                raise RuntimeError(f"{ORDERS_FILE} in {data_dir} has no '{column}' column")
        for column in ("order_id", "line_item_id", "status"):
            if column not in line_items.columns:
                raise RuntimeError(f"{LINE_ITEMS_FILE} in {data_dir} has no '{column}' column")

        orders["_processed_ts"] = pd.to_datetime(orders["processed_at"], utc=True, format="ISO8601")
        if "restocked" in line_items.columns:
            line_items["restocked"] = (
                line_items["restocked"].fillna("false").str.strip().str.lower().isin(_TRUE_STRINGS)
            )

        return _Tables(orders=orders, line_items=line_items)

    @staticmethod
    def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
        # NaN -> None so optional fields validate as absent
        return df.astype(object).where(pd.notna(df), None).to_dict(orient="records")

    # ---------- interface implementation ----------

    def get_orders(self, filters: OrderFilters) -> List[Order]:
        df = self._tables.orders

        mask = pd.Series(True, index=df.index)
        if filters.customer_id:
            customer_ids = _column(df, "customer_id")
            if isinstance(filters.customer_id, str):
                mask &= (customer_ids == filters.customer_id)
            else:
                mask &= customer_ids.isin(filters.customer_id)
        if filters.customer_email:
            emails = _column(df, "customer_email").fillna("").str.strip().str.lower()
            mask &= (emails == filters.customer_email.strip().lower())
        if filters.start_ts:
            mask &= (df["_processed_ts"] >= _utc(filters.start_ts))
        if filters.end_ts:
            mask &= (df["_processed_ts"] <= _utc(filters.end_ts))

        items = self._tables.line_items
        if filters.product_id:
            product_ids = [filters.product_id] if isinstance(filters.product_id, str) else filters.product_id
            holding = items.loc[_column(items, "product_id").isin(product_ids), "order_id"].unique()
            mask &= df["id"].isin(holding)
        if filters.line_item_id:
            holding = items.loc[items["line_item_id"] == filters.line_item_id, "order_id"].unique()
            mask &= df["id"].isin(holding)

        selected = df.loc[mask].drop(columns=["_processed_ts"])
        selected_items = items[items["order_id"].isin(selected["id"])]

        items_by_order: Dict[str, List[Dict[str, Any]]] = {}
        for record in self._records(selected_items):
            order_id = record.pop("order_id")
            items_by_order.setdefault(order_id, []).append(record)

        orders = [
            Order.model_validate({**record, "line_items": items_by_order.get(record["id"], [])})
            for record in self._records(selected)
        ]
        logger.info(f"get_orders: {len(orders)} orders matched {filters.model_dump(exclude_none=True)}")
        return orders
