from __future__ import annotations

from typing import Literal

from collector_editions.config import get_config

from .backends.csv_backend import CsvOrderSnapshotSource
from .interface import OrderSnapshotSource


def get_snapshot_source(kind: Literal["csv"] = "csv") -> OrderSnapshotSource:
    if kind == "csv":
        # Reads from configured CSV folder
        config = get_config()
        return CsvOrderSnapshotSource(data_dir=config.data_dir)
    raise ValueError(f"Unknown snapshot source kind: {kind}")
