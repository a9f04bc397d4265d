#!/usr/bin/env python3
"""
seed_data.py

Generates a fake collector order snapshot to CSVs under a local folder (default: sample_data).
The snapshot deliberately contains the records the resolver has to reconcile:
warehouse copies (ids with the manual order prefix) of platform orders, line items re-synced under a new
order, refunds, restocks and cancellations.

Entities:
- orders, order_line_items

Run:
  python -m collector_editions.backend.seed_data --orders 200 --seed 42
"""

from __future__ import annotations
import argparse
import csv
import os
import random
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from collector_editions.config import get_config

# -----------------------------
# Config & helper structures
# -----------------------------

ARTISTS = ["Mara Quill", "Oto Brandt", "Lesley Vance", "Juno Okafor", "Ilse Marr", "Teo Santos"]
TITLES = ["Night Garden", "Static Bloom", "Low Tide", "Paper Moon", "Iron Orchard", "Glass Harbor"]

FINANCIAL_STATUSES = ["paid", "paid", "paid", "paid", "partially_refunded", "refunded", "voided"]
FULFILLMENT_STATUSES = ["fulfilled", "fulfilled", "fulfilled", "partial", None, "restocked", "canceled"]

ORDER_HEADERS = ["id", "order_name", "processed_at", "fulfillment_status", "financial_status",
                 "customer_id", "customer_email"]
LINE_ITEM_HEADERS = ["order_id", "line_item_id", "product_id", "name", "edition_number", "edition_total",
                     "status", "restocked", "refund_status", "fulfillment_status", "owner_email", "owner_name"]


@dataclass
class Artwork:
    product_id: str
    name: str
    edition_total: int
    next_edition: int = 1


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

def iso(ts: datetime) -> str:
    return ts.isoformat(timespec="seconds").replace("+00:00", "Z")


# -----------------------------
# Core generators
# -----------------------------

def gen_artworks(rnd: random.Random, n: int) -> List[Artwork]:
    artworks = []
    for i in range(n):
        artist = rnd.choice(ARTISTS)
        title = rnd.choice(TITLES)
        artworks.append(Artwork(
            product_id=str(8_000_000_000 + i),
            name=f"{title} by {artist}",
            edition_total=rnd.choice([25, 50, 90, 100]),
        ))
    return artworks

def gen_collectors(rnd: random.Random, n: int) -> List[Dict]:
    collectors = []
    for i in range(1, n + 1):
        first = rnd.choice(["ada", "bo", "cy", "dee", "eli", "fay", "gus", "hal"])
        collectors.append({
            "customer_id": str(6_000_000 + i),
            "customer_email": f"{first}{i}@example.com",
            "owner_name": f"{first.title()} Collector {i}",
        })
    return collectors

def gen_native_orders(
    rnd: random.Random,
    n_orders: int,
    artworks: List[Artwork],
    collectors: List[Dict],
    start_ts: datetime,
) -> Tuple[List[Dict], List[Dict]]:
    orders: List[Dict] = []
    items: List[Dict] = []
    line_counter = 0

    for i in range(n_orders):
        collector = rnd.choice(collectors)
        order_id = str(5_000_000_000 + i)
        processed = start_ts + timedelta(minutes=rnd.randint(0, 60 * 24 * 90))
        financial = rnd.choice(FINANCIAL_STATUSES)
        fulfillment = rnd.choice(FULFILLMENT_STATUSES)

        orders.append({
            "id": order_id,
            "order_name": f"#{1001 + i}",
            "processed_at": iso(processed),
            "fulfillment_status": fulfillment,
            "financial_status": financial,
            "customer_id": collector["customer_id"],
            "customer_email": collector["customer_email"],
        })

        for _ in range(1 + int(abs(rnd.gauss(0.0, 1.0)))):
            artwork = rnd.choice(artworks)
            line_counter += 1
            edition: Optional[int] = None
            if artwork.next_edition <= artwork.edition_total:
                edition = artwork.next_edition
                artwork.next_edition += 1
            refunded = financial == "refunded" or rnd.random() < 0.03
            restocked = fulfillment == "restocked" or rnd.random() < 0.03
            items.append({
                "order_id": order_id,
                "line_item_id": str(14_000_000_000 + line_counter),
                "product_id": artwork.product_id,
                "name": artwork.name,
                "edition_number": edition,
                "edition_total": artwork.edition_total,
                "status": "inactive" if rnd.random() < 0.02 else "active",
                "restocked": restocked,
                "refund_status": "refunded" if refunded else "none",
                "fulfillment_status": "fulfilled" if fulfillment == "fulfilled" else None,
                "owner_email": collector["customer_email"],
                "owner_name": collector["owner_name"],
            })

    return orders, items

def gen_warehouse_copies(
    rnd: random.Random,
    orders: List[Dict],
    items: List[Dict],
    duplicate_rate: float,
    manual_prefix: Optional[str] = None,
) -> Tuple[List[Dict], List[Dict]]:
    """Manual re-entries of platform orders, named with a letter suffix.

    Copy ids carry `manual_prefix`, the configured manual order prefix by default.
    """
    if manual_prefix is None:
        manual_prefix = get_config().manual_order_prefix
    items_by_order: Dict[str, List[Dict]] = {}
    for it in items:
        items_by_order.setdefault(it["order_id"], []).append(it)

    copies: List[Dict] = []
    copy_items: List[Dict] = []
    for order in orders:
        if rnd.random() >= duplicate_rate:
            continue
        copy_id = f"{manual_prefix}{order['order_name'].lstrip('#')}"
        processed = datetime.fromisoformat(order["processed_at"].replace("Z", "+00:00"))
        copies.append({
            **order,
            "id": copy_id,
            "order_name": f"{order['order_name'].lstrip('#')}A",
            "processed_at": iso(processed + timedelta(days=rnd.randint(1, 10))),
            "financial_status": rnd.choice(["paid", "voided"]),
        })
        for n, it in enumerate(items_by_order.get(order["id"], []), start=1):
            # Half the copies reuse the platform line item id, half mint their own
            line_item_id = it["line_item_id"] if rnd.random() < 0.5 else f"{copy_id}-{n}"
            copy_items.append({**it, "order_id": copy_id, "line_item_id": line_item_id})
    return copies, copy_items


# -----------------------------
# CSV writer
# -----------------------------

def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate a fake collector order snapshot to CSVs.")
    parser.add_argument("--orders", type=int, default=config.default_seed_orders, help="Number of platform orders.")
    parser.add_argument("--artworks", type=int, default=12)
    parser.add_argument("--collectors", type=int, default=40)
    parser.add_argument("--duplicate-rate", type=float, default=config.default_seed_duplicate_rate,
                        help="Share of platform orders re-entered manually by the warehouse.")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if CSVs already exist.")
    args = parser.parse_args(argv)

    rnd = random.Random(args.seed)
    outdir = args.output_dir
    ensure_dir(outdir)

    files = {
        "orders": os.path.join(outdir, "orders.csv"),
        "order_line_items": os.path.join(outdir, "order_line_items.csv"),
    }
    if args.no_overwrite:
        for p in files.values():
            if os.path.exists(p):
                print(f"Refusing to overwrite existing file: {p}", file=sys.stderr)
                return 2

    start_ts = datetime.now(timezone.utc).replace(microsecond=0) - timedelta(days=120)
    artworks = gen_artworks(rnd, args.artworks)
    collectors = gen_collectors(rnd, args.collectors)
    orders, items = gen_native_orders(rnd, args.orders, artworks, collectors, start_ts)
    copies, copy_items = gen_warehouse_copies(rnd, orders, items, args.duplicate_rate, config.manual_order_prefix)

    write_csv(files["orders"], orders + copies, ORDER_HEADERS)
    write_csv(files["order_line_items"], items + copy_items, LINE_ITEM_HEADERS)

    # simple summary
    print(f"Generated data in {outdir}")
    print(f" orders: {len(orders)} platform + {len(copies)} warehouse copies")
    print(f" line items: {len(items)} platform + {len(copy_items)} warehouse copies")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
