#!/usr/bin/env python3
"""
Seed products from a JSON file into the configured store.

The file may hold a plain list of products or an object with a "products"
list. Every entry goes through the same validation as POST /api/products;
entries that fail are skipped and reported.

Usage:
    python scripts/seed_products.py --file ./mock/catalogue.json
    python scripts/seed_products.py --file products.json --url sqlite:///./dev.db
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.config import settings
from app.db import open_store
from app.repositories.product_repo import StoreError
from app.services.product_service import ProductService, ProductValidationError


def load_entries(path):
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get("products", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of products")
    return data


def seed(store, entries):
    """Create every valid entry; return (created, skipped) where skipped holds (index, reason)."""
    svc = ProductService(store)
    created = []
    skipped = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            skipped.append((i, "entry is not an object"))
            continue
        try:
            created.append(svc.create(entry))
        except ProductValidationError as e:
            skipped.append((i, str(e)))
    return created, skipped


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--file", required=True, help="JSON file with products")
    parser.add_argument(
        "--url", default=None, help="store URL (defaults to DATABASE_URL / MONGODB_URI)"
    )
    args = parser.parse_args(argv)

    try:
        entries = load_entries(args.file)
    except (OSError, ValueError) as e:
        print(f"Could not read {args.file}: {e}", file=sys.stderr)
        return 1

    try:
        store = open_store(args.url or settings.DATABASE_URL)
    except StoreError as e:
        print(f"Store connection error: {e}", file=sys.stderr)
        return 1

    try:
        created, skipped = seed(store, entries)
    finally:
        store.close()

    print(f"Seeded {len(created)} products, skipped {len(skipped)}.")
    for i, reason in skipped:
        print(f"  entry {i}: {reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
