#!/usr/bin/env python3
"""
Seed categories and products from a JSON catalogue export.

Accepts either a list of product entries or an object with an "items" list.
Entry keys follow the storefront's product records: name, slug, price,
description, image/image_url, category (name or slug), brand, stock.
Prices may be numbers or strings; a missing slug is derived from the name.

Usage:
    python scripts/seed_products.py --file ../public/mock/catalogue.json
"""
import argparse
import json
import os
import re
import sys

from storefront.db import SessionLocal, init_db
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.utils.money import round_money

DEFAULT_SOURCE = os.path.join(os.path.dirname(__file__), "..", "public", "mock", "catalogue.json")


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")


def _normalize_entry(entry):
    name = entry.get("name") or entry.get("title") or ""
    try:
        price = round_money(entry.get("price", entry.get("amount", 0)) or 0)
    except ValueError:
        price = round_money(0)
    try:
        stock = int(entry.get("stock", 0) or 0)
    except (TypeError, ValueError):
        stock = 0

    image = entry.get("image_url") or entry.get("image")
    if not image:
        imgs = entry.get("images") or []
        image = imgs[0] if isinstance(imgs, (list, tuple)) and imgs else None

    return {
        "slug": entry.get("slug") or slugify(name),
        "name": name,
        "price": price,
        "stock": stock,
        "description": entry.get("description") or "",
        "image_url": image,
        "brand": entry.get("brand"),
        "category": entry.get("category"),
    }


def seed_from_file(path: str) -> int:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        source_list = data["items"] if isinstance(data.get("items"), list) else list(data.values())
    elif isinstance(data, list):
        source_list = data
    else:
        source_list = []

    init_db()
    db = SessionLocal()
    products = ProductRepository(db)
    categories = CategoryRepository(db)
    seeded = 0
    try:
        for entry in (_normalize_entry(e) for e in source_list):
            if not entry["slug"]:
                continue
            category_id = None
            if entry["category"]:
                category_id = categories.get_or_create(slugify(entry["category"]), entry["category"]).id
            products.create_or_update(
                slug=entry["slug"],
                name=entry["name"],
                price=entry["price"],
                stock=entry["stock"],
                description=entry["description"],
                image_url=entry["image_url"],
                category_id=category_id,
                brand=entry["brand"],
            )
            seeded += 1
        db.commit()
        print("Seeded products:", seeded)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    return seeded


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=DEFAULT_SOURCE, help="Path to a product JSON export")
    args = parser.parse_args()
    if not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed_from_file(args.file)
