"""Storefront management CLI.

Provides commands to manage the database schema, seed the product catalogue
and reconcile carts left behind by interrupted checkouts.

Usage:
    python src/manage.py setup-db                      # Create all tables
    python src/manage.py drop-db                       # Drop all tables
    python src/manage.py seed-catalogue [products.json] # Load products
    python src/manage.py reconcile [--customer ID]     # Clear already-ordered carts
"""

import argparse
import json
import sys

DEMO_CATALOGUE = [
    {"title": "Desk Lamp", "category": "Lighting", "price": 1000.0, "discount": 10.0, "image": "/images/desk-lamp.jpg"},
    {"title": "Notebook", "category": "Stationery", "price": 500.0, "image": "/images/notebook.jpg"},
    {"title": "Fountain Pen", "category": "Stationery", "price": 2499.0, "discount": 15.0, "stock": 25},
    {"title": "Monitor Stand", "category": "Furniture", "price": 3250.0, "stock": 40},
    {"title": "Cable Organizer", "category": "Accessories", "price": 299.0, "discount": 5.0},
]


def _initialized_domain():
    from ordering.domain import ordering

    print("Initializing ordering domain...")
    ordering.init()
    return ordering


def setup_database():
    """Create the database schema for the Ordering domain."""
    from ordering.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating ordering database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    """Drop the database schema for the Ordering domain."""
    from ordering.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping ordering database schema...")
    drop_db(domain)
    print("Done.")


def seed_catalogue(path=None):
    """Load products from a JSON file holding a list of product objects, or the demo catalogue."""
    from ordering.catalogue.management import AddProduct

    if path:
        with open(path) as fh:
            products = json.load(fh)
    else:
        products = DEMO_CATALOGUE

    domain = _initialized_domain()
    with domain.domain_context():
        for entry in products:
            product_id = domain.process(AddProduct(**entry), asynchronous=False)
            print(f"  {product_id}  {entry['title']}")

    print(f"Seeded {len(products)} products.")


def reconcile(customer_id=None):
    """Clear carts whose contents were already turned into an order."""
    from ordering.checkout.reconciliation import ReconcileCarts

    domain = _initialized_domain()
    with domain.domain_context():
        cleared = domain.process(ReconcileCarts(customer_id=customer_id), asynchronous=False)

    print(f"Cleared {cleared} cart(s).")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-catalogue", help="Add products from a JSON file")
    seed_parser.add_argument("path", nargs="?", default=None, help="JSON file with a list of products (default: demo catalogue)")

    reconcile_parser = subparsers.add_parser("reconcile", help="Clear carts that were already checked out")
    reconcile_parser.add_argument("--customer", default=None, help="Only reconcile this customer's cart")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-catalogue":
        seed_catalogue(args.path)
    elif args.command == "reconcile":
        reconcile(args.customer)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
