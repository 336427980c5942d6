"""Storefront management CLI.

Usage:
    python src/manage.py setup-db                         # Create all tables
    python src/manage.py drop-db                          # Drop all tables
    python src/manage.py create-location "Central Library"  # Register a pickup location
"""

import argparse
import sys


def _storefront():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _storefront()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _storefront()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def create_locations(names, description=None):
    """Register pickup locations that shops can then be placed at."""
    from storefront.location.location import CreateLocation

    domain = _storefront()
    with domain.domain_context():
        for name in names:
            location_id = domain.process(CreateLocation(name=name, description=description), asynchronous=False)
            print(f"  {name}: {location_id}")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="PocketShop storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    location_parser = subparsers.add_parser("create-location", help="Register one or more pickup locations")
    location_parser.add_argument("names", nargs="+", help="Location names")
    location_parser.add_argument("--description", help="Description applied to every new location")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-location":
        create_locations(args.names, args.description)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
