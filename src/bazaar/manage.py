"""Bazaar management CLI.

Creates and drops the database schema and covers the operator tasks that
have no HTTP route of their own.

Usage:
    bazaar-manage setup-db
    bazaar-manage drop-db
    bazaar-manage grant-admin --email owner@example.com
    bazaar-manage add-delivery-area --name "Ward 12" --pincode 493773 --city Dhamtari --charge 20
"""

import argparse
import sys



def _domain():
    from bazaar.domain import bazaar

    bazaar.init()
    return bazaar


def setup_database():
    from bazaar.utils.db import setup_db

    print("Creating bazaar database schema...")
    setup_db(_domain())
    print("Done.")


def drop_database():
    from bazaar.utils.db import drop_db

    print("Dropping bazaar database schema...")
    drop_db(_domain())
    print("Done.")


def grant_admin(email):
    from bazaar.user.management import GrantAdmin

    domain = _domain()
    with domain.domain_context():
        user_id = domain.process(GrantAdmin(email=email), asynchronous=False)
    print(f"{email} is now an admin (user {user_id}).")


def add_delivery_area(name, pincode, city, charge, free_above=None):
    from bazaar.delivery.management import AddDeliveryArea

    domain = _domain()
    with domain.domain_context():
        area_id = domain.process(
            AddDeliveryArea(
                area_name=name,
                pincode=pincode,
                city=city,
                delivery_charge=charge,
                free_delivery_above=free_above,
            ),
            asynchronous=False,
        )
    print(f"Delivery area {name} ({pincode}) added: {area_id}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Bazaar management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("grant-admin", help="Promote an existing user to admin")
    admin_parser.add_argument("--email", required=True)

    area_parser = subparsers.add_parser("add-delivery-area", help="Register a serviceable pincode")
    area_parser.add_argument("--name", required=True)
    area_parser.add_argument("--pincode", required=True)
    area_parser.add_argument("--city", required=True)
    area_parser.add_argument("--charge", required=True)
    area_parser.add_argument("--free-above", default=None)

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "grant-admin":
        grant_admin(args.email)
    elif args.command == "add-delivery-area":
        add_delivery_area(args.name, args.pincode, args.city, args.charge, args.free_above)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
