"""FriendHome management CLI.

Usage:
    python src/manage.py setup-db               # Create all tables
    python src/manage.py drop-db                # Drop all tables
    python src/manage.py seed-menu              # Load the sample menu
    python src/manage.py bootstrap-admin USER   # Promote an existing account to admin
"""

import argparse
import sys

# Sample dishes loaded by ``seed-menu``: (title, category, price, description)
SAMPLE_MENU = [
    ("Masala Dosa", "South Indian", 80.0, "Crispy rice crepe with spiced potato filling, sambar and chutney"),
    ("Idli Vada Combo", "South Indian", 60.0, "Two soft idlis and a crisp medu vada with sambar and chutney"),
    ("Chicken Fried Rice", "Chinese", 150.0, "Wok-tossed rice with chicken, egg and vegetables"),
    ("Veg Manchurian", "Chinese", 120.0, "Vegetable dumplings in a tangy Indo-Chinese gravy"),
    ("Paneer Butter Masala", "North Indian", 180.0, "Cottage cheese cubes in a rich tomato butter gravy"),
    ("Fresh Orange Juice", "Beverages", 50.0, "Freshly squeezed orange juice"),
    ("Mango Lassi", "Beverages", 60.0, "Chilled yoghurt drink blended with mango"),
    ("Samosa (2 pcs)", "Snacks", 40.0, "Crispy pastry stuffed with spiced potatoes and peas"),
]


def _domain():
    from friendhome.domain import friendhome

    friendhome.init()
    return friendhome


def setup_database():
    from friendhome.utils.db import setup_db

    domain = _domain()
    print("Creating friendhome database schema...")
    tables = setup_db(domain)
    if tables:
        print(f"Done. {len(tables)} table(s): {', '.join(tables)}")
    else:
        print("Done. No SQL database configured; nothing to create.")


def drop_database():
    from friendhome.utils.db import drop_db

    domain = _domain()
    print("Dropping friendhome database schema...")
    drop_db(domain)
    print("Done.")


def seed_menu():
    """Insert the sample dishes that are not on the menu yet. Safe to re-run."""
    from friendhome.menu.menu_item import MenuItem

    domain = _domain()
    with domain.domain_context():
        repo = domain.repository_for(MenuItem)
        existing = {item.title for item in repo._dao.query.all().items}

        added = 0
        for title, category, price, description in SAMPLE_MENU:
            if title in existing:
                continue
            repo.add(MenuItem.add(title=title, category=category, price=price, description=description))
            added += 1

    print(f"Seeded {added} menu item(s), {len(SAMPLE_MENU) - added} already present.")


def bootstrap_admin(user_id):
    """Promote the first administrator, who cannot be granted the role through the API."""
    from friendhome.accounts.account import Account
    from protean.exceptions import ObjectNotFoundError, ValidationError

    domain = _domain()
    with domain.domain_context():
        repo = domain.repository_for(Account)
        try:
            account = repo.get(user_id)
            account.grant_admin()
        except (ObjectNotFoundError, ValidationError) as exc:
            print(f"Cannot promote {user_id}: {exc}")
            sys.exit(1)
        repo.add(account)

    print(f"{user_id} is now an administrator.")


def main():
    parser = argparse.ArgumentParser(description="FriendHome management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-menu", help="Load the sample menu")
    admin_parser = subparsers.add_parser("bootstrap-admin", help="Promote an account to administrator")
    admin_parser.add_argument("user_id")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-menu":
        seed_menu()
    elif args.command == "bootstrap-admin":
        bootstrap_admin(args.user_id)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
