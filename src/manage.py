"""Canteen database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Create an admin, a student and a starter menu
"""

import argparse
import os
import sys

SEED_MENU = {
    ("Breakfast", "Morning breakfast items"): [
        ("Paratha with Egg", "Flaky paratha served with a fried egg", 80, 10),
        ("Vegetable Samosa (2 pcs)", "Crispy pastry filled with spiced potatoes", 30, 5),
        ("Bread Omelette", "Toasted bread with a fluffy omelette", 60, 8),
    ],
    ("Lunch", "Main course meals"): [
        ("Chicken Fried Rice", "Fried rice tossed with chicken and vegetables", 150, 15),
        ("Beef Biryani", "Slow-cooked rice with tender beef", 200, 20),
        ("Fish Curry with Rice", "Home-style fish curry with steamed rice", 180, 18),
    ],
    ("Snacks", "Light snacks and appetizers"): [
        ("French Fries", "Golden fries with ketchup", 50, 8),
        ("Chicken Wings (4 pcs)", "Spicy glazed chicken wings", 150, 15),
    ],
    ("Beverages", "Hot and cold drinks"): [
        ("Milk Tea", "Strong tea brewed with milk", 20, 3),
        ("Cold Coffee", "Iced coffee blended with milk", 70, 5),
    ],
    ("Desserts", "Sweet treats"): [
        ("Rice Pudding", "Creamy rice pudding with cardamom", 60, 5),
    ],
}


def setup_databases():
    from canteen.domain import canteen
    from canteen.utils.db import setup_db

    print("Initializing canteen domain...")
    canteen.init()
    print("Creating database schema...")
    setup_db(canteen)
    print("Done.")


def drop_databases():
    from canteen.domain import canteen
    from canteen.utils.db import drop_db

    print("Initializing canteen domain...")
    canteen.init()
    print("Dropping database schema...")
    drop_db(canteen)
    print("Done.")


def seed():
    from protean.utils.globals import current_domain

    from canteen.catalogue.category_management import CreateCategory
    from canteen.catalogue.menu_management import CreateMenuItem
    from canteen.catalogue.queries import find_category_by_name
    from canteen.domain import canteen
    from canteen.identity.queries import find_user_by_email
    from canteen.identity.registration import RegisterUser
    from canteen.identity.security import hash_password
    from canteen.identity.user import UserRole

    canteen.init()
    with canteen.domain_context():
        accounts = [
            ("Canteen Admin", "admin@canteen.local", "ADMIN001", UserRole.ADMIN.value, "SEED_ADMIN_PASSWORD"),
            ("Demo Student", "student@canteen.local", "STU0001", UserRole.STUDENT.value, "SEED_STUDENT_PASSWORD"),
        ]
        for name, email, student_id, role, password_var in accounts:
            if find_user_by_email(email):
                print(f"  {email} already exists, skipping")
                continue
            current_domain.process(
                RegisterUser(
                    name=name,
                    email=email,
                    student_id=student_id,
                    phone="01700000000",
                    password_hash=hash_password(os.getenv(password_var, "ChangeMe123!")),
                    role=role,
                ),
                asynchronous=False,
            )
            print(f"  Created {role} {email}")

        item_count = 0
        for (category_name, description), items in SEED_MENU.items():
            if find_category_by_name(category_name):
                print(f"  Category {category_name} already exists, skipping")
                continue
            category_id = current_domain.process(
                CreateCategory(name=category_name, description=description),
                asynchronous=False,
            )
            for item_name, item_description, price, preparation_time in items:
                current_domain.process(
                    CreateMenuItem(
                        name=item_name,
                        description=item_description,
                        category_id=category_id,
                        price=price,
                        preparation_time=preparation_time,
                    ),
                    asynchronous=False,
                )
                item_count += 1

        print(f"Seeded {len(SEED_MENU)} categories and {item_count} menu items.")


def main():
    parser = argparse.ArgumentParser(description="Canteen database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load demo accounts and a starter menu")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
