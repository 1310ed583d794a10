"""
Seed the database with a small, realistic registry
==================================================
Follows the order in which an organisation sets the system up:

1. USERS - an administrator, a stock opname operator and a read-only viewer
2. REFERENCE DATA - sites, categories and departments
3. EMPLOYEES - people who can be named as PIC of an asset
4. ASSETS - the fixed asset registry itself

Run: python seed_database.py
"""
from datetime import date

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session

from config import settings
from config.database import get_sync_url
from core.security import get_password_hash
from db_models import Asset, Category, Department, Employee, Site, User, UserRole


USERS = [
    {"email": "admin@company.com", "password": "admin123", "full_name": "System Administrator", "role": UserRole.ADMIN.value},
    {"email": "opname@company.com", "password": "opname123", "full_name": "Stock Opname Operator", "role": UserRole.SO_ASSET_USER.value},
    {"email": "viewer@company.com", "password": "viewer123", "full_name": "Finance Viewer", "role": UserRole.VIEWER.value},
]

SITES = [
    {"name": "Head Office", "city": "Jakarta", "province": "DKI Jakarta"},
    {"name": "Surabaya Branch", "city": "Surabaya", "province": "Jawa Timur"},
    {"name": "Bandung Warehouse", "city": "Bandung", "province": "Jawa Barat"},
]

CATEGORIES = ["Computer", "Furniture", "Vehicle", "Office Equipment"]

DEPARTMENTS = ["Finance", "IT", "Operations", "Human Resources"]

EMPLOYEES = [
    {"employee_id": "EMP-001", "name": "Budi Santoso", "department": "IT", "position": "IT Manager"},
    {"employee_id": "EMP-002", "name": "Siti Rahayu", "department": "Finance", "position": "Accountant"},
    {"employee_id": "EMP-003", "name": "Andi Wijaya", "department": "Operations", "position": "Supervisor"},
]

# (asset_number, name, brand, site, category, department, pic employee_id, cost)
ASSETS = [
    ("FA-2023-001", "Laptop Dell Latitude 5420", "Dell", "Head Office", "Computer", "IT", "EMP-001", 15_500_000),
    ("FA-2023-002", "Laptop Lenovo ThinkPad T14", "Lenovo", "Head Office", "Computer", "Finance", "EMP-002", 17_000_000),
    ("FA-2023-003", "Monitor LG 27 inch", "LG", "Head Office", "Computer", "IT", None, 3_200_000),
    ("FA-2023-004", "Office Desk Oak", "Informa", "Head Office", "Furniture", "Finance", None, 2_750_000),
    ("FA-2023-005", "Ergonomic Chair", "Herman Miller", "Surabaya Branch", "Furniture", "Operations", "EMP-003", 9_800_000),
    ("FA-2023-006", "Toyota Avanza", "Toyota", "Surabaya Branch", "Vehicle", "Operations", "EMP-003", 245_000_000),
    ("FA-2023-007", "Printer Epson L3210", "Epson", "Bandung Warehouse", "Office Equipment", "Operations", None, 2_400_000),
    ("FA-2023-008", "Projector Epson EB-X06", "Epson", "Head Office", "Office Equipment", "Human Resources", None, 6_100_000),
]


def seed(session: Session) -> dict[str, int]:
    """Insert the sample data; skips when the registry already has assets."""
    existing = session.scalar(select(func.count(Asset.id))) or 0
    if existing:
        print(f"Database already has {existing} assets, skipping seed")
        return {}

    for user in USERS:
        session.add(User(
            email=user["email"],
            hashed_password=get_password_hash(user["password"]),
            full_name=user["full_name"],
            role=user["role"],
            is_active=True,
        ))
        print(f"  Added user: {user['email']} ({user['role']})")

    sites = {}
    for order, data in enumerate(SITES, start=1):
        sites[data["name"]] = Site(sort_order=order, country="Indonesia", **data)
    categories = {name: Category(name=name, sort_order=order) for order, name in enumerate(CATEGORIES, start=1)}
    departments = {name: Department(name=name, sort_order=order) for order, name in enumerate(DEPARTMENTS, start=1)}
    employees = {
        data["employee_id"]: Employee(join_date=date(2020, 1, 6), is_active=True, **data)
        for data in EMPLOYEES
    }
    session.add_all([*sites.values(), *categories.values(), *departments.values(), *employees.values()])
    session.flush()

    for number, name, brand, site, category, department, pic_id, cost in ASSETS:
        session.add(Asset(
            asset_number=number,
            name=name,
            brand=brand,
            status="Active",
            cost=float(cost),
            purchase_date=date(2023, 1, 16),
            site_id=sites[site].id,
            category_id=categories[category].id,
            department_id=departments[department].id,
            pic_id=employees[pic_id].id if pic_id else None,
        ))
        print(f"  Added asset: {number} - {name}")

    session.commit()
    return {
        "users": len(USERS),
        "sites": len(SITES),
        "categories": len(CATEGORIES),
        "departments": len(DEPARTMENTS),
        "employees": len(EMPLOYEES),
        "assets": len(ASSETS),
    }


def seed_database():
    engine = create_engine(get_sync_url(settings.DATABASE_URL))
    with Session(engine) as session:
        counts = seed(session)
    engine.dispose()

    if counts:
        print("\n" + "-" * 60)
        for table, count in counts.items():
            print(f"[OK] {table}: {count}")
        print("\nLogin accounts (send the id as X-User-Id):")
        for user in USERS:
            print(f"  {user['email']} / {user['password']}")


if __name__ == "__main__":
    print("=" * 60)
    print("DATABASE SEEDING SCRIPT")
    print("=" * 60)
    seed_database()
