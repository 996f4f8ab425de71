"""
Seed script: load the fixed categories and products into the database
Run: python -m app.scripts.seed_catalog
"""
from sqlmodel import Session
from app.db.session import engine, create_db_and_tables
from app.data.seed import seed_categories, seed_products
from app.models.category import CategoryTable
from app.models.product import ProductTable


def seed_catalog():
    """Insert seed rows that are not in the database yet"""
    with Session(engine) as session:
        created = 0
        for category in seed_categories():
            if session.get(CategoryTable, category.id):
                print(f"Category already exists: {category.slug}")
                continue
            session.add(CategoryTable(**category.model_dump()))
            created += 1
        session.commit()
        print(f"Categories created: {created}")

        created = 0
        for product in seed_products():
            if session.get(ProductTable, product.id):
                continue
            session.add(ProductTable(**product.model_dump()))
            created += 1
        session.commit()
        print(f"Products created: {created}")


def main():
    print("Creating tables...")
    create_db_and_tables()
    print("Seeding catalog...")
    seed_catalog()
    print("Done!")


if __name__ == "__main__":
    main()
