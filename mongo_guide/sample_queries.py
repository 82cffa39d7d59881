from database import USERS_COLLECTION, PRODUCTS_COLLECTION

PRICE_THRESHOLD = 10000


def run_sample_queries(db):
    """Runs the read-only example queries and returns their counts."""
    users = db[USERS_COLLECTION]
    products = db[PRODUCTS_COLLECTION]

    counts = {
        "total_users": users.count_documents({}),
        "active_users": users.count_documents({"activo": True}),
        # Both sample products are above the threshold, so this is 2
        "expensive_products": products.count_documents({"precio": {"$gt": PRICE_THRESHOLD}}),
    }

    print(f"📊 Total de usuarios en la base de datos: {counts['total_users']}")
    print(f"👥 Usuarios activos: {counts['active_users']}")
    print(f"💎 Productos con precio mayor a ${PRICE_THRESHOLD:,}: {counts['expensive_products']}")
    return counts
