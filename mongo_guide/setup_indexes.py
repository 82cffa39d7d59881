from pymongo import ASCENDING, TEXT
from database import USERS_COLLECTION, PRODUCTS_COLLECTION


def create_indexes(db):
    """Creates the three guide indexes and returns their names in creation order."""
    users = db[USERS_COLLECTION]
    products = db[PRODUCTS_COLLECTION]
    names = []

    # 1. Unique email (duplicates are rejected by the server from now on)
    names.append(users.create_index([("email", ASCENDING)], unique=True, name="idx_email_unico"))
    print("✅ Índice único creado en el campo email de usuarios")

    # 2. Compound index for lookups by city and country
    names.append(users.create_index(
        [("direccion.ciudad", ASCENDING), ("direccion.pais", ASCENDING)],
        name="idx_ubicacion"
    ))
    print("✅ Índice compuesto creado para ubicación de usuarios")

    # 3. Full-text search over products
    # (no sample product has a descripcion field yet; the index covers it anyway)
    names.append(products.create_index(
        [("nombre", TEXT), ("descripcion", TEXT)],
        name="idx_busqueda_texto",
        default_language="spanish"
    ))
    print("✅ Índice de texto creado para búsquedas en productos")

    return names


if __name__ == "__main__":
    from database import get_client, select_database
    create_indexes(select_database(get_client()))
