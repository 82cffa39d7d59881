from datetime import datetime, timezone
from database import USERS_COLLECTION, PRODUCTS_COLLECTION


def build_users():
    """Returns the sample user documents. Both timestamps are taken at call time."""
    now = datetime.now(timezone.utc)
    return [
        {
            "nombre": "Ana García",
            "email": "ana@ejemplo.com",
            "edad": 28,
            "direccion": {
                "calle": "Av. Principal 123",
                "ciudad": "Ciudad de México",
                "pais": "México"
            },
            "intereses": ["programación", "música", "viajes"],
            "activo": True,
            "fecha_registro": now,
            "ultimo_acceso": now
        },
        {
            "nombre": "Carlos López",
            "email": "carlos@ejemplo.com",
            "edad": 35,
            "direccion": {
                "calle": "Calle Secundaria 456",
                "ciudad": "Guadalajara",
                "pais": "México"
            },
            "intereses": ["deportes", "tecnología"],
            "activo": True,
            "fecha_registro": now,
            "ultimo_acceso": now
        }
    ]


def build_products():
    # especificaciones has a different shape for each product
    return [
        {
            "nombre": "Laptop Gamer",
            "precio": 25000.00,
            "categoria": "Tecnología",
            "especificaciones": {
                "procesador": "Intel i7",
                "ram": "16GB",
                "almacenamiento": "1TB SSD"
            },
            "stock": 15,
            "en_oferta": True,
            "etiquetas": ["gaming", "tecnología", "portátil"]
        },
        {
            "nombre": "Smartphone",
            "precio": 12000.00,
            "categoria": "Tecnología",
            "especificaciones": {
                "pantalla": "6.5 pulgadas",
                "almacenamiento": "128GB",
                "camara": "48MP"
            },
            "stock": 30,
            "en_oferta": False,
            "etiquetas": ["móvil", "smartphone", "tecnología"]
        }
    ]


def seed_users(db):
    result = db[USERS_COLLECTION].insert_many(build_users())
    count = len(result.inserted_ids)
    print(f"✅ {count} usuarios insertados")
    return count


def seed_products(db):
    result = db[PRODUCTS_COLLECTION].insert_many(build_products())
    count = len(result.inserted_ids)
    print(f"✅ {count} productos insertados")
    return count


def seed_database(db):
    """Inserts the sample users and products. Returns (users, products) inserted."""
    return seed_users(db), seed_products(db)


if __name__ == "__main__":
    from database import get_client, select_database
    seed_database(select_database(get_client()))
