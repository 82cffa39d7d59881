from database import USERS_COLLECTION, PRODUCTS_COLLECTION


def create_collections(db):
    """
    Creates the users and products collections explicitly.
    Raises CollectionInvalid if either one already exists.
    """
    created = []
    for name in (USERS_COLLECTION, PRODUCTS_COLLECTION):
        db.create_collection(name)
        print(f"✅ Colección '{name}' creada")
        created.append(name)
    return created


if __name__ == "__main__":
    from database import get_client, select_database
    create_collections(select_database(get_client()))
