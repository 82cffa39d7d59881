BYTES_PER_MB = 1024 * 1024


def format_size(size_on_disk):
    """Formats a byte count as megabytes with two decimals."""
    return "{:.2f} MB".format(size_on_disk / BYTES_PER_MB)


def show_databases(client):
    databases = client.admin.command("listDatabases")["databases"]
    print("📚 Bases de datos disponibles:")
    for info in databases:
        print(f"   - {info['name']} ({format_size(info.get('sizeOnDisk', 0))})")
    return [info["name"] for info in databases]


def show_collections(db):
    """Prints every collection of the database with its document count."""
    counts = {}
    print("\n📂 Colecciones en la base de datos actual:")
    for name in db.list_collection_names():
        counts[name] = db[name].count_documents({})
        print(f"   - {name}: {counts[name]} documentos")
    return counts


if __name__ == "__main__":
    from database import get_client, select_database
    client = get_client()
    show_databases(client)
    show_collections(select_database(client))
