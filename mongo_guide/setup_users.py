from database import DB_NAME

# Accounts live in the admin database and are scoped to the guide database
ACCOUNTS = [
    {
        "user": "usuario_consulta",
        "pwd": "consulta123",
        "roles": [
            {"role": "read", "db": DB_NAME}
        ],
        "message": "🔐 Usuario '{user}' creado con permisos de solo lectura",
    },
    {
        "user": "aplicacion_web",
        "pwd": "app_segura_123",
        "roles": [
            {"role": "readWrite", "db": DB_NAME},
            {"role": "read", "db": "admin"}
        ],
        "message": "🔑 Usuario '{user}' creado con permisos de lectura/escritura",
    },
]


def create_account(client, user, pwd, roles):
    # Fails with OperationFailure if the user already exists
    client.admin.command("createUser", user, pwd=pwd, roles=roles)
    return user


def create_accounts(client):
    """Creates the read-only and the application accounts. Returns the usernames."""
    created = []
    for account in ACCOUNTS:
        create_account(client, account["user"], account["pwd"], account["roles"])
        print(account["message"].format(user=account["user"]))
        created.append(account["user"])
    return created


if __name__ == "__main__":
    from database import get_client
    create_accounts(get_client())
