# tests.py

import io
from contextlib import redirect_stdout
from unittest import TestCase, mock

import mongomock
from pymongo.errors import OperationFailure

import database
import init_mongo
from database import DB_NAME, USERS_COLLECTION, PRODUCTS_COLLECTION, select_database
from setup_collections import create_collections
from seed_data import build_users, build_products, seed_database
from setup_indexes import create_indexes
from sample_queries import run_sample_queries
from setup_users import ACCOUNTS, create_accounts
from system_info import format_size, show_databases, show_collections


def quietly(func, *args):
    """Runs func with stdout captured and returns (result, printed text)."""
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        result = func(*args)
    return result, buffer.getvalue()


class ProvisioningStepTests(TestCase):

    def setUp(self):
        """Each test gets an empty in-memory server."""
        self.client = mongomock.MongoClient()
        self.db, _ = quietly(select_database, self.client)

    def prepare(self, with_indexes=True):
        quietly(create_collections, self.db)
        quietly(seed_database, self.db)
        if with_indexes:
            quietly(create_indexes, self.db)

    def test_select_database_uses_guide_name(self):
        """The selected database is aprendizaje_mongodb."""
        db, output = quietly(select_database, self.client)
        self.assertEqual(db.name, DB_NAME)
        self.assertIn(f"'{DB_NAME}' seleccionada", output)

    def test_create_collections_creates_exactly_two(self):
        created, output = quietly(create_collections, self.db)
        self.assertEqual(created, [USERS_COLLECTION, PRODUCTS_COLLECTION])
        self.assertEqual(sorted(self.db.list_collection_names()), sorted([USERS_COLLECTION, PRODUCTS_COLLECTION]))
        self.assertIn("Colección 'usuarios' creada", output)

    def test_create_collections_fails_when_they_exist(self):
        """A second run is expected to stop at collection creation."""
        quietly(create_collections, self.db)
        with self.assertRaises(mongomock.CollectionInvalid):
            quietly(create_collections, self.db)

    def test_seed_inserts_two_users_and_two_products(self):
        quietly(create_collections, self.db)
        (users, products), output = quietly(seed_database, self.db)
        self.assertEqual((users, products), (2, 2))
        self.assertEqual(self.db[USERS_COLLECTION].count_documents({}), 2)
        self.assertEqual(self.db[PRODUCTS_COLLECTION].count_documents({}), 2)
        self.assertIn("2 usuarios insertados", output)
        self.assertIn("2 productos insertados", output)

    def test_engine_assigns_identifiers(self):
        self.prepare(with_indexes=False)
        for doc in self.db[USERS_COLLECTION].find():
            self.assertIn("_id", doc)

    def test_create_indexes_returns_names_in_order(self):
        self.prepare(with_indexes=False)
        names, _ = quietly(create_indexes, self.db)
        self.assertEqual(names, ["idx_email_unico", "idx_ubicacion", "idx_busqueda_texto"])

        user_indexes = self.db[USERS_COLLECTION].index_information()
        self.assertTrue(user_indexes["idx_email_unico"].get("unique"))
        self.assertEqual(
            [field for field, _ in user_indexes["idx_ubicacion"]["key"]],
            ["direccion.ciudad", "direccion.pais"]
        )
        self.assertIn("idx_busqueda_texto", self.db[PRODUCTS_COLLECTION].index_information())

    def test_duplicate_email_is_rejected(self):
        """The unique index on email blocks a second Ana."""
        self.prepare()
        duplicate = build_users()[0]
        duplicate["nombre"] = "Otra Ana"
        with self.assertRaises(mongomock.DuplicateKeyError):
            self.db[USERS_COLLECTION].insert_one(duplicate)
        self.assertEqual(self.db[USERS_COLLECTION].count_documents({}), 2)

    def test_sample_queries_counts(self):
        """Both products are priced above 10000, so the expensive count is 2."""
        self.prepare()
        counts, output = quietly(run_sample_queries, self.db)
        self.assertEqual(counts, {"total_users": 2, "active_users": 2, "expensive_products": 2})
        self.assertIn("Productos con precio mayor a $10,000: 2", output)

    def test_show_collections_lists_counts(self):
        self.prepare()
        counts, output = quietly(show_collections, self.db)
        self.assertEqual(counts, {USERS_COLLECTION: 2, PRODUCTS_COLLECTION: 2})
        self.assertIn("usuarios: 2 documentos", output)


class SampleDocumentTests(TestCase):

    def test_user_documents(self):
        users = build_users()
        self.assertEqual([u["email"] for u in users], ["ana@ejemplo.com", "carlos@ejemplo.com"])
        self.assertEqual(users[0]["direccion"]["ciudad"], "Ciudad de México")
        self.assertEqual(users[1]["intereses"], ["deportes", "tecnología"])
        for user in users:
            self.assertTrue(user["activo"])
            self.assertNotIn("_id", user)
            self.assertEqual(user["fecha_registro"], user["ultimo_acceso"])

    def test_product_documents(self):
        products = build_products()
        self.assertEqual([p["precio"] for p in products], [25000.00, 12000.00])
        self.assertIsInstance(products[0]["precio"], float)
        self.assertEqual(products[0]["especificaciones"]["procesador"], "Intel i7")
        self.assertEqual(products[1]["especificaciones"]["camara"], "48MP")
        self.assertEqual([p["en_oferta"] for p in products], [True, False])


class AccountTests(TestCase):

    def setUp(self):
        self.client = mock.MagicMock()

    def test_accounts_get_exact_roles(self):
        created, output = quietly(create_accounts, self.client)
        self.assertEqual(created, ["usuario_consulta", "aplicacion_web"])
        self.client.admin.command.assert_has_calls([
            mock.call("createUser", "usuario_consulta", pwd="consulta123",
                      roles=[{"role": "read", "db": DB_NAME}]),
            mock.call("createUser", "aplicacion_web", pwd="app_segura_123",
                      roles=[{"role": "readWrite", "db": DB_NAME}, {"role": "read", "db": "admin"}]),
        ])
        self.assertIn("solo lectura", output)

    def test_read_only_account_has_no_write_role(self):
        read_only = ACCOUNTS[0]
        self.assertEqual(read_only["user"], "usuario_consulta")
        self.assertEqual([r["role"] for r in read_only["roles"]], ["read"])

    def test_existing_account_aborts(self):
        """The server error for a duplicate user is not caught."""
        self.client.admin.command.side_effect = OperationFailure("User already exists", code=51003)
        with self.assertRaises(OperationFailure):
            quietly(create_accounts, self.client)
        self.assertEqual(self.client.admin.command.call_count, 1)


class SystemInfoTests(TestCase):

    def test_format_size(self):
        self.assertEqual(format_size(0), "0.00 MB")
        self.assertEqual(format_size(8192), "0.01 MB")
        self.assertEqual(format_size(3 * 1024 * 1024), "3.00 MB")

    def test_show_databases(self):
        client = mock.MagicMock()
        client.admin.command.return_value = {
            "databases": [
                {"name": "admin", "sizeOnDisk": 102400, "empty": False},
                {"name": DB_NAME, "sizeOnDisk": 2 * 1024 * 1024, "empty": False},
            ]
        }
        names, output = quietly(show_databases, client)
        client.admin.command.assert_called_once_with("listDatabases")
        self.assertEqual(names, ["admin", DB_NAME])
        self.assertIn(f"- {DB_NAME} (2.00 MB)", output)
        self.assertIn("- admin (0.10 MB)", output)


class GuideRunTests(TestCase):

    def setUp(self):
        self.client = mongomock.MongoClient()
        # mongomock has no createUser / listDatabases
        patcher_accounts = mock.patch.object(init_mongo, "create_accounts", return_value=[])
        patcher_databases = mock.patch.object(init_mongo, "show_databases", return_value=[])
        self.create_accounts = patcher_accounts.start()
        self.show_databases = patcher_databases.start()
        self.addCleanup(patcher_accounts.stop)
        self.addCleanup(patcher_databases.stop)

    def test_full_run_leaves_expected_state(self):
        result, output = quietly(init_mongo.run_guide, self.client)
        self.assertEqual(result, init_mongo.SUCCESS_MESSAGE)

        db = self.client[DB_NAME]
        self.assertEqual(sorted(db.list_collection_names()), sorted([USERS_COLLECTION, PRODUCTS_COLLECTION]))
        self.assertEqual(db[USERS_COLLECTION].count_documents({"activo": True}), 2)
        self.assertEqual(db[PRODUCTS_COLLECTION].count_documents({"precio": {"$gt": 10000}}), 2)
        self.create_accounts.assert_called_once_with(self.client)
        self.show_databases.assert_called_once_with(self.client)

        for step in range(1, 8):
            self.assertIn(f"=== {step}. ", output)
        for command in init_mongo.SUGGESTED_COMMANDS:
            self.assertIn(command, output)

    def test_second_run_fails_at_collection_creation(self):
        quietly(init_mongo.run_guide, self.client)
        with self.assertRaises(mongomock.CollectionInvalid):
            quietly(init_mongo.run_guide, self.client)
        self.assertEqual(self.client[DB_NAME][USERS_COLLECTION].count_documents({}), 2)


class EntryPointTests(TestCase):

    def test_get_client_pings_server(self):
        with mock.patch.object(database, "MongoClient") as mongo_client:
            client = database.get_client("mongodb://example:27017")
        mongo_client.assert_called_once_with("mongodb://example:27017")
        client.admin.command.assert_called_once_with("ping")

    def test_get_client_defaults_to_environment_uri(self):
        with mock.patch.object(database, "MongoClient") as mongo_client:
            database.get_client()
        mongo_client.assert_called_once_with(database.MONGO_URI)

    def test_main_closes_client_on_failure(self):
        client = mock.MagicMock()
        with mock.patch.object(init_mongo, "get_client", return_value=client), \
                mock.patch.object(init_mongo, "run_guide", side_effect=OperationFailure("boom")):
            with self.assertRaises(OperationFailure):
                init_mongo.main()
        client.close.assert_called_once_with()

    def test_main_returns_status(self):
        client = mock.MagicMock()
        with mock.patch.object(init_mongo, "get_client", return_value=client), \
                mock.patch.object(init_mongo, "run_guide", return_value=init_mongo.SUCCESS_MESSAGE):
            self.assertEqual(init_mongo.main(), init_mongo.SUCCESS_MESSAGE)
        client.close.assert_called_once_with()
