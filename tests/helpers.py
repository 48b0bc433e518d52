"""
Funciones helper compartidas para todos los tests.

Proporciona dobles en memoria de cliente, base y colección de pymongo con
la superficie que usan los scripts (find, insert_one, count_documents,
distinct, create_index, update_many). Los errores son los reales de
pymongo.errors, así el código bajo test los maneja igual que en producción.
"""

import contextlib
import os
import sys

from pymongo.errors import DuplicateKeyError, OperationFailure, WriteError
from pymongo.results import InsertOneResult, UpdateResult

# Agregar directorio raíz al path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class FakeCursor:
    """Cursor mínimo: iterable y con limit() (0 = sin límite, como pymongo)."""

    def __init__(self, docs):
        self._docs = docs

    def limit(self, n):
        if n:
            return FakeCursor(self._docs[:n])
        return self

    def __iter__(self):
        return iter(self._docs)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakeCollection:
    """
    Colección en memoria con unicidad por _id.

    Attributes:
        failing_ids: _id cuyo insert_one lanza WriteError (no duplicate key)
        failing_indexes: nombres de índice cuyo create_index falla
        fail_updates: si True, update_many lanza OperationFailure
    """

    def __init__(self, name, docs=None):
        self.name = name
        self.docs = [dict(doc) for doc in (docs or [])]
        self.indexes = {}
        self.failing_ids = set()
        self.failing_indexes = set()
        self.fail_updates = False
        self.update_calls = 0
        self.exists = docs is not None

    # --- Lectura ---

    def find(self, filter=None, **kwargs):
        return FakeCursor([dict(d) for d in self.docs if _matches(d, filter or {})])

    def count_documents(self, filter):
        return sum(1 for d in self.docs if _matches(d, filter))

    def distinct(self, field):
        values = []
        for doc in self.docs:
            if field in doc and doc[field] not in values:
                values.append(doc[field])
        return values

    # --- Escritura ---

    def insert_one(self, doc):
        doc_id = doc.get("_id")
        if doc_id in self.failing_ids:
            raise WriteError("Document failed validation", code=121)
        if any(d.get("_id") == doc_id for d in self.docs):
            raise DuplicateKeyError(
                f"E11000 duplicate key error collection: {self.name} "
                f"index: _id_ dup key: {{ _id: {doc_id!r} }}",
                code=11000,
            )
        self.docs.append(dict(doc))
        self.exists = True
        return InsertOneResult(doc_id, True)

    def create_index(self, keys, name=None, **kwargs):
        if name in self.failing_indexes:
            raise OperationFailure(f"Index build failed: {name}", code=67)
        self.indexes[name] = {"key": list(keys), **kwargs}
        self.exists = True
        return name

    def update_many(self, filter, update):
        self.update_calls += 1
        if self.fail_updates:
            raise OperationFailure("interrupted at shutdown", code=11600)

        renames = update.get("$rename", {})
        matched = 0
        modified = 0
        for doc in self.docs:
            if not _matches(doc, filter):
                continue
            matched += 1
            changed = False
            for old, new in renames.items():
                if old in doc:
                    doc[new] = doc.pop(old)
                    changed = True
            if changed:
                modified += 1

        return UpdateResult({"n": matched, "nModified": modified, "ok": 1.0}, True)


class FakeDatabase:
    """Base de datos en memoria: dict de FakeCollection por nombre."""

    def __init__(self, collections=None):
        self._collections = {}
        for name, docs in (collections or {}).items():
            self._collections[name] = FakeCollection(name, docs)

    def __getitem__(self, name):
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]

    def list_collection_names(self):
        # Como en MongoDB: una colección existe recién al escribir en ella
        return [name for name, coll in self._collections.items() if coll.exists]


class FakeClient:
    """Cliente mínimo: solo sesiones (sin efecto en memoria)."""

    def start_session(self):
        return contextlib.nullcontext()


def _matches(doc, filter):
    """Evalúa filtros simples: igualdad y {'$exists': bool}."""
    for field, condition in filter.items():
        if isinstance(condition, dict) and "$exists" in condition:
            if (field in doc) != condition["$exists"]:
                return False
        elif doc.get(field) != condition:
            return False
    return True


def build_game_database():
    """
    Base de ejemplo con los dos formatos de origen y colecciones de sistema.

    - logs_tetris: formato stratalog (payload en 'data', dbtimestamp)
    - snake: formato strata_log original (plano)
    - users, api_stats, system.views: NO se migran
    """
    return FakeDatabase(
        {
            "logs_tetris": [
                {
                    "_id": "t1",
                    "playerId": "p1",
                    "eventType": "start",
                    "dbtimestamp": 100,
                    "data": {"level": 1, "playerId": "ignored"},
                },
                {
                    "_id": "t2",
                    "playerId": "p2",
                    "eventType": "score",
                    "dbtimestamp": 200,
                    "data": {"score": 42},
                },
            ],
            "snake": [
                {"_id": "s1", "playerId": "p9", "eventType": "eat", "length": 3},
            ],
            "users": [{"_id": "u1", "name": "admin"}],
            "api_stats": [{"_id": "a1", "hits": 10}],
            "system.views": [{"_id": "v1"}],
        }
    )


def run_test_functions(tests):
    """
    Ejecuta una lista de funciones de test y cuenta fallos.

    Returns:
        int: Cantidad de tests fallidos
    """
    failed = 0

    for test_func in tests:
        try:
            test_func()
            print(f"   ✅ {test_func.__name__}")
        except AssertionError as e:
            print(f"   ❌ FALLO: {test_func.__name__}")
            print(f"      {e}")
            failed += 1
        except Exception as e:
            print(f"   ❌ ERROR: {test_func.__name__}")
            print(f"      {type(e).__name__}: {e}")
            failed += 1

    return failed
