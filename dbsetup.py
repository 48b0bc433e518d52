# dbsetup.py
"""
Script de configuración de índices de la colección unificada logdata.

Crea los índices definidos en config.LOGDATA_INDEXES. Se ejecuta
automáticamente al final de migrate_to_logdata.py, pero también puede
correrse por separado para reconstruirlos.

ÍNDICES:
- idx_game_serverTimestamp: (game 1, serverTimestamp -1)
- idx_game_playerId: (game 1, playerId 1)
- idx_game_eventType: (game 1, eventType 1)

DECISIONES DE DISEÑO:
- background=True: la colección sigue disponible durante la construcción
- Re-crear un índice idéntico es un no-op en MongoDB (idempotente)
- Un índice que falla NO aborta el resto: logdata sigue siendo consultable
"""

import sys
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError
import config


def create_connection():
    """Establece conexión con MongoDB."""
    try:
        client = MongoClient(config.MONGO_URI, serverSelectionTimeoutMS=5000)
        client.admin.command("ping")
        return client
    except ConnectionFailure as e:
        print(f"❌ Error conectando a MongoDB: {e}", file=sys.stderr)
        return None


def setup_logdata_indexes(collection, indexes=None):
    """
    Crea los índices de consulta de logdata.

    Args:
        collection: Colección logdata de pymongo
        indexes: Definiciones a crear (default: config.LOGDATA_INDEXES)

    Returns:
        tuple: (nombres creados, nombres fallidos)
    """
    if indexes is None:
        indexes = config.LOGDATA_INDEXES

    created = []
    failed = []

    for index in indexes:
        try:
            collection.create_index(
                index["keys"], name=index["name"], background=True
            )
            created.append(index["name"])
            print(f"   ✅ Índice creado: {index['name']}")
        except PyMongoError as e:
            failed.append(index["name"])
            print(f"   ⚠️  No se pudo crear {index['name']}: {e}", file=sys.stderr)

    return created, failed


def main():
    """
    Punto de entrada principal.

    Exit Codes:
        0: Todos los índices creados
        1: Error de conexión o algún índice fallido
    """
    print("=" * 70)
    print("🚀 CONFIGURACIÓN DE ÍNDICES: logdata")
    print("=" * 70)

    client = create_connection()
    if not client:
        print("\n❌ No se pudo conectar a la base de datos")
        sys.exit(1)

    try:
        collection = client[config.MONGO_DATABASE_NAME][config.TARGET_COLLECTION]

        print("\n🔨 Creando índices...")
        created, failed = setup_logdata_indexes(collection)

        print("\n" + "=" * 70)
        print(f"📊 Índices creados: {len(created)}/{len(config.LOGDATA_INDEXES)}")
        print("=" * 70)
    finally:
        client.close()

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
