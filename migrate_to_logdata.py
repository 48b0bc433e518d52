r"""
Script principal de consolidación de colecciones de logs en 'logdata'.

Arquitectura:
- migrate_to_logdata.py: Orquestación (conexión, iteración, progreso)
- migrators/classifier.py: Qué colecciones se migran y con qué formato
- migrators/logdata.py: Transformación al documento canónico
- dbsetup.py: Índices de logdata
- config.py: Constantes de colecciones, campos e índices

Flujo de ejecución:
1. Listar colecciones y clasificarlas (logs_*, raw, excluidas)
2. Por cada colección origen, en serie:
   2.1 Iterar documentos con sesión explícita
   2.2 Transformar al documento canónico (extract_data)
   2.3 Insertar con _id original (insert_document)
3. Crear índices de logdata
4. Resumen: total de documentos y documentos por juego

Re-ejecución segura:
- Documentos ya migrados dan duplicate key → se cuentan como 'skipped'
- Un documento con error se reporta y la migración continúa
- Si el proceso se interrumpe, basta con volver a ejecutarlo

Uso:
    python migrate_to_logdata.py
"""

import io
import sys
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure

import config
import dbsetup
from migrators.base import MigrationOutcome
from migrators.classifier import classify_collections, get_source_collections
from migrators.logdata import LogdataMigrator


def connect_to_mongo():
    """
    Establece conexión a MongoDB usando credenciales de config.py.

    Returns:
        tuple: (client, database) de pymongo

    Raises:
        SystemExit: Si no puede conectar
    """
    try:
        print("🔌 Conectando a MongoDB...")
        client = MongoClient(config.MONGO_URI, serverSelectionTimeoutMS=5000)
        client.admin.command("ping")
        db = client[config.MONGO_DATABASE_NAME]
        print("✅ Conexión a MongoDB exitosa")
        return client, db
    except ConnectionFailure as e:
        print(f"❌ Error de conexión a MongoDB", file=sys.stderr)
        print(f"   Detalle: {e}", file=sys.stderr)
        sys.exit(1)


def load_migrator_for_source(source):
    """
    Instancia el migrador correspondiente a una colección origen.

    Args:
        source: SourceCollection(name, game, flatten_data)

    Returns:
        LogdataMigrator: Migrador configurado para el formato de la colección
    """
    return LogdataMigrator(game=source.game, flatten_data=source.flatten_data)


def migrate_collection(mongo_client, mongo_db, source, target_collection):
    """
    Migra una colección origen completa hacia logdata.

    Los documentos se procesan de a uno, en el orden del cursor. Ningún
    resultado individual detiene la iteración.

    Args:
        mongo_client: Cliente de MongoDB (para sesiones)
        mongo_db: Base de datos de pymongo
        source: SourceCollection a migrar
        target_collection: Colección logdata

    Returns:
        dict: {'migrated': int, 'skipped': int, 'errors': int}
    """
    migrator = load_migrator_for_source(source)
    source_collection = mongo_db[source.name]
    stats = {"migrated": 0, "skipped": 0, "errors": 0}

    total_docs = source_collection.count_documents({})
    count = 0

    # Sesión explícita para prevenir timeout de cursor en colecciones grandes
    with mongo_client.start_session() as session:
        with source_collection.find(no_cursor_timeout=True, session=session) as cursor:
            for doc in cursor:
                count += 1
                new_doc = migrator.extract_data(doc)
                outcome, detail = migrator.insert_document(new_doc, target_collection)

                if outcome is MigrationOutcome.INSERTED:
                    stats["migrated"] += 1
                elif outcome is MigrationOutcome.ALREADY_EXISTS:
                    stats["skipped"] += 1
                else:
                    stats["errors"] += 1
                    doc_id = migrator.get_primary_key_from_doc(doc)
                    print(
                        f"\n   ⚠️  Error migrando doc {doc_id} de {source.name}: {detail}",
                        file=sys.stderr,
                    )

                if total_docs and count % config.PROGRESS_EVERY == 0:
                    print(
                        f"\r\033[K⏳ {source.name}: {count:,}/{total_docs:,} "
                        f"({count*100//total_docs}%)",
                        end="",
                        flush=True,
                    )

    if count >= config.PROGRESS_EVERY:
        print()
    print(f"{source.name}: migrated={stats['migrated']}, skipped={stats['skipped']}")
    if stats["errors"]:
        print(f"   ❌ {source.name}: errors={stats['errors']} (revisar detalle arriba)")

    return stats


def summarize_games(collection):
    """
    Cuenta documentos de logdata por juego.

    Reemplaza la verificación manual db.logdata.distinct('game').

    Args:
        collection: Colección logdata

    Returns:
        dict: {game: cantidad de documentos}, ordenado por nombre de juego
    """
    games = sorted(
        game for game in collection.distinct(config.GAME_FIELD) if isinstance(game, str)
    )
    return {
        game: collection.count_documents({config.GAME_FIELD: game}) for game in games
    }


def run_migration(mongo_client, mongo_db):
    """
    Orquesta la consolidación completa de la base de datos.

    Args:
        mongo_client: Cliente de MongoDB
        mongo_db: Base de datos de pymongo

    Returns:
        dict: {
            'sources': {coleccion: {'migrated', 'skipped', 'errors'}},
            'indexes': {'created': [...], 'failed': [...]},
            'total': int,
            'games': {game: int}
        }
    """
    target_collection = mongo_db[config.TARGET_COLLECTION]

    classified = classify_collections(mongo_db.list_collection_names())

    print(f"🎯 Colección destino: {config.TARGET_COLLECTION}")
    print(f"📦 Colecciones {config.SOURCE_PREFIX}* encontradas: {len(classified['prefixed'])}")
    print(f"📦 Colecciones raw encontradas: {len(classified['raw'])}")
    print(f"🚫 Colecciones excluidas: {len(classified['excluded'])}")
    print()

    summary = {"sources": {}, "indexes": {}, "total": 0, "games": {}}

    for source in get_source_collections(classified):
        summary["sources"][source.name] = migrate_collection(
            mongo_client, mongo_db, source, target_collection
        )

    print("\n" + "=" * 70)
    print("🔨 CREANDO ÍNDICES")
    print("=" * 70)
    created, failed = dbsetup.setup_logdata_indexes(target_collection)
    summary["indexes"] = {"created": created, "failed": failed}

    summary["total"] = target_collection.count_documents({})
    summary["games"] = summarize_games(target_collection)

    print("\n" + "=" * 70)
    print("📊 RESUMEN")
    print("=" * 70)
    print(f"Total de documentos en {config.TARGET_COLLECTION}: {summary['total']:,}")
    for game, game_count in summary["games"].items():
        print(f"   • {game}: {game_count:,}")

    total_errors = sum(stats["errors"] for stats in summary["sources"].values())
    if total_errors:
        print(f"\n⚠️  {total_errors:,} documentos con error (ver advertencias arriba)")
    if failed:
        print(f"⚠️  Índices no creados: {', '.join(failed)}")

    return summary


def main():
    """
    Función principal de la consolidación.

    Exit Codes:
        0: Migración completada (revisar advertencias del resumen)
        1: Error de conexión o error inesperado
    """
    # Forzar UTF-8 en stdout/stderr para emojis en Windows
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8")

    print("=" * 70)
    print("🚀 MIGRACIÓN DE LOGS A LOGDATA")
    print("=" * 70)
    print(f"📍 MongoDB: {config.MONGO_DATABASE_NAME}")

    mongo_client, mongo_db = connect_to_mongo()

    try:
        run_migration(mongo_client, mongo_db)

        print("\n" + "=" * 70)
        print("✅ MIGRACIÓN COMPLETADA")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error durante la migración: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        sys.exit(1)

    finally:
        print("\n🔒 Cerrando conexión...")
        mongo_client.close()
        print("✅ Conexión cerrada correctamente")


if __name__ == "__main__":
    main()
