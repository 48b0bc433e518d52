# analyze_sources.py
"""
Script de análisis previo a la migración a logdata.
Recorre cada colección origen (sin escribir nada) y reporta qué va a pasar
con sus documentos al consolidarlos:
- Cuántos traen payload 'data' (formato stratalog)
- Qué claves de 'data' se pierden por colisionar con un campo raíz
- Cuántos traen un 'game' raíz distinto al derivado de la colección
- Cuántos no tienen _id (no se migrarán)
"""

import io
import sys
from collections import Counter
from pathlib import Path

# Asegurar que el directorio raíz esté en sys.path al ejecutar como script
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import config
from migrators.classifier import classify_collections, get_source_collections
from migrators.logdata import find_payload_collisions


def analyze_source(collection, source, limit=0):
    """
    Analiza una colección origen.

    Args:
        collection: Colección origen de pymongo
        source: SourceCollection(name, game, flatten_data)
        limit: Máximo de documentos a revisar (0 = todos)

    Returns:
        dict: {
            'total': int,
            'with_payload': int,
            'collisions': Counter {clave: cantidad},
            'game_mismatch': int,
            'missing_id': int
        }
    """
    stats = {
        "total": 0,
        "with_payload": 0,
        "collisions": Counter(),
        "game_mismatch": 0,
        "missing_id": 0,
    }

    for doc in collection.find().limit(limit):
        stats["total"] += 1

        if config.IDENTITY_FIELD not in doc:
            stats["missing_id"] += 1

        game = doc.get(config.GAME_FIELD)
        if game is not None and game != source.game:
            stats["game_mismatch"] += 1

        payload = doc.get(config.PAYLOAD_FIELD)
        if isinstance(payload, dict) and payload:
            stats["with_payload"] += 1
            # Solo se aplana en logs_*: en raw 'data' se descarta entero
            if source.flatten_data:
                stats["collisions"].update(find_payload_collisions(doc))

    return stats


def print_source_report(source, stats):
    """Imprime el reporte de una colección origen."""
    mode = "aplanar data" if source.flatten_data else "copia directa"

    print(f"\n📦 {source.name} → game='{source.game}' ({mode})")
    print("-" * 70)
    print(f"  {'Documentos':35s} {stats['total']:,}")
    print(f"  {'Con payload data':35s} {stats['with_payload']:,}")
    print(f"  {'game raíz distinto':35s} {stats['game_mismatch']:,}")
    print(f"  {'Sin _id (no se migran)':35s} {stats['missing_id']:,}")

    if stats["with_payload"] and not source.flatten_data:
        print("  ⚠️  Colección raw con 'data': el payload NO se aplana")

    if stats["collisions"]:
        print("  Claves de data descartadas (gana el campo raíz):")
        for key, count in stats["collisions"].most_common():
            print(f"    - {key:31s} {count:,}")


def analyze_all(mongo_db, limit=0):
    """
    Analiza todas las colecciones origen de la base.

    Returns:
        dict: {nombre_coleccion: stats}
    """
    classified = classify_collections(mongo_db.list_collection_names())

    print(f"{'='*70}")
    print("ANÁLISIS DE COLECCIONES ORIGEN")
    print(f"{'='*70}")
    print(f"Excluidas: {', '.join(classified['excluded']) or '(ninguna)'}")

    results = {}
    for source in get_source_collections(classified):
        stats = analyze_source(mongo_db[source.name], source, limit)
        print_source_report(source, stats)
        results[source.name] = stats

    return results


if __name__ == "__main__":
    from migrate_to_logdata import connect_to_mongo

    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8")

    limit = int(sys.argv[1]) if len(sys.argv) > 1 else 0

    client, db = connect_to_mongo()
    try:
        analyze_all(db, limit)
    finally:
        client.close()
