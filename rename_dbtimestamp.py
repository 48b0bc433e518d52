"""
Script de renombrado dbtimestamp → serverTimestamp en logdata.

Los logs migrados desde el formato stratalog guardan el timestamp del
servidor como 'dbtimestamp'; el resto del sistema espera 'serverTimestamp'.

PROCESO:
1. Contar documentos con dbtimestamp
2. Si hay alguno: updateMany con $rename (solo toca ese campo)
3. Contar documentos con serverTimestamp para verificar

Re-ejecución segura: los documentos ya renombrados no cumplen el filtro,
así que una segunda ejecución no escribe nada. Si se interrumpe a mitad,
volver a ejecutar completa el resto.

Uso:
    python rename_dbtimestamp.py
"""

import io
import sys
from pymongo.errors import PyMongoError

import config
from migrate_to_logdata import connect_to_mongo


def rename_field(
    collection,
    old_field=config.LEGACY_TIMESTAMP_FIELD,
    new_field=config.TIMESTAMP_FIELD,
):
    """
    Renombra un campo en todos los documentos que lo tengan.

    Args:
        collection: Colección de pymongo (logdata)
        old_field: Nombre deprecado (default: 'dbtimestamp')
        new_field: Nombre canónico (default: 'serverTimestamp')

    Returns:
        dict: {
            'before': docs con old_field antes del update,
            'modified': docs modificados por el update,
            'after': docs con new_field al terminar,
            'error': detalle del error o None
        }
    """
    report = {"before": 0, "modified": 0, "after": 0, "error": None}
    old_filter = {old_field: {"$exists": True}}

    report["before"] = collection.count_documents(old_filter)
    print(f"Documentos con {old_field}: {report['before']:,}")

    if report["before"] == 0:
        print("No hay documentos para migrar.")
    else:
        try:
            result = collection.update_many(
                old_filter, {"$rename": {old_field: new_field}}
            )
            report["modified"] = result.modified_count
            print(f"Modificados: {report['modified']:,} documentos")
        except PyMongoError as e:
            report["error"] = str(e)
            print(f"❌ Error renombrando {old_field}: {e}", file=sys.stderr)
            print("   Se puede re-ejecutar: solo se tocan documentos pendientes")

    report["after"] = collection.count_documents({new_field: {"$exists": True}})
    print(f"Documentos con {new_field}: {report['after']:,}")

    return report


def main():
    """
    Exit Codes:
        0: Renombrado completo (o nada que renombrar)
        1: Error de conexión o fallo del update
    """
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8")

    print("=" * 70)
    print(
        f"🚀 RENOMBRANDO {config.LEGACY_TIMESTAMP_FIELD} → {config.TIMESTAMP_FIELD}"
    )
    print("=" * 70)

    mongo_client, mongo_db = connect_to_mongo()

    try:
        report = rename_field(mongo_db[config.TARGET_COLLECTION])
    finally:
        mongo_client.close()

    print("=" * 70)
    if report["error"]:
        print("❌ RENOMBRADO INCOMPLETO")
        print("=" * 70)
        sys.exit(1)

    print("✅ RENOMBRADO COMPLETADO")
    print("=" * 70)


if __name__ == "__main__":
    main()
