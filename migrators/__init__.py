"""
Migradores para consolidar colecciones de logs en la colección logdata.

Estructura:
    base.py: Clase abstracta BaseMigrator y MigrationOutcome
    classifier.py: Clasificación de colecciones (logs_*, raw, excluidas)
    logdata.py: LogdataMigrator y transformación al documento canónico

Los migradores son instanciados por load_migrator_for_source() en
migrate_to_logdata.py, uno por colección origen.

Formatos de origen:
    - logs_<game>: stratalog, payload anidado en 'data' (se aplana)
    - <game>: strata_log original, documento ya plano

Interfaz requerida (ver BaseMigrator):
    - extract_data(doc)
    - get_primary_key_from_doc(doc)
    - insert_document(doc, collection) (implementado en la base)
"""
