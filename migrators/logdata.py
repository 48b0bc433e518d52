"""
Migrador de colecciones de logs de juegos hacia la colección unificada logdata.

Implementa la interfaz BaseMigrator para los dos formatos históricos:

FORMATO stratalog (colecciones logs_<game>):
    {_id, playerId, eventType, timestamp, dbtimestamp, data: {score: 10, ...}}
    → El payload 'data' se aplana al nivel raíz (flatten_data=True)

FORMATO strata_log original (colecciones <game>):
    {_id, playerId, eventType, score: 10, ...}
    → Ya es plano, se copia tal cual (flatten_data=False)

DECISIONES DE DISEÑO:
- _id se preserva: es la clave de deduplicación entre ejecuciones
- 'game' siempre se deriva del nombre de la colección (pisa un 'game' raíz)
- Colisión raíz vs data: gana SIEMPRE el campo raíz (primer valor escrito)
- 'data' que no es un dict no se aplana y se descarta

Uso (desde migrate_to_logdata.py):
    migrator = LogdataMigrator(game='tetris', flatten_data=True)

    new_doc = migrator.extract_data(doc)
    outcome, detail = migrator.insert_document(new_doc, target_collection)
"""

from .base import BaseMigrator
import config


def transform_document(doc, game, flatten_data):
    """
    Construye el documento canónico de logdata a partir de un documento origen.

    Proceso:
    1. _id (si existe) y 'game'
    2. Todos los campos raíz excepto _id y 'data'
    3. Si flatten_data: campos de 'data' que NO existan ya en la raíz

    Args:
        doc: Documento de la colección origen
        game: Nombre del juego (clasificación)
        flatten_data: True para el formato stratalog (logs_*)

    Returns:
        dict: Documento canónico

    Ejemplo:
        >>> transform_document({'_id': 1, 'data': {'x': 5}, 'x': 9}, 'tetris', True)
        {'_id': 1, 'game': 'tetris', 'x': 9}
    """
    new_doc = {}

    # Sin _id no se inventa uno: lo decide el loader
    if config.IDENTITY_FIELD in doc:
        new_doc[config.IDENTITY_FIELD] = doc[config.IDENTITY_FIELD]
    new_doc[config.GAME_FIELD] = game

    for key, value in doc.items():
        if key in (config.IDENTITY_FIELD, config.PAYLOAD_FIELD, config.GAME_FIELD):
            continue
        new_doc[key] = value

    payload = doc.get(config.PAYLOAD_FIELD)
    if flatten_data and isinstance(payload, dict):
        for key, value in payload.items():
            # Un _id dentro de 'data' nunca sustituye la identidad del documento
            if key not in new_doc and key != config.IDENTITY_FIELD:
                new_doc[key] = value

    return new_doc


def find_payload_collisions(doc):
    """
    Lista las claves de 'data' que se pierden por colisionar con la raíz.

    Args:
        doc: Documento origen en formato stratalog

    Returns:
        list: Claves del payload que ya existen a nivel raíz
    """
    payload = doc.get(config.PAYLOAD_FIELD)
    if not isinstance(payload, dict):
        return []

    root_keys = {config.IDENTITY_FIELD, config.GAME_FIELD}
    root_keys.update(k for k in doc if k != config.PAYLOAD_FIELD)
    return [key for key in payload if key in root_keys]


class LogdataMigrator(BaseMigrator):
    """
    Migrador genérico hacia logdata, parametrizado por formato de origen.

    Attributes:
        game (str): Valor del campo 'game' ('tetris' para logs_tetris)
        flatten_data (bool): Si aplanar el sub-documento 'data'
    """

    def __init__(self, game, flatten_data=False):
        super().__init__(game)
        self.flatten_data = flatten_data

    def extract_data(self, doc):
        return transform_document(doc, self.game, self.flatten_data)

    def get_primary_key_from_doc(self, doc):
        return doc.get(config.IDENTITY_FIELD)
