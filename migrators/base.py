"""
Módulo base para migradores de colecciones de logs → logdata.

Define la interfaz común (contrato) que todos los migradores deben
implementar. Esto permite que migrate_to_logdata.py funcione con cualquier
migrador sin conocer los detalles del formato de origen.

Patrón de diseño: Strategy Pattern
- migrate_to_logdata.py = Contexto (orquestador)
- BaseMigrator = Estrategia abstracta
- LogdataMigrator = Estrategia concreta (stratalog o strata_log)

Flujo de uso:
1. migrate_to_logdata.py instancia un migrador por colección origen
2. Llama a extract_data() para obtener el documento canónico
3. Llama a insert_document() para insertarlo en logdata
4. Cuenta el resultado según MigrationOutcome

Ejemplo de implementación:
    class MiMigrador(BaseMigrator):
        def extract_data(self, doc):
            return {'_id': doc['_id'], 'game': self.game, ...}

        # ... implementar resto de métodos abstractos
"""

from abc import ABC, abstractmethod
from enum import Enum

from bson.errors import BSONError
from pymongo.errors import DuplicateKeyError, PyMongoError

import config


class MigrationOutcome(Enum):
    """
    Resultado de insertar un documento en la colección destino.

    El duplicate key NO es un error: significa que el documento ya se migró
    en una ejecución anterior (estado normal al re-ejecutar).
    """

    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


class BaseMigrator(ABC):
    """
    Clase abstracta que define la interfaz para migradores de logs.

    Attributes:
        game (str): Valor del campo 'game' en los documentos migrados
    """

    def __init__(self, game: str):
        """
        Constructor base que almacena el juego destino.

        Args:
            game: Nombre del juego (ej: 'tetris'), derivado de la colección
        """
        self.game = game

    @abstractmethod
    def extract_data(self, doc: dict) -> dict:
        """
        Convierte un documento de origen en un documento canónico de logdata.

        Args:
            doc: Documento de MongoDB de la colección origen

        Returns:
            dict: Documento listo para insertar, con '_id' y 'game'
        """
        pass

    @abstractmethod
    def get_primary_key_from_doc(self, doc: dict):
        """
        Extrae el valor de identidad del documento.

        Se usa tal cual (sin convertir a string) porque es la clave de
        deduplicación en logdata: convertirlo generaría otro _id.

        Args:
            doc: Documento de MongoDB

        Returns:
            Valor de '_id' (ObjectId, str, int...) o None si no existe
        """
        pass

    def insert_document(self, doc: dict, collection):
        """
        Inserta un documento canónico usando su _id como clave única.

        Resultados:
        - INSERTED: insertado por primera vez
        - ALREADY_EXISTS: duplicate key (11000), ya migrado antes
        - FAILED: cualquier otro error, con el detalle para reportar

        Un documento sin _id NO se inserta: MongoDB generaría un _id nuevo
        en cada ejecución y la migración dejaría de ser idempotente.

        Args:
            doc: Documento canónico (resultado de extract_data)
            collection: Colección destino de pymongo

        Returns:
            tuple: (MigrationOutcome, detalle del error o None)
        """
        if config.IDENTITY_FIELD not in doc:
            return MigrationOutcome.FAILED, f"documento sin {config.IDENTITY_FIELD}"

        try:
            collection.insert_one(doc)
            return MigrationOutcome.INSERTED, None
        except DuplicateKeyError:
            return MigrationOutcome.ALREADY_EXISTS, None
        except (PyMongoError, BSONError) as e:
            return MigrationOutcome.FAILED, str(e)
