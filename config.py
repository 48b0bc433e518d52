"""
Configuración centralizada para la consolidación de logs en 'logdata'.

ARQUITECTURA (Actualizado 2026-10-17):
Todas las colecciones de logs por juego se consolidan en una única colección
unificada 'logdata', con un campo 'game' que identifica el origen:
- logs_<game>: Formato stratalog actual (payload anidado en 'data')
- <game>: Formato strata_log original (documentos ya planos)
- Colecciones de sistema: NO se migran (ver SYSTEM_COLLECTIONS)

FLUJO DE MIGRACIÓN:
1. migrate_to_logdata.py: clasifica colecciones, migra y crea índices
2. rename_dbtimestamp.py: renombra dbtimestamp → serverTimestamp

USO DE LAS FUNCIONES HELPER:
    # Saber si una colección queda fuera de la migración
    if is_system_collection('api_stats'):
        pass

    # Obtener definición de un índice
    index = get_index_config('idx_game_playerId')
    keys = index['keys']  # [('game', 1), ('playerId', 1)]
"""

import os
from dotenv import load_dotenv
from pymongo import ASCENDING, DESCENDING

# Carga las variables del archivo .env en las variables de entorno del sistema
load_dotenv(override=True)

# --- Configuración de MongoDB ---
# MONGO_URI explícita tiene prioridad sobre las credenciales sueltas
MONGO_URI = os.getenv("MONGO_URI") or (
    f"mongodb://{os.getenv('MONGO_USER')}:{os.getenv('MONGO_PASSWORD')}"
    f"@{os.getenv('MONGO_HOST')}:{os.getenv('MONGO_PORT')}/"
    f"?authSource={os.getenv('MONGO_AUTH_SOURCE')}&readPreference=primary"
    f"&directConnection=true&ssl=false"
)
MONGO_DATABASE_NAME = os.getenv("MONGO_DATABASE") or "stratalog"

# --- Colección destino ---
TARGET_COLLECTION = "logdata"

# --- Clasificación de colecciones ---
# Prefijo del formato stratalog (logs_<game>)
SOURCE_PREFIX = "logs_"

# Prefijo de colecciones internas de MongoDB (system.profile, system.views...)
INTERNAL_PREFIX = "system."

# Colecciones conocidas que NO son logs de juegos.
# Incluye la propia colección destino para no migrarla sobre sí misma.
SYSTEM_COLLECTIONS = [
    TARGET_COLLECTION,
    "api_stats",
    "users",
    "sessions",
    "settings",
    "announcements",
]

# --- Forma canónica del documento ---
IDENTITY_FIELD = "_id"
GAME_FIELD = "game"
PAYLOAD_FIELD = "data"  # Sub-documento del formato stratalog
PLAYER_FIELD = "playerId"
EVENT_TYPE_FIELD = "eventType"

# --- Renombrado de timestamp ---
LEGACY_TIMESTAMP_FIELD = "dbtimestamp"
TIMESTAMP_FIELD = "serverTimestamp"

# --- Configuración de Migración ---
PROGRESS_EVERY = 1000  # Cada cuántos documentos se imprime progreso

# --- Índices de logdata ---
# Todos empiezan por 'game': las consultas siempre filtran por juego.
LOGDATA_INDEXES = [
    {
        "name": "idx_game_serverTimestamp",
        "keys": [(GAME_FIELD, ASCENDING), (TIMESTAMP_FIELD, DESCENDING)],
        "description": "Logs más recientes por juego",
    },
    {
        "name": "idx_game_playerId",
        "keys": [(GAME_FIELD, ASCENDING), (PLAYER_FIELD, ASCENDING)],
        "description": "Logs por jugador dentro de un juego",
    },
    {
        "name": "idx_game_eventType",
        "keys": [(GAME_FIELD, ASCENDING), (EVENT_TYPE_FIELD, ASCENDING)],
        "description": "Logs por tipo de evento dentro de un juego",
    },
]


# --- Funciones Helper ---


def is_system_collection(collection_name: str) -> bool:
    """
    Verifica si una colección queda excluida de la migración.

    Una colección se excluye si:
    - Está en SYSTEM_COLLECTIONS (incluye la colección destino)
    - Sigue la convención interna de MongoDB (system.*)

    Args:
        collection_name: Nombre de la colección MongoDB

    Returns:
        bool: True si NO debe migrarse

    Ejemplo:
        >>> is_system_collection('users')
        True
        >>> is_system_collection('system.views')
        True
        >>> is_system_collection('logs_tetris')
        False
    """
    return collection_name in SYSTEM_COLLECTIONS or collection_name.startswith(
        INTERNAL_PREFIX
    )


def get_index_names() -> list:
    """Retorna los nombres de los índices de logdata en orden de creación."""
    return [index["name"] for index in LOGDATA_INDEXES]


def get_index_config(index_name: str) -> dict:
    """
    Obtiene la definición de un índice de logdata por nombre.

    Args:
        index_name: Nombre del índice (ej: 'idx_game_playerId')

    Returns:
        dict: Definición con keys 'name', 'keys' y 'description'

    Raises:
        KeyError: Si el índice no está configurado
    """
    for index in LOGDATA_INDEXES:
        if index["name"] == index_name:
            return index

    available = ", ".join(get_index_names())
    raise KeyError(
        f"Índice '{index_name}' no está configurado.\n"
        f"Índices disponibles: {available}"
    )
