"""
Clasificación de colecciones MongoDB para la migración a logdata.

Reparte TODOS los nombres de colección en tres grupos disjuntos:
- prefixed: logs_<game> (formato stratalog, payload en 'data')
- raw: colecciones de juego sin prefijo (formato strata_log, ya planas)
- excluded: colecciones de sistema, internas (system.*) o la propia logdata

Cálculo puro sobre la lista de nombres: no consulta la base de datos.
"""

from collections import namedtuple

import config

SourceCollection = namedtuple("SourceCollection", ["name", "game", "flatten_data"])


def classify_collections(
    collection_names,
    system_collections=None,
    prefix=config.SOURCE_PREFIX,
):
    """
    Clasifica colecciones en origen con prefijo, origen raw o excluidas.

    El orden de salida es alfabético para que la migración recorra las
    colecciones siempre en el mismo orden.

    Args:
        collection_names: Nombres de todas las colecciones de la base
        system_collections: Colecciones a excluir (default: config.SYSTEM_COLLECTIONS)
        prefix: Prefijo del formato stratalog (default: 'logs_')

    Returns:
        dict: {
            'prefixed': [SourceCollection(name, game, True), ...],
            'raw': [SourceCollection(name, name, False), ...],
            'excluded': [str, ...]
        }

    Ejemplo:
        >>> result = classify_collections(['logs_tetris', 'snake', 'users'])
        >>> result['prefixed']
        [SourceCollection(name='logs_tetris', game='tetris', flatten_data=True)]
        >>> result['raw']
        [SourceCollection(name='snake', game='snake', flatten_data=False)]
        >>> result['excluded']
        ['users']
    """
    if system_collections is None:
        system_collections = config.SYSTEM_COLLECTIONS

    result = {"prefixed": [], "raw": [], "excluded": []}

    for name in sorted(set(collection_names)):
        if (
            not name
            or name in system_collections
            or name.startswith(config.INTERNAL_PREFIX)
        ):
            result["excluded"].append(name)
        elif name.startswith(prefix):
            game = name[len(prefix):]
            # 'logs_' a secas no tiene juego: 'game' nunca puede quedar vacío
            if not game:
                result["excluded"].append(name)
            else:
                result["prefixed"].append(SourceCollection(name, game, True))
        else:
            result["raw"].append(SourceCollection(name, name, False))

    return result


def get_source_collections(classified):
    """Retorna las colecciones a migrar: primero logs_*, luego las raw."""
    return classified["prefixed"] + classified["raw"]
