"""
export_sample.py - Exporta muestra de un juego de logdata a JSON

Sirve para revisar a mano cómo quedaron los documentos migrados de un juego
(campos aplanados, game, serverTimestamp).

Uso:
    python export_sample.py <game> [limit]

Ejemplo:
    python export_sample.py tetris 200
"""

import sys
from pathlib import Path
from bson.json_util import dumps
from pymongo import MongoClient
import config


def export_game_sample(collection, game, limit=200, output_dir=Path("samples")):
    """
    Exporta muestra de un juego a JSON en formato Extended JSON.

    Args:
        collection: Colección logdata
        game: Valor del campo 'game' a exportar
        limit: Número de documentos a exportar
        output_dir: Directorio destino (se crea si no existe)

    Returns:
        Path|None: Archivo generado, o None si el juego no tiene documentos
    """
    print(f"📥 Obteniendo {limit} documentos de '{game}'...")
    docs = list(collection.find({config.GAME_FIELD: game}).limit(limit))

    if not docs:
        print(f"⚠️  El juego '{game}' no tiene documentos en {config.TARGET_COLLECTION}")
        return None

    output_dir = Path(output_dir)
    output_dir.mkdir(exist_ok=True)

    # Serializar usando bson.json_util (mantiene tipos de MongoDB)
    json_output = dumps(docs, indent=2, ensure_ascii=False)

    filename = output_dir / f"{config.TARGET_COLLECTION}_{game}_sample.json"
    with open(filename, "w", encoding="utf-8") as f:
        f.write(json_output)

    print(f"✅ Exportados {len(docs)} documentos")
    print(f"📄 Archivo: {filename}")
    print(f"📊 Tamaño: {len(json_output) / 1024:.2f} KB")
    return filename


if __name__ == "__main__":
    # Argumentos por línea de comandos
    if len(sys.argv) < 2:
        print("Uso: python export_sample.py <game> [limit]")
        print("Ejemplo: python export_sample.py tetris 200")
        sys.exit(1)

    game = sys.argv[1]
    limit = int(sys.argv[2]) if len(sys.argv) > 2 else 200

    client = MongoClient(config.MONGO_URI)
    try:
        export_game_sample(
            client[config.MONGO_DATABASE_NAME][config.TARGET_COLLECTION], game, limit
        )
    finally:
        client.close()
