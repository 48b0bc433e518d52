"""
Suite de tests para la consolidación de logs en logdata.

Los tests NO se conectan a MongoDB real, usan la base en memoria de
helpers.py y validan:
- Sintaxis de código Python
- Clasificación de colecciones y transformación de documentos
- Idempotencia de la migración y del renombrado de timestamp
"""
