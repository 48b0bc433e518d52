"""
Scripts de análisis de solo lectura sobre las colecciones origen.

    analyze_sources.py: Reporte previo a la migración a logdata
"""
