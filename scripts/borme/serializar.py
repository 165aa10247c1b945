"""
Serialización a JSON de los resultados del parser.
"""

import json
from datetime import date
from enum import Enum


def a_dict(obj):
    """
    Convierte un resultado (Borme, AnuncioC, lista o dict de ellos) a
    estructuras JSON nativas.
    """
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, (list, tuple)):
        return [a_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): a_dict(v) for k, v in obj.items()}
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    return obj


def a_json(obj, pretty: bool = False) -> str:
    """
    Serializa a JSON sin escapar caracteres no ASCII.

    En modo pretty indenta con 2 espacios y termina en salto de línea.
    """
    if pretty:
        return json.dumps(a_dict(obj), ensure_ascii=False, indent=2) + "\n"
    return json.dumps(a_dict(obj), ensure_ascii=False)
