"""Contratos del Core.

Por qué:
- Los servicios solo ven `Client`; los adaptadores (local, SSH) lo implementan.
"""

from core.interfaces.client import Client

__all__ = ["Client"]
