# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de utilidades criptográficas del paquete.
# --------------------------------------------------------------
"""Inicializa el paquete `cryptokit` y documenta sus módulos principales."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "codec",
    "config",
    "crypto_asym",
    "crypto_kdf",
    "crypto_sign",
    "crypto_sym",
    "errors",
    "keys",
    "models",
    "provider",
    "services",
]
