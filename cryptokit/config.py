# --------------------------------------------------------------
# File: config.py
# Description: Parámetros del protocolo y configuración de entorno.
# --------------------------------------------------------------
"""Constantes del formato de cable y ajustes leídos del entorno."""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Ajustes de entorno (no afectan al formato de los datos producidos).
LOG_LEVEL = os.getenv("CRYPTOKIT_LOG_LEVEL", "WARNING").upper()

# Parámetros RSA compartidos por los pares de cifrado y de firma.
RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
# Mínimo aceptado al importar; por debajo OAEP y PSS-32 dejan de ser utilizables.
RSA_MIN_KEY_SIZE = 1024
HASH_LEN = 32  # SHA-256
PSS_SALT_LENGTH = 32

# Parámetros fijos de CipherPayload; cambiarlos rompe los datos ya cifrados.
PBKDF2_ITERATIONS = 100_000
AES_KEY_LEN = 32
SALT_LEN = 16
IV_LEN = 12
TAG_LEN = 16

PEM_LINE_LENGTH = 64


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Ajusta el nivel del logger raíz del paquete.

    Args:
        level (Optional[str]): Nivel explícito; si es None se usa `LOG_LEVEL`.

    Returns:
        logging.Logger: Logger `cryptokit` ya configurado.
    """

    logger = logging.getLogger("cryptokit")
    logger.setLevel(level.upper() if level else LOG_LEVEL)
    return logger
