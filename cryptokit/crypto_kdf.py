# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación de claves simétricas mediante PBKDF2-HMAC-SHA256.
# --------------------------------------------------------------
"""Funciones de derivación de claves a partir de contraseñas."""

from typing import Optional, Union

from cryptokit.config import AES_KEY_LEN, PBKDF2_ITERATIONS, SALT_LEN
from cryptokit.provider import DEFAULT_PROVIDER, CryptoProvider, algorithm_failures


def encode_password(password: Union[str, bytes]) -> bytes:
    """Normaliza la contraseña a bytes UTF-8."""

    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def derive_key(
    password: Union[str, bytes],
    salt: bytes,
    *,
    provider: Optional[CryptoProvider] = None,
) -> bytes:
    """Deriva una clave AES-256 con PBKDF2-HMAC-SHA256 y 100 000 iteraciones.

    Args:
        password (Union[str, bytes]): Contraseña del usuario.
        salt (bytes): Salt aleatoria de 16 bytes.
        provider (Optional[CryptoProvider]): Proveedor de primitivas.

    Returns:
        bytes: Clave simétrica de 32 bytes.

    Raises:
        ValueError: Si la salt no mide 16 bytes.

    """

    if len(salt) != SALT_LEN:
        raise ValueError(f"La salt debe medir {SALT_LEN} bytes, no {len(salt)}.")
    provider = provider or DEFAULT_PROVIDER
    with algorithm_failures("pbkdf2_sha256"):
        return provider.pbkdf2_sha256(
            encode_password(password), salt, PBKDF2_ITERATIONS, AES_KEY_LEN
        )
