# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Cifrado autenticado AES-GCM protegido por contraseña.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico para proteger datos con una contraseña.

El resultado es `base64(salt[16] || iv[12] || ciphertext || tag[16])`. Cada
llamada genera salt e IV nuevos, por lo que la clave derivada nunca se repite.
"""

import logging
from typing import Optional, Union

from cryptography.exceptions import InvalidTag

from cryptokit.config import IV_LEN, SALT_LEN
from cryptokit.crypto_kdf import derive_key
from cryptokit.errors import AuthenticationFailedError
from cryptokit.models import CipherPayload
from cryptokit.provider import DEFAULT_PROVIDER, CryptoProvider, algorithm_failures

logger = logging.getLogger(__name__)


class PasswordCipher:
    """Cifra y descifra blobs `CipherPayload` con una clave derivada."""

    def __init__(self, provider: Optional[CryptoProvider] = None) -> None:
        self.provider = provider or DEFAULT_PROVIDER

    def derive_key(self, password: Union[str, bytes], salt: bytes) -> bytes:
        """Deriva la clave AES con el proveedor de la instancia."""

        return derive_key(password, salt, provider=self.provider)

    def encrypt(self, password: Union[str, bytes], plaintext: bytes) -> str:
        """Cifra datos con AES-256-GCM bajo una clave derivada de la contraseña.

        Args:
            password (Union[str, bytes]): Contraseña del usuario.
            plaintext (bytes): Datos en claro.

        Returns:
            str: `CipherPayload` codificado en Base64.

        """

        salt = self.provider.random_bytes(SALT_LEN)
        iv = self.provider.random_bytes(IV_LEN)
        key = self.derive_key(password, salt)
        with algorithm_failures("aes_gcm_encrypt"):
            ciphertext = self.provider.aes_gcm_encrypt(key, iv, plaintext)
        logger.debug("AES-GCM: %d bytes cifrados con contraseña", len(plaintext))
        return CipherPayload(salt=salt, iv=iv, ciphertext=ciphertext).to_base64()

    def decrypt(self, password: Union[str, bytes], payload: str) -> bytes:
        """Descifra un `CipherPayload` verificando su etiqueta.

        Args:
            password (Union[str, bytes]): Contraseña usada al cifrar.
            payload (str): Blob Base64 producido por `encrypt`.

        Returns:
            bytes: Datos originales.

        Raises:
            MalformedEncodingError: Base64 inválido o menos de 28 bytes.
            AuthenticationFailedError: Contraseña incorrecta o datos alterados.

        """

        parsed = CipherPayload.from_base64(payload)
        key = self.derive_key(password, parsed.salt)
        try:
            with algorithm_failures("aes_gcm_decrypt"):
                return self.provider.aes_gcm_decrypt(key, parsed.iv, parsed.ciphertext)
        except InvalidTag:
            logger.warning("AES-GCM: etiqueta de autenticación inválida")
            raise AuthenticationFailedError(
                "Contraseña incorrecta o datos alterados."
            ) from None


_DEFAULT_CIPHER = PasswordCipher()


def encrypt_with_password(password: Union[str, bytes], plaintext: bytes) -> str:
    """Cifra con el proveedor por defecto; ver `PasswordCipher.encrypt`."""

    return _DEFAULT_CIPHER.encrypt(password, plaintext)


def decrypt_with_password(password: Union[str, bytes], payload: str) -> bytes:
    """Descifra con el proveedor por defecto; ver `PasswordCipher.decrypt`."""

    return _DEFAULT_CIPHER.decrypt(password, payload)
