# --------------------------------------------------------------
# File: crypto_asym.py
# Description: Cifrado y descifrado RSA-OAEP de mensajes cortos.
# --------------------------------------------------------------
"""Servicio de cifrado asimétrico RSA-OAEP con SHA-256.

RSA solo admite mensajes menores que el módulo menos el relleno OAEP
(190 bytes para claves de 2048 bits). No hay modo híbrido.
"""

import logging
from typing import Optional

from cryptokit.codec import base64_decode, base64_encode
from cryptokit.config import HASH_LEN
from cryptokit.errors import DecryptionFailedError, PayloadTooLargeError
from cryptokit.keys import KeyManager, PrivateKeyLike, PublicKeyLike
from cryptokit.models import KeyPurpose
from cryptokit.provider import DEFAULT_PROVIDER, CryptoProvider, algorithm_failures

logger = logging.getLogger(__name__)


def max_plaintext_length(key_size: int) -> int:
    """Longitud máxima en bytes de un mensaje OAEP/SHA-256 para `key_size` bits."""

    return max(0, (key_size + 7) // 8 - 2 * HASH_LEN - 2)


class AsymmetricCipher:
    """Cifra con la clave pública y descifra con la privada del par de cifrado."""

    def __init__(self, provider: Optional[CryptoProvider] = None) -> None:
        self.provider = provider or DEFAULT_PROVIDER
        self.keys = KeyManager(self.provider)

    def encrypt(self, public_key: PublicKeyLike, plaintext: bytes) -> str:
        """Cifra un mensaje corto con RSA-OAEP.

        Args:
            public_key (PublicKeyLike): PEM SPKI o clave etiquetada `ENCRYPT`.
            plaintext (bytes): Mensaje en claro.

        Returns:
            str: Ciphertext en Base64.

        Raises:
            PayloadTooLargeError: Si el mensaje supera el límite de la clave.
            AlgorithmMismatchError: Si la clave está etiquetada para firma.

        """

        tagged = self.keys.resolve_public_key(public_key, KeyPurpose.ENCRYPT)
        limit = max_plaintext_length(tagged.key_size)
        if len(plaintext) > limit:
            raise PayloadTooLargeError(len(plaintext), limit)
        with algorithm_failures("rsa_oaep_encrypt"):
            ciphertext = self.provider.rsa_oaep_encrypt(tagged.key, plaintext)
        logger.debug("RSA-OAEP: %d bytes cifrados", len(plaintext))
        return base64_encode(ciphertext)

    def decrypt(self, private_key: PrivateKeyLike, ciphertext_b64: str) -> bytes:
        """Descifra un ciphertext RSA-OAEP en Base64.

        Args:
            private_key (PrivateKeyLike): PEM PKCS#8 o clave etiquetada `ENCRYPT`.
            ciphertext_b64 (str): Resultado de `encrypt`.

        Returns:
            bytes: Mensaje original.

        Raises:
            MalformedEncodingError: Si el Base64 no es válido.
            DecryptionFailedError: Ante cualquier fallo de tamaño, clave o padding.

        """

        tagged = self.keys.resolve_private_key(private_key, KeyPurpose.ENCRYPT)
        ciphertext = base64_decode(ciphertext_b64)
        try:
            with algorithm_failures("rsa_oaep_decrypt"):
                return self.provider.rsa_oaep_decrypt(tagged.key, ciphertext)
        except ValueError:
            # Sin encadenar: el detalle del backend no debe servir de oráculo.
            logger.warning("RSA-OAEP: descifrado rechazado")
            raise DecryptionFailedError("No se ha podido descifrar el mensaje.") from None


_DEFAULT_CIPHER = AsymmetricCipher()


def encrypt(public_key: PublicKeyLike, plaintext: bytes) -> str:
    """Cifra con el proveedor por defecto; ver `AsymmetricCipher.encrypt`."""

    return _DEFAULT_CIPHER.encrypt(public_key, plaintext)


def decrypt(private_key: PrivateKeyLike, ciphertext_b64: str) -> bytes:
    """Descifra con el proveedor por defecto; ver `AsymmetricCipher.decrypt`."""

    return _DEFAULT_CIPHER.decrypt(private_key, ciphertext_b64)
