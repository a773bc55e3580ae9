# --------------------------------------------------------------
# File: provider.py
# Description: Proveedor criptográfico inyectable en los servicios.
# --------------------------------------------------------------
"""Acceso único a la aleatoriedad y a las primitivas de `cryptography`.

Los servicios reciben un `CryptoProvider` en su constructor; las pruebas pueden
sustituir `random_bytes` por una fuente con semilla sin tocar el resto.
"""

import logging
import os
from contextlib import contextmanager
from typing import Iterator

from cryptography.exceptions import InternalError, InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from cryptokit.config import HASH_LEN, RSA_PUBLIC_EXPONENT
from cryptokit.errors import AlgorithmFailureError

logger = logging.getLogger(__name__)


def _oaep() -> padding.OAEP:
    """Relleno OAEP con SHA-256, MGF1-SHA-256 y sin etiqueta."""

    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def _pss(salt_length: int) -> padding.PSS:
    """Relleno PSS con MGF1-SHA-256 y la salt indicada."""

    return padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=salt_length)


class CryptoProvider:
    """Implementación por defecto sobre `cryptography` y `os.urandom`.

    No guarda estado entre llamadas, así que una misma instancia puede
    compartirse entre hilos.
    """

    def random_bytes(self, length: int) -> bytes:
        """Devuelve `length` bytes de una fuente criptográficamente segura."""

        return os.urandom(length)

    def generate_rsa_key(self, key_size: int) -> rsa.RSAPrivateKey:
        """Genera una clave privada RSA con exponente 65537."""

        return rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT, key_size=key_size
        )

    def rsa_oaep_encrypt(self, public_key: rsa.RSAPublicKey, data: bytes) -> bytes:
        """Cifra `data` con RSA-OAEP/SHA-256."""

        return public_key.encrypt(data, _oaep())

    def rsa_oaep_decrypt(self, private_key: rsa.RSAPrivateKey, data: bytes) -> bytes:
        """Descifra RSA-OAEP/SHA-256; lanza ValueError si falla."""

        return private_key.decrypt(data, _oaep())

    def rsa_pss_sign(
        self, private_key: rsa.RSAPrivateKey, message: bytes, salt_length: int
    ) -> bytes:
        """Firma `message` con RSA-PSS/SHA-256."""

        return private_key.sign(message, _pss(salt_length), hashes.SHA256())

    def rsa_pss_verify(
        self,
        public_key: rsa.RSAPublicKey,
        message: bytes,
        signature: bytes,
        salt_length: int,
    ) -> bool:
        """Verifica una firma RSA-PSS devolviendo False si no es válida.

        Args:
            public_key (rsa.RSAPublicKey): Clave pública del firmante.
            message (bytes): Mensaje original.
            signature (bytes): Firma a comprobar.
            salt_length (int): Longitud de salt PSS usada al firmar.

        Returns:
            bool: True si la firma corresponde al mensaje y la clave.

        """

        try:
            public_key.verify(signature, message, _pss(salt_length), hashes.SHA256())
        except InvalidSignature:
            return False
        return True

    def pbkdf2_sha256(
        self, password: bytes, salt: bytes, iterations: int, length: int = HASH_LEN
    ) -> bytes:
        """Deriva `length` bytes con PBKDF2-HMAC-SHA256."""

        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=length,
            salt=salt,
            iterations=iterations,
        )
        return kdf.derive(password)

    def aes_gcm_encrypt(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        """Cifra con AES-GCM; el resultado incluye la etiqueta de 16 bytes."""

        return AESGCM(key).encrypt(iv, plaintext, associated_data=None)

    def aes_gcm_decrypt(self, key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        """Descifra AES-GCM verificando la etiqueta; lanza InvalidTag si falla."""

        return AESGCM(key).decrypt(iv, ciphertext, associated_data=None)


DEFAULT_PROVIDER = CryptoProvider()


@contextmanager
def algorithm_failures(operation: str) -> Iterator[None]:
    """Traduce errores internos del backend a `AlgorithmFailureError`.

    Args:
        operation (str): Nombre de la operación para el mensaje de error.

    Returns:
        Iterator[None]: Control del bloque protegido.

    """

    try:
        yield
    except (InternalError, UnsupportedAlgorithm) as exc:
        logger.warning("Fallo del proveedor criptográfico en %s", operation)
        raise AlgorithmFailureError(f"{operation}: error del proveedor.") from exc
