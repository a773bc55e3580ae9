# --------------------------------------------------------------
# File: keys.py
# Description: Generación, exportación e importación de pares RSA.
# --------------------------------------------------------------
"""Gestor de claves RSA para cifrado (OAEP) y firma (PSS).

Cada clave importada queda etiquetada con un único `KeyPurpose`, de modo que
una clave de cifrado nunca puede usarse para firmar ni al revés.
"""

import logging
from typing import Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from cryptokit.codec import KeyKind, pem_decode, pem_encode
from cryptokit.config import RSA_KEY_SIZE
from cryptokit.errors import AlgorithmMismatchError, MalformedEncodingError
from cryptokit.models import (
    KeyPair,
    KeyPairBundle,
    KeyPurpose,
    TaggedPrivateKey,
    TaggedPublicKey,
)
from cryptokit.provider import DEFAULT_PROVIDER, CryptoProvider, algorithm_failures

logger = logging.getLogger(__name__)

PublicKeyLike = Union[str, bytes, TaggedPublicKey]
PrivateKeyLike = Union[str, bytes, TaggedPrivateKey]


def export_key_pair(private_key: rsa.RSAPrivateKey) -> KeyPair:
    """Serializa una clave privada RSA y su pública asociada en PEM.

    Args:
        private_key (rsa.RSAPrivateKey): Clave privada a exportar.

    Returns:
        KeyPair: Pública en SPKI y privada en PKCS#8, ambas en PEM.

    """

    private_der = private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_der = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return KeyPair(
        public_key=pem_encode(public_der, KeyKind.PUBLIC),
        private_key=pem_encode(private_der, KeyKind.PRIVATE),
    )


class KeyManager:
    """Genera e importa claves usando el proveedor inyectado."""

    def __init__(self, provider: Optional[CryptoProvider] = None) -> None:
        self.provider = provider or DEFAULT_PROVIDER

    def generate_key_pair_bundle(self) -> KeyPairBundle:
        """Genera dos pares RSA-2048 independientes: cifrado y firma.

        Returns:
            KeyPairBundle: Pares `encryption` (OAEP) y `signing` (PSS) en PEM.

        """

        with algorithm_failures("generate_key_pair_bundle"):
            encryption_key = self.provider.generate_rsa_key(RSA_KEY_SIZE)
            signing_key = self.provider.generate_rsa_key(RSA_KEY_SIZE)
        logger.debug("Generados dos pares RSA de %d bits", RSA_KEY_SIZE)
        return KeyPairBundle(
            encryption=export_key_pair(encryption_key),
            signing=export_key_pair(signing_key),
        )

    def import_public_key(
        self, pem: Union[str, bytes], purpose: KeyPurpose
    ) -> TaggedPublicKey:
        """Importa una clave pública SPKI y la vincula a un propósito.

        Args:
            pem (Union[str, bytes]): Clave pública en PEM.
            purpose (KeyPurpose): Uso exclusivo de la clave.

        Returns:
            TaggedPublicKey: Clave RSA etiquetada.

        Raises:
            MalformedEncodingError: Si el PEM o el DER no son válidos o el DER
                no es la codificación canónica del formato esperado.
            AlgorithmMismatchError: Si la clave no es RSA o es demasiado pequeña.

        """

        der = pem_decode(pem)
        try:
            key = serialization.load_der_public_key(der)
        except ValueError as exc:
            raise MalformedEncodingError("DER SPKI inválido.") from exc
        except UnsupportedAlgorithm as exc:
            raise AlgorithmMismatchError("Algoritmo de clave no soportado.") from exc
        if not isinstance(key, rsa.RSAPublicKey):
            raise AlgorithmMismatchError(
                f"Se esperaba una clave RSA, no {type(key).__name__}."
            )
        canonical = key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        if canonical != der:
            raise MalformedEncodingError("La clave pública no está en formato SPKI.")
        return TaggedPublicKey.bind(key, purpose)

    def import_private_key(
        self, pem: Union[str, bytes], purpose: KeyPurpose
    ) -> TaggedPrivateKey:
        """Importa una clave privada PKCS#8 y la vincula a un propósito.

        Args:
            pem (Union[str, bytes]): Clave privada en PEM, sin cifrar.
            purpose (KeyPurpose): Uso exclusivo de la clave.

        Returns:
            TaggedPrivateKey: Clave RSA etiquetada.

        Raises:
            MalformedEncodingError: Si el PEM o el DER no son válidos o el DER
                no es la codificación canónica del formato esperado.
            AlgorithmMismatchError: Si la clave no es RSA o es demasiado pequeña.

        """

        der = pem_decode(pem)
        try:
            key = serialization.load_der_private_key(der, password=None)
        except (ValueError, TypeError) as exc:
            raise MalformedEncodingError("DER PKCS#8 inválido.") from exc
        except UnsupportedAlgorithm as exc:
            raise AlgorithmMismatchError("Algoritmo de clave no soportado.") from exc
        if not isinstance(key, rsa.RSAPrivateKey):
            raise AlgorithmMismatchError(
                f"Se esperaba una clave RSA, no {type(key).__name__}."
            )
        canonical = key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
        if canonical != der:
            raise MalformedEncodingError("La clave privada no está en formato PKCS#8.")
        return TaggedPrivateKey.bind(key, purpose)

    def resolve_public_key(
        self, key: PublicKeyLike, purpose: KeyPurpose
    ) -> TaggedPublicKey:
        """Acepta PEM o una clave ya etiquetada y comprueba su propósito."""

        if isinstance(key, TaggedPublicKey):
            key.require(purpose)
            return key
        if isinstance(key, TaggedPrivateKey):
            raise AlgorithmMismatchError("Se esperaba una clave pública.")
        return self.import_public_key(key, purpose)

    def resolve_private_key(
        self, key: PrivateKeyLike, purpose: KeyPurpose
    ) -> TaggedPrivateKey:
        """Acepta PEM o una clave ya etiquetada y comprueba su propósito."""

        if isinstance(key, TaggedPrivateKey):
            key.require(purpose)
            return key
        if isinstance(key, TaggedPublicKey):
            raise AlgorithmMismatchError("Se esperaba una clave privada.")
        return self.import_private_key(key, purpose)


_DEFAULT_MANAGER = KeyManager()


def generate_key_pair_bundle() -> KeyPairBundle:
    """Genera los pares de cifrado y firma con el proveedor por defecto."""

    return _DEFAULT_MANAGER.generate_key_pair_bundle()


def import_public_key(pem: Union[str, bytes], purpose: KeyPurpose) -> TaggedPublicKey:
    """Importa una clave pública SPKI; ver `KeyManager.import_public_key`."""

    return _DEFAULT_MANAGER.import_public_key(pem, purpose)


def import_private_key(
    pem: Union[str, bytes], purpose: KeyPurpose
) -> TaggedPrivateKey:
    """Importa una clave privada PKCS#8; ver `KeyManager.import_private_key`."""

    return _DEFAULT_MANAGER.import_private_key(pem, purpose)
