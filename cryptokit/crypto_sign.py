# --------------------------------------------------------------
# File: crypto_sign.py
# Description: Funciones para firmar y verificar mensajes con RSA-PSS.
# --------------------------------------------------------------
"""Firmas RSA-PSS con SHA-256, MGF1-SHA-256 y salt de 32 bytes."""

import logging
from typing import Optional

from cryptokit.codec import base64_decode, base64_encode
from cryptokit.config import PSS_SALT_LENGTH
from cryptokit.errors import AlgorithmMismatchError
from cryptokit.keys import KeyManager, PrivateKeyLike, PublicKeyLike
from cryptokit.models import KeyPurpose
from cryptokit.provider import DEFAULT_PROVIDER, CryptoProvider, algorithm_failures

logger = logging.getLogger(__name__)


class Signer:
    """Firma con la clave privada y verifica con la pública del par de firma."""

    def __init__(self, provider: Optional[CryptoProvider] = None) -> None:
        self.provider = provider or DEFAULT_PROVIDER
        self.keys = KeyManager(self.provider)

    def sign(self, private_key: PrivateKeyLike, message: bytes) -> str:
        """Firma un mensaje con RSA-PSS.

        Args:
            private_key (PrivateKeyLike): PEM PKCS#8 o clave etiquetada `SIGN`.
            message (bytes): Mensaje a firmar.

        Returns:
            str: Firma en Base64.

        Raises:
            AlgorithmMismatchError: Si la clave está etiquetada para cifrado o
                no admite los parámetros PSS.

        """

        tagged = self.keys.resolve_private_key(private_key, KeyPurpose.SIGN)
        try:
            with algorithm_failures("rsa_pss_sign"):
                signature = self.provider.rsa_pss_sign(
                    tagged.key, message, PSS_SALT_LENGTH
                )
        except ValueError as exc:
            raise AlgorithmMismatchError(
                "La clave no admite RSA-PSS con SHA-256 y salt de 32 bytes."
            ) from exc
        return base64_encode(signature)

    def verify(
        self, public_key: PublicKeyLike, message: bytes, signature_b64: str
    ) -> bool:
        """Verifica una firma RSA-PSS sin lanzar excepción si no coincide.

        Args:
            public_key (PublicKeyLike): PEM SPKI o clave etiquetada `SIGN`.
            message (bytes): Mensaje original.
            signature_b64 (str): Firma en Base64.

        Returns:
            bool: True si la firma es válida para el mensaje y la clave.

        Raises:
            MalformedEncodingError: Si la clave o la firma no están bien codificadas.
            AlgorithmMismatchError: Si la clave está etiquetada para cifrado.

        """

        tagged = self.keys.resolve_public_key(public_key, KeyPurpose.SIGN)
        signature = base64_decode(signature_b64)
        with algorithm_failures("rsa_pss_verify"):
            valid = self.provider.rsa_pss_verify(
                tagged.key, message, signature, PSS_SALT_LENGTH
            )
        if not valid:
            logger.debug("RSA-PSS: firma no válida")
        return valid


_DEFAULT_SIGNER = Signer()


def sign(private_key: PrivateKeyLike, message: bytes) -> str:
    """Firma con el proveedor por defecto; ver `Signer.sign`."""

    return _DEFAULT_SIGNER.sign(private_key, message)


def verify(public_key: PublicKeyLike, message: bytes, signature_b64: str) -> bool:
    """Verifica con el proveedor por defecto; ver `Signer.verify`."""

    return _DEFAULT_SIGNER.verify(public_key, message, signature_b64)
