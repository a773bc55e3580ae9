# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones de la capa criptográfica.
# --------------------------------------------------------------
"""Excepciones públicas lanzadas por los servicios de `cryptokit`.

Los fallos de verificación (`DecryptionFailedError`, `AuthenticationFailedError`)
no distinguen la causa concreta para no ofrecer oráculos de padding ni de
contraseña.
"""

__all__ = [
    "CryptoKitError",
    "MalformedEncodingError",
    "AlgorithmMismatchError",
    "PayloadTooLargeError",
    "DecryptionFailedError",
    "AuthenticationFailedError",
    "AlgorithmFailureError",
]


class CryptoKitError(Exception):
    """Raíz de todas las excepciones del paquete."""


class MalformedEncodingError(CryptoKitError, ValueError):
    """Base64, PEM o DER con estructura inválida."""


class AlgorithmMismatchError(CryptoKitError):
    """Clave usada con una operación o propósito distinto del etiquetado."""


class PayloadTooLargeError(CryptoKitError, ValueError):
    """El mensaje supera el límite de RSA-OAEP para el módulo de la clave.

    Attributes:
        size (int): Longitud del mensaje recibido en bytes.
        limit (int): Longitud máxima admitida por la clave.
    """

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"El mensaje ocupa {size} bytes y el máximo para esta clave es {limit}."
        )
        self.size = size
        self.limit = limit


class DecryptionFailedError(CryptoKitError):
    """Descifrado RSA fallido (tamaño, clave o padding)."""


class AuthenticationFailedError(CryptoKitError):
    """Etiqueta AES-GCM inválida: contraseña incorrecta o datos alterados."""


class AlgorithmFailureError(CryptoKitError):
    """Error inesperado del proveedor criptográfico."""
