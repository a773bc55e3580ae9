# --------------------------------------------------------------
# File: services.py
# Description: Fachada de texto compatible con el helper Web Crypto del navegador.
# --------------------------------------------------------------
"""Funciones de alto nivel que trabajan con cadenas UTF-8.

Producen y consumen exactamente las mismas cadenas que el helper del
navegador: PEM para las claves y Base64 para ciphertexts, payloads y firmas.
"""

from typing import Optional, Union

from cryptokit.crypto_asym import AsymmetricCipher
from cryptokit.crypto_sign import Signer
from cryptokit.crypto_sym import PasswordCipher
from cryptokit.keys import KeyManager, PrivateKeyLike, PublicKeyLike
from cryptokit.models import KeyPairBundle
from cryptokit.provider import CryptoProvider

__all__ = [
    "generate_key_pair",
    "encrypt_with_public_key",
    "decrypt_with_private_key",
    "encrypt_with_password",
    "decrypt_with_password",
    "sign_message",
    "verify_signature",
]


def _to_text(data: bytes) -> str:
    """Decodifica UTF-8 con U+FFFD en bytes inválidos, como `TextDecoder`."""

    return data.decode("utf-8", errors="replace")


def generate_key_pair(provider: Optional[CryptoProvider] = None) -> KeyPairBundle:
    """Genera los pares de cifrado y firma en PEM.

    Args:
        provider (Optional[CryptoProvider]): Proveedor alternativo.

    Returns:
        KeyPairBundle: `model_dump(by_alias=True)` produce el JSON
        `{encryption: {publicKey, privateKey}, signing: {...}}`.
    """

    return KeyManager(provider).generate_key_pair_bundle()


def encrypt_with_public_key(
    public_key: PublicKeyLike, message: str, provider: Optional[CryptoProvider] = None
) -> str:
    """Cifra texto con RSA-OAEP y devuelve Base64."""

    return AsymmetricCipher(provider).encrypt(public_key, message.encode("utf-8"))


def decrypt_with_private_key(
    private_key: PrivateKeyLike,
    ciphertext_b64: str,
    provider: Optional[CryptoProvider] = None,
) -> str:
    """Descifra un ciphertext RSA-OAEP en Base64 y devuelve el texto."""

    return _to_text(AsymmetricCipher(provider).decrypt(private_key, ciphertext_b64))


def encrypt_with_password(
    password: Union[str, bytes],
    plaintext: str,
    provider: Optional[CryptoProvider] = None,
) -> str:
    """Cifra texto con AES-GCM bajo una contraseña."""

    return PasswordCipher(provider).encrypt(password, plaintext.encode("utf-8"))


def decrypt_with_password(
    password: Union[str, bytes],
    payload: str,
    provider: Optional[CryptoProvider] = None,
) -> str:
    """Descifra un `CipherPayload` y devuelve el texto original."""

    return _to_text(PasswordCipher(provider).decrypt(password, payload))


def sign_message(
    private_key: PrivateKeyLike, message: str, provider: Optional[CryptoProvider] = None
) -> str:
    """Firma texto con RSA-PSS y devuelve la firma en Base64."""

    return Signer(provider).sign(private_key, message.encode("utf-8"))


def verify_signature(
    public_key: PublicKeyLike,
    message: str,
    signature_b64: str,
    provider: Optional[CryptoProvider] = None,
) -> bool:
    """Comprueba la firma RSA-PSS de un texto."""

    return Signer(provider).verify(public_key, message.encode("utf-8"), signature_b64)
