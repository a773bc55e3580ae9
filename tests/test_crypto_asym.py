# --------------------------------------------------------------
# File: test_crypto_asym.py
# Description: Pruebas del cifrado asimétrico RSA-OAEP.
# --------------------------------------------------------------

import os

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding

from cryptokit.codec import base64_decode, base64_encode
from cryptokit.crypto_asym import AsymmetricCipher, decrypt, encrypt, max_plaintext_length
from cryptokit.errors import (
    AlgorithmMismatchError,
    DecryptionFailedError,
    MalformedEncodingError,
    PayloadTooLargeError,
)
from cryptokit.keys import import_public_key
from cryptokit.models import KeyPurpose


def test_hello_world_roundtrip(bundle):
    """Comprueba que "Hello world" se recupere con la clave privada del par.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.

    Returns:
        None: Las aserciones comparan el mensaje recuperado.
    """
    ct = encrypt(bundle.encryption.public_key, b"Hello world")
    assert len(base64_decode(ct)) == 256
    assert decrypt(bundle.encryption.private_key, ct) == b"Hello world"


@pytest.mark.parametrize("length", [0, 1, 64, 189, 190])
def test_roundtrip_up_to_limit(bundle, length):
    """Valida el ciclo completo para longitudes hasta el máximo de 190 bytes.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.
        length (int): Tamaño del mensaje.

    Returns:
        None: Las aserciones comparan claro y descifrado.
    """
    message = os.urandom(length)
    ct = encrypt(bundle.encryption.public_key, message)
    assert decrypt(bundle.encryption.private_key, ct) == message


def test_payload_too_large(bundle):
    """Garantiza que 191 bytes superen el límite de RSA-2048/OAEP/SHA-256.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.

    Returns:
        None: Se espera `PayloadTooLargeError` con el límite correcto.
    """
    assert max_plaintext_length(2048) == 190
    with pytest.raises(PayloadTooLargeError) as info:
        encrypt(bundle.encryption.public_key, os.urandom(191))
    assert info.value.limit == 190
    assert info.value.size == 191


def test_ciphertexts_are_randomized(bundle):
    """Comprueba que OAEP produzca ciphertexts distintos para el mismo mensaje.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.

    Returns:
        None: Las aserciones comparan ambos resultados.
    """
    pem = bundle.encryption.public_key
    assert encrypt(pem, b"same") != encrypt(pem, b"same")


def test_interoperates_with_plain_oaep(bundle):
    """Verifica que se acepte un ciphertext OAEP/SHA-256 producido externamente.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.

    Returns:
        None: Las aserciones comparan el mensaje recuperado.
    """
    public = serialization.load_pem_public_key(bundle.encryption.public_key.encode())
    raw = public.encrypt(
        b"interop",
        padding.OAEP(
            mgf=padding.MGF1(algorithm=hashes.SHA256()),
            algorithm=hashes.SHA256(),
            label=None,
        ),
    )
    assert decrypt(bundle.encryption.private_key, base64_encode(raw)) == b"interop"


def test_decrypt_with_other_key_fails(bundle, other_bundle):
    """Comprueba que otra clave privada produzca un fallo indiferenciado.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.
        other_bundle (KeyPairBundle): Segundo juego de claves.

    Returns:
        None: Se espera `DecryptionFailedError`.
    """
    ct = encrypt(bundle.encryption.public_key, b"secret")
    with pytest.raises(DecryptionFailedError):
        decrypt(other_bundle.encryption.private_key, ct)


def test_decrypt_rejects_tampered_and_truncated(bundle):
    """Garantiza que ciphertexts alterados o truncados fallen igual.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.

    Returns:
        None: Se espera `DecryptionFailedError` en ambos casos.
    """
    raw = base64_decode(encrypt(bundle.encryption.public_key, b"secret"))
    tampered = bytes([raw[0] ^ 1]) + raw[1:]
    with pytest.raises(DecryptionFailedError):
        decrypt(bundle.encryption.private_key, base64_encode(tampered))
    with pytest.raises(DecryptionFailedError):
        decrypt(bundle.encryption.private_key, base64_encode(raw[:-1]))


def test_decrypt_rejects_bad_base64(bundle):
    """Comprueba que un Base64 inválido se informe como malformado.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.

    Returns:
        None: Se espera `MalformedEncodingError`.
    """
    with pytest.raises(MalformedEncodingError):
        decrypt(bundle.encryption.private_key, "not base64!")


def test_signing_tagged_key_cannot_encrypt(bundle):
    """Verifica que una clave etiquetada para firma no pueda cifrar.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.

    Returns:
        None: Se espera `AlgorithmMismatchError`.
    """
    tagged = import_public_key(bundle.signing.public_key, KeyPurpose.SIGN)
    with pytest.raises(AlgorithmMismatchError):
        AsymmetricCipher().encrypt(tagged, b"x")


def test_accepts_pre_imported_keys(bundle):
    """Comprueba que el servicio acepte claves ya etiquetadas para cifrado.

    Args:
        bundle (KeyPairBundle): Claves generadas para la sesión.

    Returns:
        None: Las aserciones comparan el mensaje recuperado.
    """
    cipher = AsymmetricCipher()
    public = cipher.keys.import_public_key(bundle.encryption.public_key, KeyPurpose.ENCRYPT)
    private = cipher.keys.import_private_key(bundle.encryption.private_key, KeyPurpose.ENCRYPT)
    assert cipher.decrypt(private, cipher.encrypt(public, b"tagged")) == b"tagged"
