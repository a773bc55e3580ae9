# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan estructuras de intercambio criptográfico."""

from enum import Enum

from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import BaseModel, ConfigDict, Field, field_validator

from cryptokit import codec
from cryptokit.config import IV_LEN, RSA_MIN_KEY_SIZE, SALT_LEN
from cryptokit.errors import AlgorithmMismatchError, MalformedEncodingError


class KeyPurpose(str, Enum):
    """Uso exclusivo al que se vincula una clave importada."""

    ENCRYPT = "encrypt"
    SIGN = "sign"


ALGORITHMS = {
    KeyPurpose.ENCRYPT: "RSA-OAEP",
    KeyPurpose.SIGN: "RSA-PSS",
}


class KeyPair(BaseModel):
    """Par de claves RSA serializadas en PEM.

    Attributes:
        public_key (str): Clave pública SPKI en PEM (alias `publicKey`).
        private_key (str): Clave privada PKCS#8 en PEM (alias `privateKey`).

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    public_key: str = Field(alias="publicKey")
    private_key: str = Field(alias="privateKey")


class KeyPairBundle(BaseModel):
    """Pares independientes para confidencialidad y autenticidad.

    Attributes:
        encryption (KeyPair): Claves RSA-OAEP.
        signing (KeyPair): Claves RSA-PSS.

    """

    model_config = ConfigDict(frozen=True)

    encryption: KeyPair
    signing: KeyPair


class CipherPayload(BaseModel):
    """Representa el blob `salt || iv || ciphertext` del cifrado con contraseña.

    Attributes:
        salt (bytes): Salt PBKDF2 de 16 bytes.
        iv (bytes): Vector de inicialización AES-GCM de 12 bytes.
        ciphertext (bytes): Datos cifrados con la etiqueta de 16 bytes al final.

    """

    model_config = ConfigDict(frozen=True)

    salt: bytes = Field(min_length=SALT_LEN, max_length=SALT_LEN)
    iv: bytes = Field(min_length=IV_LEN, max_length=IV_LEN)
    ciphertext: bytes

    def to_bytes(self) -> bytes:
        """Concatena `salt || iv || ciphertext`."""

        return self.salt + self.iv + self.ciphertext

    def to_base64(self) -> str:
        """Serializa el payload en Base64 estándar."""

        return codec.base64_encode(self.to_bytes())

    @classmethod
    def from_bytes(cls, data: bytes) -> "CipherPayload":
        """Separa el blob en sus campos cortando en los offsets 16 y 28.

        Args:
            data (bytes): Blob binario ya decodificado.

        Returns:
            CipherPayload: Payload con sus tres componentes.

        Raises:
            MalformedEncodingError: Si el blob no alcanza salt e IV completos.

        """

        header_len = SALT_LEN + IV_LEN
        if len(data) < header_len:
            raise MalformedEncodingError(
                f"Payload demasiado corto: {len(data)} bytes, mínimo {header_len}."
            )
        return cls(
            salt=data[:SALT_LEN],
            iv=data[SALT_LEN:header_len],
            ciphertext=data[header_len:],
        )

    @classmethod
    def from_base64(cls, value: str) -> "CipherPayload":
        """Decodifica Base64 y separa los campos; ver `from_bytes`."""

        return cls.from_bytes(codec.base64_decode(value))


def _check_key_size(key_size: int) -> None:
    """Rechaza claves RSA demasiado pequeñas para OAEP y PSS con SHA-256."""

    if key_size < RSA_MIN_KEY_SIZE:
        raise AlgorithmMismatchError(
            f"Clave RSA de {key_size} bits; el mínimo es {RSA_MIN_KEY_SIZE}."
        )


class _TaggedKey(BaseModel):
    """Campos comunes de una clave vinculada a un único propósito."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    purpose: KeyPurpose
    algorithm: str
    hash_name: str = "SHA-256"

    @field_validator("key", check_fields=False)
    @classmethod
    def _key_large_enough(cls, key):
        _check_key_size(key.key_size)
        return key

    def require(self, purpose: KeyPurpose) -> None:
        """Falla si la clave se usa con un propósito distinto al etiquetado.

        Args:
            purpose (KeyPurpose): Propósito que exige la operación.

        Raises:
            AlgorithmMismatchError: Si los propósitos no coinciden.

        """

        if self.purpose is not purpose:
            raise AlgorithmMismatchError(
                f"Clave {self.algorithm} etiquetada para '{self.purpose.value}', "
                f"no para '{purpose.value}'."
            )


class TaggedPublicKey(_TaggedKey):
    key: rsa.RSAPublicKey

    @classmethod
    def bind(cls, key: rsa.RSAPublicKey, purpose: KeyPurpose) -> "TaggedPublicKey":
        """Etiqueta una clave pública con el algoritmo de su propósito."""

        return cls(key=key, purpose=purpose, algorithm=ALGORITHMS[purpose])

    @property
    def key_size(self) -> int:
        """Tamaño del módulo RSA en bits."""

        return self.key.key_size


class TaggedPrivateKey(_TaggedKey):
    key: rsa.RSAPrivateKey

    @classmethod
    def bind(cls, key: rsa.RSAPrivateKey, purpose: KeyPurpose) -> "TaggedPrivateKey":
        """Etiqueta una clave privada con el algoritmo de su propósito."""

        return cls(key=key, purpose=purpose, algorithm=ALGORITHMS[purpose])

    @property
    def key_size(self) -> int:
        """Tamaño del módulo RSA en bits."""

        return self.key.key_size
