# --------------------------------------------------------------
# File: codec.py
# Description: Conversión binario/texto en Base64 y enmarcado PEM.
# --------------------------------------------------------------
"""Codificación Base64 estándar y PEM alrededor de material DER."""

import base64
import binascii
import re
from enum import Enum
from typing import Union

from cryptokit.config import PEM_LINE_LENGTH
from cryptokit.errors import MalformedEncodingError

__all__ = ["KeyKind", "base64_encode", "base64_decode", "pem_encode", "pem_decode"]

_PEM_BEGIN = re.compile(r"-----BEGIN [^-]+-----")
_PEM_END = re.compile(r"-----END [^-]+-----")
_WHITESPACE = re.compile(r"\s+")


class KeyKind(str, Enum):
    """Tipo de clave que determina la cabecera PEM."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


def base64_encode(data: bytes) -> str:
    """Codifica bytes en Base64 estándar con relleno."""

    return base64.b64encode(data).decode("ascii")


def base64_decode(value: Union[str, bytes]) -> bytes:
    """Decodifica Base64 estándar rechazando caracteres fuera del alfabeto.

    Args:
        value (Union[str, bytes]): Texto Base64 con relleno.

    Returns:
        bytes: Datos binarios originales.

    Raises:
        MalformedEncodingError: Si el texto no es Base64 válido.

    """

    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise MalformedEncodingError("Base64 inválido.") from exc


def pem_encode(der: bytes, kind: KeyKind) -> str:
    """Envuelve material DER en PEM con líneas de 64 caracteres.

    Args:
        der (bytes): Estructura DER (SPKI o PKCS#8).
        kind (KeyKind): Tipo de clave para la cabecera y el pie.

    Returns:
        str: Texto PEM terminado en salto de línea.

    """

    body = base64_encode(der)
    lines = "".join(
        body[i : i + PEM_LINE_LENGTH] + "\n"
        for i in range(0, len(body), PEM_LINE_LENGTH)
    )
    label = KeyKind(kind).value
    return f"-----BEGIN {label} KEY-----\n{lines}-----END {label} KEY-----\n"


def pem_decode(pem: Union[str, bytes]) -> bytes:
    """Extrae el DER de un texto PEM tolerando cabeceras y espacios variables.

    Args:
        pem (Union[str, bytes]): Texto PEM de clave pública o privada.

    Returns:
        bytes: Material DER decodificado.

    Raises:
        MalformedEncodingError: Si no queda contenido Base64 o no es válido.

    """

    if not isinstance(pem, (str, bytes)):
        raise MalformedEncodingError(
            f"Se esperaba PEM como str o bytes, no {type(pem).__name__}."
        )
    if isinstance(pem, bytes):
        try:
            pem = pem.decode("ascii")
        except UnicodeDecodeError as exc:
            raise MalformedEncodingError("PEM con caracteres no ASCII.") from exc

    stripped, framed = _PEM_BEGIN.subn("", pem, count=1)
    stripped = _PEM_END.sub("", stripped, count=1)
    body = _WHITESPACE.sub("", stripped)
    # Un marco vacío codifica cero bytes; sin marco ni contenido no hay PEM.
    if not body and not framed:
        raise MalformedEncodingError("El PEM no contiene datos Base64.")
    return base64_decode(body)
