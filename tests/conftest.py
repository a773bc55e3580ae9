# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas: claves generadas, proveedor con semilla y entorno.
# --------------------------------------------------------------

import random
from typing import Iterator

import pytest

from cryptokit.keys import generate_key_pair_bundle
from cryptokit.models import KeyPairBundle
from cryptokit.provider import CryptoProvider


class SeededProvider(CryptoProvider):
    """Proveedor determinista para pruebas: solo sustituye la aleatoriedad."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed)

    def random_bytes(self, length: int) -> bytes:
        return bytes(self._rng.getrandbits(8) for _ in range(length))


@pytest.fixture(scope="session")
def bundle() -> KeyPairBundle:
    """Genera una única vez los pares RSA usados por toda la sesión.

    Returns:
        KeyPairBundle: Pares de cifrado y firma en PEM.
    """
    return generate_key_pair_bundle()


@pytest.fixture(scope="session")
def other_bundle() -> KeyPairBundle:
    """Segundo juego de claves para comprobar rechazos con otra clave."""
    return generate_key_pair_bundle()


@pytest.fixture
def seeded_provider() -> SeededProvider:
    return SeededProvider(seed=1234)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch) -> Iterator[None]:
    """Elimina la configuración de entorno heredada en cada prueba.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    monkeypatch.delenv("CRYPTOKIT_LOG_LEVEL", raising=False)
    yield
