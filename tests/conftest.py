"""
Shared fixtures for the identity vault test suite.
"""
import sys
import pathlib
import pytest

# Make tests/helpers importable from every test directory
TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import mk_identity, mk_seeded_rng, mk_signing_key, mk_vault  # noqa: E402,F401


@pytest.fixture(autouse=True)
def _restore_default_config():
    """Reset the process-wide vault config after each test."""
    from identity_vault.runtime.config import set_default_config

    yield
    set_default_config(None)


@pytest.fixture
def seeded_rng():
    """Provide a deterministic randomness source."""
    return mk_seeded_rng(42)


@pytest.fixture
def signing_key():
    """Provide a deterministic secret-bearing signing key."""
    return mk_signing_key(seed=7)


@pytest.fixture
def public_signing_key(signing_key):
    """Provide the public-only counterpart of signing_key."""
    from identity_vault.crypto.signing_key import SigningKey

    return SigningKey.from_public_key(signing_key.get_public_key())


@pytest.fixture
def alice():
    return mk_identity("Alice", "Smith", comment="Test Comment")


@pytest.fixture
def bob():
    return mk_identity("Bob", "Johnson")


@pytest.fixture
def vault():
    """Provide a vault with two signing keys and no secondary identities."""
    return mk_vault("Alice", key_seeds=(1, 2))
