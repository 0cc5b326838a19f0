"""Password hashing for user credentials.

Passwords are stored as ``pbkdf2_<algorithm>$<iterations>$<salt hex>$<hash hex>``
so every stored value carries the parameters needed to verify it, even after
the configured iteration count changes.
"""

import hashlib
import hmac
import secrets

from src.app.runtime.config.config_data import PasswordHashingConfig
from src.app.runtime.context import get_config

_SCHEME_PREFIX = "pbkdf2_"
_SUPPORTED_ALGORITHMS = frozenset({"sha256", "sha512"})


class PasswordHasher:
    """PBKDF2-HMAC password hasher."""

    def __init__(self, config: PasswordHashingConfig | None = None):
        self._config = config or get_config().security.password_hashing

    def hash(self, password: str) -> str:
        """Hash a password with a freshly generated random salt.

        Args:
            password: The plain text password

        Returns:
            Encoded hash containing algorithm, iterations, salt and digest
        """
        salt = secrets.token_bytes(self._config.salt_bytes)
        digest = hashlib.pbkdf2_hmac(
            self._config.algorithm,
            password.encode("utf-8"),
            salt,
            self._config.iterations,
        )
        return (
            f"{_SCHEME_PREFIX}{self._config.algorithm}"
            f"${self._config.iterations}${salt.hex()}${digest.hex()}"
        )

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plain password against an encoded hash.

        A malformed or foreign hash never verifies.
        """
        try:
            scheme, iterations, salt_hex, digest_hex = hashed.split("$")
            algorithm = scheme.removeprefix(_SCHEME_PREFIX)
            if scheme == algorithm or algorithm not in _SUPPORTED_ALGORITHMS:
                return False
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(digest_hex)
            rounds = int(iterations)
        except ValueError:
            return False
        if rounds < 1:
            return False

        candidate = hashlib.pbkdf2_hmac(
            algorithm, password.encode("utf-8"), salt, rounds
        )
        return hmac.compare_digest(candidate, expected)

