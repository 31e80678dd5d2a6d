"""
Secret generation — passwords and tokens for generated env files.

Backed by the operating system's CSPRNG through ``secrets``. There is no
seed parameter and no fallback generator: if the secure source cannot be
used the call raises EntropyUnavailable.

Tests substitute a subclass that overrides ``token_bytes``.
"""

from __future__ import annotations

import base64
import logging
import secrets

from ignite.core.errors import EntropyUnavailable

logger = logging.getLogger(__name__)

# Generation policies understood by the env merger
POLICY_LITERAL = "literal"
POLICY_HEX32 = "hex32"          # 32 random bytes → 64 hex chars
POLICY_BASE64_12 = "base64-12"  # 12 random bytes → 16 base64 chars

POLICIES = (POLICY_LITERAL, POLICY_HEX32, POLICY_BASE64_12)


class SecretGenerator:
    """Cryptographically secure random strings."""

    def token_bytes(self, byte_len: int) -> bytes:
        if byte_len <= 0:
            raise ValueError(f"byte_len must be positive, got {byte_len}")
        try:
            return secrets.token_bytes(byte_len)
        except (NotImplementedError, OSError) as e:
            logger.error("Secure random source unavailable: %s", e)
            raise EntropyUnavailable(f"Secure random source unavailable: {e}") from e

    def random_hex(self, byte_len: int) -> str:
        return self.token_bytes(byte_len).hex()

    def random_base64(self, byte_len: int) -> str:
        return base64.b64encode(self.token_bytes(byte_len)).decode("ascii")

    def generate(self, policy: str) -> str:
        """Produce a value for a generation policy."""
        if policy == POLICY_HEX32:
            return self.random_hex(32)
        if policy == POLICY_BASE64_12:
            return self.random_base64(12)
        raise ValueError(f"Policy '{policy}' does not generate values")
