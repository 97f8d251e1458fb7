"""SeedManager — deterministic, HMAC-derived RNG per session.

Seeds are derived via HMAC-SHA256 from the server seed and the session id,
so a fixed server seed reproduces every session's ship placement and card
shuffle regardless of how many other sessions exist.
"""

import hashlib
import hmac
import random
import secrets


class SeedManager:
    """Produces isolated Random instances for each session.

    With no server seed, every session gets a fresh OS-random seed.
    """

    def __init__(self, server_seed: int | None = None):
        self._server_seed = server_seed

    def get_session_seed(self, session_id: str) -> int:
        """Derive a session seed via HMAC. Same inputs always produce the same seed."""
        if self._server_seed is None:
            return secrets.randbits(64)
        key = self._server_seed.to_bytes(8, byteorder="big", signed=True)
        msg = f"session:{session_id}".encode("utf-8")
        digest = hmac.new(key, msg, hashlib.sha256).digest()
        return int.from_bytes(digest[:8], byteorder="big")

    def get_rng(self, session_id: str) -> random.Random:
        """Return an isolated Random instance. Never touches global state."""
        return random.Random(self.get_session_seed(session_id))
