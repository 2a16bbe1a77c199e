"""Static token resolver for development, tests and single-tenant deployments.

Tokens are registered at runtime or loaded from ORDERING_ACCESS_TOKENS, a JSON
object mapping each token to `{"customer_id": ..., "is_admin": ...}`.
"""

import json
import os

from ordering.access.port import Principal, PrincipalResolver


class StaticTokenResolver(PrincipalResolver):
    def __init__(self, tokens: dict[str, Principal] | None = None) -> None:
        self.tokens: dict[str, Principal] = dict(tokens or {})

    @classmethod
    def from_env(cls) -> "StaticTokenResolver":
        raw = os.environ.get("ORDERING_ACCESS_TOKENS")
        if not raw:
            return cls()

        entries = json.loads(raw)
        return cls(
            {
                token: Principal(customer_id=str(entry["customer_id"]), is_admin=bool(entry.get("is_admin", False)))
                for token, entry in entries.items()
            }
        )

    def register(self, token: str, customer_id: str, is_admin: bool = False) -> Principal:
        principal = Principal(customer_id=str(customer_id), is_admin=is_admin)
        self.tokens[token] = principal
        return principal

    def revoke(self, token: str) -> None:
        self.tokens.pop(token, None)

    def resolve(self, credential: str) -> Principal | None:
        return self.tokens.get(credential)
