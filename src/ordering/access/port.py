"""Principal resolution port (abstract interface).

Authentication lives outside the ordering context. Whatever issues the
credentials only has to turn an opaque bearer token into a customer id and an
admin flag; the ordering API trusts that answer as given.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of an API request."""

    customer_id: str
    is_admin: bool = False


class PrincipalResolver(ABC):
    @abstractmethod
    def resolve(self, credential: str) -> Principal | None:
        """Return the principal for `credential`, or None when it is unknown."""
        ...
