"""Request authentication for the Ordering API.

Resolves the `Authorization: Bearer <token>` header through the configured
principal resolver. Missing or unknown credentials are rejected with 401.
"""

from fastapi import Depends, Header, HTTPException

from ordering.access import Principal, get_resolver
from ordering.utils.logging import add_context


async def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    # Runs on the request's task so the bound log context reaches the route

    scheme, _, credential = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not credential.strip():
        raise HTTPException(status_code=401, detail="Not authorized, no token")

    principal = get_resolver().resolve(credential.strip())
    if principal is None:
        raise HTTPException(status_code=401, detail="Not authorized, token failed")

    add_context(customer_id=principal.customer_id)
    return principal


def admin_principal(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=403, detail="Not authorized as an admin")
    return principal
