"""Mapping of service outcomes onto HTTP responses."""

from fastapi import HTTPException

from src.saas_admin.services.outcome import Failure, Success


def unwrap[T](outcome: Success[T] | Failure) -> T:
    """Return the success payload or raise the matching HTTPException.

    Only data and errors pass through here. Redirects are answered with an
    explicit ``RedirectResponse`` by whoever decides on them.
    """
    if isinstance(outcome, Success):
        return outcome.data
    raise HTTPException(status_code=outcome.kind.status_code, detail=outcome.reason)
