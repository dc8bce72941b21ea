"""
Authentication Module
=====================

Caller-credential extraction for registry routes.

Signature verification happens in the host environment; by the time a
request reaches a service the credential is trusted as "who invoked
this". Authorization (credential -> registered identity) is decided by
the registry itself.

Usage:
    from shared.auth import CurrentCaller

    @router.delete("/assets/{index}")
    async def delete(index: int, caller: CurrentCaller):
        return await service.soft_delete_asset(caller.credential, index)
"""

from shared.auth.dependencies import Caller, CurrentCaller, get_caller

__all__ = [
    "Caller",
    "CurrentCaller",
    "get_caller",
]
