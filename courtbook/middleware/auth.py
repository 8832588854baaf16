# Trusts only the identity forwarded by the auth proxy in front of the API.
# No identity header = anonymous request; routes decide whether that is allowed.

from fastapi import Request

USER_ID_HEADER = "X-User-Id"


async def auth_middleware(request: Request, call_next):
    user_id = (request.headers.get(USER_ID_HEADER) or "").strip()

    request.state.identity = {"user_id": user_id} if user_id else None

    return await call_next(request)
