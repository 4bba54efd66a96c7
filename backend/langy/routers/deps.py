from fastapi import HTTPException, Request, status

from langy.config import settings


async def get_owner_id(request: Request) -> str:
    """Owner id set upstream by the auth layer in the configured header."""
    owner_id = (request.headers.get(settings.owner_header) or "").strip()
    if not owner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return owner_id
