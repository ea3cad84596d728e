"""FastAPI dependencies shared by the routers."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status


async def get_profile_id(
    x_profile_id: str | None = Header(None, description="Learner profile ID"),
) -> str:
    """Extract the learner profile from the X-Profile-Id header.

    Raises:
        HTTPException: 401 if the header is missing or blank.
    """
    if x_profile_id is None or not x_profile_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No X-Profile-Id header provided",
        )
    return x_profile_id.strip()


# Convenience alias for route signatures
CurrentProfile = Annotated[str, Depends(get_profile_id)]
