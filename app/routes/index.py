from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter(tags=["index"])


@router.get("/", include_in_schema=False)
async def index():
    """Send visitors to the issue list."""
    return RedirectResponse(url="/issues")
