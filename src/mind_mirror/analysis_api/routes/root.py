import pathlib

from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = pathlib.Path(__file__).parent.parent.resolve() / "static"

router = APIRouter()


@router.get("/{full_path:path}", include_in_schema=False)
async def client_shell(full_path: str):
    """Serve the client shell for every path not handled by the API"""
    requested = (STATIC_DIR / full_path).resolve()
    if full_path and requested.is_file() and STATIC_DIR in requested.parents:
        return FileResponse(requested)
    return FileResponse(STATIC_DIR / "index.html")
