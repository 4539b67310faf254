from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.core.errors import TableNotFoundError, UpstreamError
from app.core.rate_limit import rate_limit
from app.services.projects_service import list_projects
from app.store.base import DataStore
from app.store.factory import get_store

router = APIRouter()


@router.get("/projects")
@rate_limit()
def projects(
    request: Request,
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    featured: str | None = Query(default=None),
    store: DataStore = Depends(get_store),
):
    _ = request
    try:
        return list_projects(store, limit=limit, offset=offset, featured=featured)
    except TableNotFoundError:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Projects table not found",
                "message": "The 'projects' table does not exist in the database.",
            },
        )
    except UpstreamError as exc:
        raise UpstreamError("Failed to fetch projects", details=exc.details or exc.message) from exc
