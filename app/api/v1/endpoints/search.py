"""
Search endpoint - full-text search over posts via Elasticsearch.
Challenge: Loose WordPress-style query parameters in, one JSON envelope out.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.core.dependencies import SearchServiceDep
from app.services.query_arguments import query_parameters_from

router = APIRouter()


@router.get("", name="search")
async def search(request: Request, service: SearchServiceDep) -> JSONResponse:
    """
    Search posts. Parameters: s, posts_per_page, paged, post_type, fields, category, taxonomy.
    Returns {success, results, meta} or {error, message} with 400/404.
    """
    parameters = query_parameters_from(request.query_params.multi_items())
    outcome = await service.search(parameters)
    return JSONResponse(content=outcome.body, status_code=outcome.status_code)
