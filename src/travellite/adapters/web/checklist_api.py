"""Security checklist endpoints: browse, search and extend the item catalog."""

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from travellite.adapters.web.context import authenticate, int_param, services
from travellite.adapters.web.schemas import CustomItemRequest, parse_body
from travellite.adapters.web.serializers import (
    category_to_dict,
    checklist_item_to_dict,
    checklist_stats_to_dict,
)
from travellite.application.services.checklist_service import ItemSort
from travellite.domain.errors import ValidationError
from travellite.domain.models.booking import RiskLevel


def _risk_param(request: Request) -> RiskLevel | None:
    value = request.query_params.get("risk_level")
    if not value:
        return None
    try:
        return RiskLevel(value.lower())
    except ValueError:
        raise ValidationError(
            f"risk_level must be one of {', '.join(r.value for r in RiskLevel)}",
            field="risk_level",
        ) from None


def _sort_param(request: Request) -> ItemSort:
    value = request.query_params.get("sort_by") or ItemSort.POPULARITY.value
    try:
        return ItemSort(value)
    except ValueError:
        raise ValidationError(
            f"sort_by must be one of {', '.join(s.value for s in ItemSort)}", field="sort_by"
        ) from None


async def list_categories(request: Request) -> JSONResponse:
    """Categories in display order; ``include_items=true`` nests their items."""
    include_items = request.query_params.get("include_items", "").lower() == "true"
    categories = []
    for category, items in services(request).checklist.categories():
        entry = {**category_to_dict(category), "item_count": len(items)}
        if include_items:
            entry["items"] = [checklist_item_to_dict(item) for item in items]
        categories.append(entry)
    return JSONResponse(
        {"success": True, "data": {"categories": categories, "count": len(categories)}}
    )


async def category_items(request: Request) -> JSONResponse:
    category_id = request.path_params["category_id"]
    items = services(request).checklist.items_in_category(
        category_id,
        search=request.query_params.get("search", ""),
        sort_by=_sort_param(request),
        limit=int_param(request, "limit", 50),
    )
    return JSONResponse(
        {
            "success": True,
            "data": {
                "category_id": category_id,
                "items": [checklist_item_to_dict(item) for item in items],
                "count": len(items),
            },
        }
    )


async def search_items(request: Request) -> JSONResponse:
    query = request.query_params.get("q", "")
    items = services(request).checklist.search(
        query,
        category_id=request.query_params.get("category") or None,
        risk_level=_risk_param(request),
        limit=int_param(request, "limit", 20),
    )
    return JSONResponse(
        {
            "success": True,
            "data": {
                "items": [checklist_item_to_dict(item) for item in items],
                "query": query.strip(),
                "count": len(items),
            },
        }
    )


async def popular_items(request: Request) -> JSONResponse:
    items = services(request).checklist.popular(
        category_id=request.query_params.get("category") or None,
        limit=int_param(request, "limit", 10),
    )
    return JSONResponse(
        {
            "success": True,
            "data": {"items": [checklist_item_to_dict(i) for i in items], "count": len(items)},
        }
    )


async def get_item(request: Request) -> JSONResponse:
    item = services(request).checklist.get_item(request.path_params["item_id"])
    return JSONResponse({"success": True, "data": {"item": checklist_item_to_dict(item)}})


async def create_custom_item(request: Request) -> JSONResponse:
    authenticate(request)
    body = await parse_body(request, CustomItemRequest)
    item = services(request).checklist.create_custom_item(
        name=body.name,
        description=body.description,
        category_id=body.category_id,
        estimated_value=body.estimated_value,
        risk_level=body.risk_level,
        fragile=body.fragile,
        brand=body.brand,
        tags=tuple(body.tags),
    )
    return JSONResponse(
        {"success": True, "data": {"item": checklist_item_to_dict(item)}}, status_code=201
    )


async def checklist_stats(request: Request) -> JSONResponse:
    stats = services(request).checklist.stats()
    return JSONResponse({"success": True, "data": checklist_stats_to_dict(stats)})


routes = [
    Route("/api/v1/checklist/categories", list_categories, methods=["GET"]),
    Route("/api/v1/checklist/categories/{category_id}/items", category_items, methods=["GET"]),
    Route("/api/v1/checklist/search", search_items, methods=["GET"]),
    Route("/api/v1/checklist/popular", popular_items, methods=["GET"]),
    Route("/api/v1/checklist/items/{item_id}", get_item, methods=["GET"]),
    Route("/api/v1/checklist/custom-item", create_custom_item, methods=["POST"]),
    Route("/api/v1/checklist/stats", checklist_stats, methods=["GET"]),
]
