"""Station search endpoints."""

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from travellite.adapters.web.context import (
    float_param,
    int_param,
    services,
    station_type_param,
)
from travellite.adapters.web.serializers import money, state_to_dict, station_to_dict
from travellite.domain.models.geo_coordinate import GeoCoordinate


async def search_stations(request: Request) -> JSONResponse:
    query = request.query_params.get("q", "")
    station_type = station_type_param(request)
    stations = services(request).stations.search(
        query, station_type, int_param(request, "limit", 10)
    )
    return JSONResponse(
        {
            "success": True,
            "data": {
                "stations": [station_to_dict(s) for s in stations],
                "query": query.strip(),
                "count": len(stations),
                "filters": {"type": station_type.value if station_type else None},
            },
        }
    )


async def popular_stations(request: Request) -> JSONResponse:
    station_type = station_type_param(request)
    stations = services(request).stations.popular(station_type, int_param(request, "limit", 20))
    return JSONResponse(
        {
            "success": True,
            "data": {
                "stations": [station_to_dict(s) for s in stations],
                "count": len(stations),
                "filters": {"type": station_type.value if station_type else None},
            },
        }
    )


async def nearby_stations(request: Request) -> JSONResponse:
    center = GeoCoordinate(
        latitude=float_param(request, "latitude"), longitude=float_param(request, "longitude")
    )
    max_distance_km = float_param(request, "max_distance_km", 100.0)
    matches = services(request).stations.nearby(
        center,
        max_distance_km=max_distance_km,
        station_type=station_type_param(request),
        limit=int_param(request, "limit", 10),
    )
    return JSONResponse(
        {
            "success": True,
            "data": {
                "stations": [
                    {**station_to_dict(station), "distance_km": money(distance)}
                    for station, distance in matches
                ],
                "center": {"latitude": center.latitude, "longitude": center.longitude},
                "max_distance_km": max_distance_km,
                "count": len(matches),
            },
        }
    )


async def station_states(request: Request) -> JSONResponse:
    station_type = station_type_param(request)
    states = services(request).stations.states(station_type)
    return JSONResponse(
        {
            "success": True,
            "data": {
                "states": [state_to_dict(s) for s in states],
                "count": len(states),
                "filters": {"type": station_type.value if station_type else None},
            },
        }
    )


async def station_distance(request: Request) -> JSONResponse:
    source, destination, distance = services(request).stations.distance_between(
        request.path_params["source"], request.path_params["destination"]
    )
    return JSONResponse(
        {
            "success": True,
            "data": {
                "source": station_to_dict(source),
                "destination": station_to_dict(destination),
                "distance_km": money(distance),
            },
        }
    )


async def get_station(request: Request) -> JSONResponse:
    station = services(request).stations.get(request.path_params["identifier"])
    return JSONResponse({"success": True, "data": {"station": station_to_dict(station)}})


routes = [
    Route("/api/v1/stations/search", search_stations, methods=["GET"]),
    Route("/api/v1/stations/popular", popular_stations, methods=["GET"]),
    Route("/api/v1/stations/nearby", nearby_stations, methods=["GET"]),
    Route("/api/v1/stations/states", station_states, methods=["GET"]),
    Route(
        "/api/v1/stations/distance/{source}/{destination}", station_distance, methods=["GET"]
    ),
    Route("/api/v1/stations/{identifier}", get_station, methods=["GET"]),
]
