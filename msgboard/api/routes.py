"""
Explicit routing table for the message API.
"""
from typing import Callable, List, NamedTuple

from fastapi import APIRouter

from msgboard.api import messages, stats
from msgboard.schemas.message import ErrorResponse

PREFIX = "/api/messages"


class Route(NamedTuple):
    method: str
    path: str
    handler: Callable
    status_code: int = 200
    summary: str = ""


# Fixed paths come before /{message_id} so they are matched first
MESSAGE_ROUTES: List[Route] = [
    Route("GET", "", messages.list_messages, summary="List messages"),
    Route("POST", "", messages.create_message, 201, "Create message"),
    Route("GET", "/search", messages.search_messages, summary="Search messages"),
    Route("GET", "/recent", messages.recent_messages, summary="Recent active messages"),
    Route("GET", "/author/{author}", messages.messages_by_author, summary="Messages by author"),
    Route("GET", "/stats", stats.get_stats, summary="Message statistics"),
    Route("GET", "/{message_id}", messages.get_message, summary="Get message"),
    Route("PUT", "/{message_id}", messages.update_message, summary="Update message"),
    Route("DELETE", "/{message_id}", messages.delete_message, summary="Delete message"),
]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid argument"},
    404: {"model": ErrorResponse, "description": "Message not found"},
}


def build_router(routes: List[Route] = MESSAGE_ROUTES) -> APIRouter:
    """Register every row of the routing table on a fresh router."""
    router = APIRouter(prefix=PREFIX, tags=["Messages"])
    for route in routes:
        router.add_api_route(
            route.path,
            route.handler,
            methods=[route.method],
            status_code=route.status_code,
            summary=route.summary or None,
            responses=ERROR_RESPONSES,
        )
    return router
