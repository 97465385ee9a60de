"""
Stats endpoint for analytics.
"""
from typing import Annotated

from fastapi import Depends

from msgboard.api.dependencies import get_message_service
from msgboard.core.clock import format_timestamp
from msgboard.core.config import get_settings
from msgboard.core.logging import get_logger
from msgboard.schemas.message import StatsResponse
from msgboard.services.message_service import MessageService

logger = get_logger(__name__)


def get_stats(
    service: Annotated[MessageService, Depends(get_message_service)],
) -> StatsResponse:
    """
    Get message statistics including:
    
    - Total message count
    - Active and inactive counts
    - Active messages created within the configured recent window
    """
    total = len(service.get_all_messages())
    active = service.get_active_message_count()
    recent = len(service.get_recent_messages(get_settings().stats_recent_days))
    
    logger.debug(
        "Generated stats",
        extra={
            "extra_data": {
                "total_messages": total,
                "active_messages": active,
            }
        }
    )
    
    return StatsResponse(
        total_messages=total,
        active_messages=active,
        inactive_messages=total - active,
        recent_messages=recent,
        timestamp=format_timestamp(),
    )
