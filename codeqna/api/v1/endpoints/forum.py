"""Forum-wide read endpoints: raw rows and search."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from codeqna.api.deps import get_db
from codeqna.crud import crud_channel, crud_message, crud_reply
from codeqna.schemas.channel import ChannelResponse
from codeqna.schemas.message import MessageResponse
from codeqna.schemas.reply import ReplyResponse
from codeqna.schemas.search import SearchResponse
from codeqna.schemas.thread import ForumRow, ForumRowListResponse

router = APIRouter(
    tags=["Forum"],
)


@router.get(
    "/alldata",
    response_model=ForumRowListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get all forum rows",
    description="""
    Flat channel x message x reply rows for every channel, followed by one
    row per rating. This is the input of the threaded channel view.

    **Access:** Public
    """,
)
def get_all_rows(
    db: Session = Depends(get_db),
) -> ForumRowListResponse:
    """Get the flat forum rows."""
    rows = crud_channel.get_rows(db)
    return ForumRowListResponse(data=[ForumRow(**row) for row in rows])


@router.get(
    "/search",
    response_model=SearchResponse,
    status_code=status.HTTP_200_OK,
    summary="Search channels, messages and replies",
    description="""
    Case-insensitive substring search over channel topics and content,
    message content and reply content.

    **Access:** Public
    """,
)
def search(
    q: str = Query(..., min_length=1, max_length=200, description="Text to search for"),
    limit: int = Query(50, ge=1, le=200, description="Maximum results per kind"),
    db: Session = Depends(get_db),
) -> SearchResponse:
    """Search forum content."""
    query = q.strip()
    if not query:
        return SearchResponse(query=query, channels=[], messages=[], replies=[])

    return SearchResponse(
        query=query,
        channels=[ChannelResponse.model_validate(c) for c in crud_channel.search(db, query=query, limit=limit)],
        messages=[MessageResponse.model_validate(m) for m in crud_message.search(db, query=query, limit=limit)],
        replies=[ReplyResponse.model_validate(r) for r in crud_reply.search(db, query=query, limit=limit)],
    )
