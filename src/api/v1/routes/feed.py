"""Feed API routes: threads, posts, comments and the live feed socket."""

from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from api.dependencies.auth import CurrentUser, WebSocketUser
from api.v1.dependencies import get_feed_service
from api.v1.schemas.feed import (
    CommentCreate,
    CommentDetailResponse,
    CommentListResponse,
    CommentResponse,
    LiveFeedMessage,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    ThreadListResponse,
    ThreadResponse,
)
from domain.entities.post import Post
from domain.services.feed_service import FeedService

logger = structlog.get_logger()

router = APIRouter(tags=["feed"])


@router.get(
    "/threads",
    response_model=ThreadListResponse,
    summary="List threads",
)
async def list_threads(
    user: CurrentUser,
    service: FeedService = Depends(get_feed_service),
) -> ThreadListResponse:
    """All discussion threads ordered by title."""
    threads = await service.list_threads()
    return ThreadListResponse(data=[ThreadResponse.model_validate(t) for t in threads])


@router.get(
    "/posts",
    response_model=PostListResponse,
    summary="List posts",
)
async def list_posts(
    user: CurrentUser,
    thread_id: UUID | None = None,
    service: FeedService = Depends(get_feed_service),
) -> PostListResponse:
    """Posts newest first with author summaries, optionally for one thread."""
    posts = await service.list_posts(thread_id)
    return PostListResponse(data=[PostResponse.model_validate(p) for p in posts])


@router.post(
    "/posts",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={
        201: {"description": "Post created"},
        400: {"description": "Empty content"},
        404: {"description": "Thread not found"},
    },
)
async def create_post(
    body: PostCreate,
    user: CurrentUser,
    service: FeedService = Depends(get_feed_service),
) -> PostDetailResponse:
    """Publish a post to a thread."""
    post = await service.create_post(user.id, body.thread_id, body.content, user.username)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.get(
    "/posts/{post_id}/comments",
    response_model=CommentListResponse,
    summary="List comments of a post",
    responses={404: {"description": "Post not found"}},
)
async def list_comments(
    post_id: UUID,
    user: CurrentUser,
    service: FeedService = Depends(get_feed_service),
) -> CommentListResponse:
    """Comments oldest first with author summaries."""
    comments = await service.list_comments(post_id)
    return CommentListResponse(data=[CommentResponse.model_validate(c) for c in comments])


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={
        201: {"description": "Comment created"},
        400: {"description": "Empty content"},
        404: {"description": "Post not found"},
    },
)
async def create_comment(
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: FeedService = Depends(get_feed_service),
) -> CommentDetailResponse:
    """Attach a comment to a post."""
    comment = await service.create_comment(user.id, post_id, body.content, user.username)
    return CommentDetailResponse(data=CommentResponse.model_validate(comment))


@router.websocket("/feed/live")
async def live_feed(
    websocket: WebSocket,
    user: WebSocketUser,
    thread_id: UUID | None = None,
    service: FeedService = Depends(get_feed_service),
) -> None:
    """Push the post listing now and again after every post insert.

    Authenticate with ``?token=<jwt>``. Frames are ``{"type": "posts",
    "data": [...]}``. Client messages are read and ignored.
    """
    if user is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()

    async def push(posts: list[Post]) -> None:
        frame = LiveFeedMessage(data=[PostResponse.model_validate(p) for p in posts])
        await websocket.send_json(frame.model_dump(mode="json"))

    subscription = await service.open_live_feed(thread_id, push)
    logger.info("live_feed_opened", user_id=str(user.id), thread_id=str(thread_id))
    try:
        await push(await service.list_posts(thread_id))
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await subscription.unsubscribe()
        logger.info("live_feed_closed", user_id=str(user.id))
