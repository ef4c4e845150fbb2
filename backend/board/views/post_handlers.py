"""Post endpoints. Every handler runs behind the strict guard."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from starlette.responses import JSONResponse

from board.posts.service import InvalidPostError, PostNotFoundError
from board.views.handlers import internal_error, read_body

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

    from board.posts.service import PostService

logger = structlog.get_logger()


async def create_post(request: Request) -> Response:
    """POST /post {text} - create a post owned by the caller."""
    post_service: PostService = request.app.state.post_service
    body = await read_body(request)

    try:
        post = await post_service.create(request.user.user_id, body.get("text"))
    except InvalidPostError as e:
        logger.info("post create rejected", reason=str(e))
        return JSONResponse({"message": str(e)}, status_code=400)
    except Exception:
        logger.exception("post create failed")
        return internal_error()

    return JSONResponse(
        {"message": "Post created successfully", "post": post.model_dump(by_alias=True)},
        status_code=201,
    )


async def list_posts(request: Request) -> Response:
    """GET /posts - list the caller's posts."""
    post_service: PostService = request.app.state.post_service
    try:
        posts = await post_service.list_for_owner(request.user.user_id)
    except Exception:
        logger.exception("post list failed")
        return internal_error()
    return JSONResponse({"posts": [p.model_dump(by_alias=True) for p in posts]})


async def update_post(request: Request) -> Response:
    """PUT /posts/{post_id} {text} - replace the text of a post the caller owns."""
    post_service: PostService = request.app.state.post_service
    post_id = request.path_params["post_id"]
    body = await read_body(request)

    try:
        post = await post_service.update(request.user.user_id, post_id, body.get("text"))
    except InvalidPostError as e:
        logger.info("post update rejected", post_id=post_id, reason=str(e))
        return JSONResponse({"message": str(e)}, status_code=400)
    except PostNotFoundError as e:
        logger.info("post update matched no owned post", post_id=post_id)
        return JSONResponse({"message": str(e)}, status_code=404)
    except Exception:
        logger.exception("post update failed", post_id=post_id)
        return internal_error()

    return JSONResponse({"message": "Post updated successfully", "updatedPost": post.model_dump(by_alias=True)})


async def delete_post(request: Request) -> Response:
    """DELETE /posts/{post_id} - delete a post the caller owns."""
    post_service: PostService = request.app.state.post_service
    post_id = request.path_params["post_id"]

    try:
        post = await post_service.delete(request.user.user_id, post_id)
    except PostNotFoundError as e:
        logger.info("post delete matched no owned post", post_id=post_id)
        return JSONResponse({"message": str(e)}, status_code=404)
    except Exception:
        logger.exception("post delete failed", post_id=post_id)
        return internal_error()

    return JSONResponse({"message": "Post deleted successfully", "deletedPost": post.model_dump(by_alias=True)})
