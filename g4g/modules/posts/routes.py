from fastapi import APIRouter, Depends, Query
from g4g.database.supabase_client import get_supabase
from g4g.modules.posts.schemas import (
    PostCreate, CommentCreate, PostResponse, CommentResponse, LikeResponse
)
from g4g.modules.posts.service import PostService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/posts", tags=["formation"])


def get_post_service(supabase: Client = Depends(get_supabase)) -> PostService:
    return PostService(supabase)


@router.get("", response_model=List[PostResponse])
async def get_feed(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    profile: Dict = Depends(require_permission("posts:read")),
    service: PostService = Depends(get_post_service)
):
    """Formation feed with like status for the caller"""
    return service.get_feed(profile["id"], limit=limit, offset=offset)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    post: PostCreate,
    profile: Dict = Depends(require_permission("posts:create")),
    service: PostService = Depends(get_post_service)
):
    return service.create_post(profile["id"], post)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    profile: Dict = Depends(require_permission("posts:create")),
    service: PostService = Depends(get_post_service)
):
    service.delete_post(profile, post_id)
    return None


@router.post("/{post_id}/like", response_model=LikeResponse)
async def toggle_like(
    post_id: str,
    profile: Dict = Depends(require_permission("posts:create")),
    service: PostService = Depends(get_post_service)
):
    return service.toggle_like(profile["id"], post_id)


@router.get("/{post_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    post_id: str,
    profile: Dict = Depends(require_permission("posts:read")),
    service: PostService = Depends(get_post_service)
):
    return service.list_comments(post_id)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(
    post_id: str,
    comment: CommentCreate,
    profile: Dict = Depends(require_permission("posts:create")),
    service: PostService = Depends(get_post_service)
):
    return service.add_comment(profile["id"], post_id, comment)


@router.delete("/comments/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: str,
    profile: Dict = Depends(require_permission("posts:create")),
    service: PostService = Depends(get_post_service)
):
    service.delete_comment(profile, comment_id)
    return None
