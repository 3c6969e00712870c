import logging
from collections import Counter
from supabase import Client
from g4g.modules.posts.schemas import (
    PostCreate, CommentCreate, PostResponse, CommentResponse, LikeResponse,
    PostAuthor, PostWorkout
)
from g4g.core.tiers import is_admin
from typing import Dict, Iterable, List
from fastapi import HTTPException

logger = logging.getLogger(__name__)

AUTHOR_COLUMNS = "id, email, tier, xp, current_streak"


class PostService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _authors(self, user_ids: Iterable[str]) -> Dict[str, PostAuthor]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        result = self.supabase.table("profiles")\
            .select(AUTHOR_COLUMNS)\
            .in_("id", ids)\
            .execute()
        return {
            p["id"]: PostAuthor(**{k: v for k, v in p.items() if v is not None})
            for p in result.data
        }

    def _get_post_row(self, post_id: str) -> dict:
        result = self.supabase.table("posts")\
            .select("*")\
            .eq("id", post_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Post not found")
        return result.data[0]

    def _likes_count(self, post_id: str) -> int:
        result = self.supabase.table("post_likes")\
            .select("id", count="exact")\
            .eq("post_id", post_id)\
            .execute()
        return result.count or 0

    def get_feed(self, user_id: str, limit: int = 20, offset: int = 0) -> List[PostResponse]:
        """
        Formation feed, newest first.
        Authors, linked workouts, like and comment counts are fetched with one
        follow-up query each and stitched onto the page of posts.
        """
        try:
            result = self.supabase.table("posts")\
                .select("*")\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            posts = result.data
            if not posts:
                return []

            post_ids = [p["id"] for p in posts]
            authors = self._authors(p["user_id"] for p in posts)

            workout_ids = list({p["workout_id"] for p in posts if p.get("workout_id")})
            workouts = {}
            if workout_ids:
                rows = self.supabase.table("workouts")\
                    .select("id, title")\
                    .in_("id", workout_ids)\
                    .execute()
                workouts = {w["id"]: PostWorkout(**w) for w in rows.data}

            likes = self.supabase.table("post_likes")\
                .select("post_id, user_id")\
                .in_("post_id", post_ids)\
                .execute()
            like_counts = Counter(like["post_id"] for like in likes.data)
            liked_by_me = {like["post_id"] for like in likes.data if like["user_id"] == user_id}

            comments = self.supabase.table("post_comments")\
                .select("post_id")\
                .in_("post_id", post_ids)\
                .execute()
            comment_counts = Counter(c["post_id"] for c in comments.data)

            return [
                PostResponse(
                    **p,
                    author=authors.get(p["user_id"]),
                    workout=workouts.get(p.get("workout_id")),
                    likes_count=like_counts.get(p["id"], 0),
                    comments_count=comment_counts.get(p["id"], 0),
                    has_liked=p["id"] in liked_by_me,
                )
                for p in posts
            ]
        except Exception as e:
            logger.error(f"Error fetching formation feed: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_post(self, user_id: str, post: PostCreate) -> PostResponse:
        try:
            if post.workout_id:
                workout = self.supabase.table("workouts")\
                    .select("id")\
                    .eq("id", post.workout_id)\
                    .limit(1)\
                    .execute()
                if not workout.data:
                    raise HTTPException(status_code=404, detail="Workout not found")

            if post.user_log_id:
                log = self.supabase.table("user_logs")\
                    .select("id")\
                    .eq("id", post.user_log_id)\
                    .eq("user_id", user_id)\
                    .limit(1)\
                    .execute()
                if not log.data:
                    raise HTTPException(status_code=404, detail="Mission log not found")

            result = self.supabase.table("posts").insert({
                "user_id": user_id,
                "content": post.content,
                "image_url": post.image_url,
                "workout_id": post.workout_id,
                "user_log_id": post.user_log_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create post")

            logger.info(f"Post {result.data[0]['id']} created by {user_id}")
            return PostResponse(**result.data[0], author=self._authors([user_id]).get(user_id))
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating post for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_post(self, profile: dict, post_id: str) -> bool:
        """Authors delete their own posts; admins moderate any post"""
        try:
            post = self._get_post_row(post_id)
            if post["user_id"] != profile["id"] and not is_admin(profile):
                raise HTTPException(status_code=403, detail="Only the author can delete this post")

            self.supabase.table("post_comments").delete().eq("post_id", post_id).execute()
            self.supabase.table("post_likes").delete().eq("post_id", post_id).execute()
            self.supabase.table("posts").delete().eq("id", post_id).execute()
            logger.info(f"Post {post_id} deleted by {profile['id']}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting post {post_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_like(self, user_id: str, post_id: str) -> LikeResponse:
        """Like the post, or unlike it when the caller already has"""
        try:
            self._get_post_row(post_id)
            existing = self.supabase.table("post_likes")\
                .select("id")\
                .eq("post_id", post_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()

            if existing.data:
                self.supabase.table("post_likes")\
                    .delete()\
                    .eq("id", existing.data[0]["id"])\
                    .execute()
                liked = False
            else:
                self.supabase.table("post_likes").insert({
                    "post_id": post_id,
                    "user_id": user_id,
                }).execute()
                liked = True

            return LikeResponse(post_id=post_id, liked=liked, likes_count=self._likes_count(post_id))
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error toggling like on post {post_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_comments(self, post_id: str) -> List[CommentResponse]:
        """Comments oldest first, so threads read top to bottom"""
        try:
            self._get_post_row(post_id)
            result = self.supabase.table("post_comments")\
                .select("*")\
                .eq("post_id", post_id)\
                .order("created_at")\
                .execute()
            authors = self._authors(c["user_id"] for c in result.data)
            return [CommentResponse(**c, author=authors.get(c["user_id"])) for c in result.data]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching comments for post {post_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def add_comment(self, user_id: str, post_id: str, comment: CommentCreate) -> CommentResponse:
        try:
            self._get_post_row(post_id)
            result = self.supabase.table("post_comments").insert({
                "post_id": post_id,
                "user_id": user_id,
                "content": comment.content,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add comment")

            return CommentResponse(**result.data[0], author=self._authors([user_id]).get(user_id))
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error commenting on post {post_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_comment(self, profile: dict, comment_id: str) -> bool:
        try:
            result = self.supabase.table("post_comments")\
                .select("id, user_id")\
                .eq("id", comment_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Comment not found")
            if result.data[0]["user_id"] != profile["id"] and not is_admin(profile):
                raise HTTPException(status_code=403, detail="Only the author can delete this comment")

            self.supabase.table("post_comments").delete().eq("id", comment_id).execute()
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting comment {comment_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
