import asyncio
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func, select

from wolfpack.db.session import async_session_maker
from wolfpack.models.engagement import VideoLike
from wolfpack.models.video import WolfpackVideo


async def check_likes():
    """Compare each video's stored likes_count with the number of like rows."""
    async with async_session_maker() as db:
        total_likes = await db.scalar(select(func.count(VideoLike.id)))
        print(f"Total likes in database: {total_likes}")

        like_counts = (
            select(VideoLike.video_id, func.count(VideoLike.id).label("actual"))
            .group_by(VideoLike.video_id)
            .subquery()
        )
        result = await db.execute(
            select(WolfpackVideo.id, WolfpackVideo.likes_count, func.coalesce(like_counts.c.actual, 0))
            .outerjoin(like_counts, like_counts.c.video_id == WolfpackVideo.id)
            .where(WolfpackVideo.likes_count != func.coalesce(like_counts.c.actual, 0))
        )
        drifted = result.all()

        if drifted:
            print("\nVideos whose likes_count is out of sync:")
            for video_id, stored, actual in drifted:
                print(f"  - {video_id}: stored={stored} actual={actual}")
        else:
            print("\nAll likes_count values match the like rows.")


if __name__ == "__main__":
    asyncio.run(check_likes())
