"""Blog post operations, scoped to the post author."""

import uuid
import logging
from sqlalchemy.orm import Session

from adminpanel.exceptions import AuthorizationError, NotFoundError, ValidationError
from adminpanel.models import Blog, User
from adminpanel.schemas import BlogCreate, BlogPublic, BlogsPublic, BlogUpdate, BlogWithImages
from adminpanel.services.media import delete_all_media, media_urls_by_content_id, purge_objects
from adminpanel.storage import StorageClient

logger = logging.getLogger(__name__)


def create_blog(db: Session, author_id: uuid.UUID, blog_data: BlogCreate) -> Blog:
    """
    Create a blog post for ``author_id``.

    Raises:
        ValidationError: If the title is empty; nothing is persisted
    """
    if not blog_data.title or not blog_data.title.strip():
        logger.warning(f"Blog creation rejected: empty title for author {author_id}")
        raise ValidationError("The blog title cannot be empty")

    logger.info(f"Creating blog post: {blog_data.title}")

    new_blog = Blog(
        id=uuid.uuid4(),
        title=blog_data.title,
        content=blog_data.content,
        position=blog_data.position,
        status=blog_data.status,
        author_id=author_id,
    )
    db.add(new_blog)
    db.commit()
    db.refresh(new_blog)

    logger.info(f"Created blog post with ID: {new_blog.id}")
    return new_blog


def get_all_blogs(db: Session, author_id: uuid.UUID) -> BlogsPublic:
    """
    List an author's posts by ascending position, each with its image URLs.

    Media for all posts are fetched with a single IN query and joined in
    memory. Both reads run in the same session transaction.
    """
    blogs = (
        db.query(Blog)
        .filter(Blog.author_id == author_id)
        .order_by(Blog.position.asc(), Blog.created_at.asc())
        .all()
    )
    images = media_urls_by_content_id(db, [blog.id for blog in blogs])

    data = [
        BlogWithImages(**BlogPublic.model_validate(blog).model_dump(), images=images.get(blog.id, []))
        for blog in blogs
    ]
    logger.info(f"Found {len(data)} blog posts for author {author_id}")
    return BlogsPublic(data=data, count=len(data))


def get_blog(db: Session, blog_id: uuid.UUID, current_user: User) -> Blog:
    """
    Fetch a post the user is allowed to manage.

    Raises:
        NotFoundError: If the post doesn't exist
        AuthorizationError: If the post belongs to another author
    """
    blog = db.get(Blog, blog_id)
    if blog is None:
        logger.warning(f"Blog post not found: {blog_id}")
        raise NotFoundError("Blog post not found")

    if blog.author_id != current_user.id and not current_user.is_superuser:
        logger.warning(f"User {current_user.id} is not the author of blog post {blog_id}")
        raise AuthorizationError("Not enough permissions")

    return blog


def get_blog_with_images(db: Session, blog_id: uuid.UUID, current_user: User) -> BlogWithImages:
    blog = get_blog(db, blog_id, current_user)
    images = media_urls_by_content_id(db, [blog.id])
    return BlogWithImages(**BlogPublic.model_validate(blog).model_dump(), images=images.get(blog.id, []))


def update_blog(db: Session, blog_id: uuid.UUID, current_user: User, update_data: BlogUpdate) -> Blog:
    """Apply the supplied fields to a post."""
    logger.info(f"Updating blog post {blog_id}")
    blog = get_blog(db, blog_id, current_user)

    if update_data.title is not None:
        if not update_data.title.strip():
            raise ValidationError("The blog title cannot be empty")
        blog.title = update_data.title
        logger.debug(f"Updated title for post {blog_id}")

    if update_data.content is not None:
        blog.content = update_data.content
        logger.debug(f"Updated content for post {blog_id}")

    if update_data.position is not None:
        blog.position = update_data.position
        logger.debug(f"Updated position for post {blog_id}")

    if update_data.status is not None:
        blog.status = update_data.status
        logger.debug(f"Updated status for post {blog_id}")

    db.commit()
    db.refresh(blog)

    logger.info(f"Blog post {blog_id} updated successfully")
    return blog


def delete_blog(db: Session, storage: StorageClient, blog_id: uuid.UUID, current_user: User) -> None:
    """Delete a post together with its media."""
    blog = get_blog(db, blog_id, current_user)

    keys = delete_all_media(db, blog.id)
    db.delete(blog)
    db.commit()
    purge_objects(storage, keys)

    logger.info(f"Blog post {blog_id} deleted with {len(keys)} media files")
