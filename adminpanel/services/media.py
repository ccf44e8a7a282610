"""Media attachment flow: upload to object storage, persist, list and delete."""

import uuid
import logging
from collections import defaultdict
from pathlib import PurePath
from typing import Dict, Iterable, List
from sqlalchemy.orm import Session

from adminpanel.exceptions import AuthorizationError, NotFoundError, StorageError, ValidationError
from adminpanel.models import Blog, Item, Media, User
from adminpanel.storage import StorageClient

logger = logging.getLogger(__name__)


def check_content_access(db: Session, content_id: uuid.UUID, current_user: User) -> None:
    """
    Make sure ``content_id`` is a blog or item the user may attach media to.

    Raises:
        NotFoundError: If no blog or item has this id
        AuthorizationError: If the content belongs to someone else
    """
    blog = db.get(Blog, content_id)
    if blog is not None:
        owner_id = blog.author_id
    else:
        item = db.get(Item, content_id)
        if item is None:
            logger.warning(f"Media content not found: {content_id}")
            raise NotFoundError("Content not found")
        owner_id = item.owner_id

    if owner_id != current_user.id and not current_user.is_superuser:
        logger.warning(f"User {current_user.id} may not manage media of {content_id}")
        raise AuthorizationError("Not enough permissions")


def media_urls_by_content_id(db: Session, content_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, List[str]]:
    """Fetch media for many content ids with one IN query and group URLs by content id."""
    content_ids = list(content_ids)
    grouped = defaultdict(list)
    if not content_ids:
        return grouped

    media = (
        db.query(Media)
        .filter(Media.content_id.in_(content_ids))
        .order_by(Media.created_at)
        .all()
    )
    for m in media:
        grouped[m.content_id].append(m.url)
    return grouped


def upload_media(db: Session, storage: StorageClient, content_id: uuid.UUID, files: list) -> List[str]:
    """
    Upload files sequentially, then persist one Media row per file.

    Rows are committed together only after every upload succeeded. If one
    upload fails, the objects already stored for this request are deleted.

    Args:
        db: Database session
        storage: Object storage client
        content_id: Blog or item the files illustrate
        files: Uploaded files (``filename``, ``file``, ``content_type``)

    Returns:
        List[str]: URLs of the stored files, in upload order

    Raises:
        ValidationError: If no files were sent
        StorageError: If an upload failed
    """
    if not files:
        raise ValidationError("No files uploaded")

    logger.info(f"Uploading {len(files)} files for content {content_id}")

    uploaded = []
    try:
        for upload in files:
            suffix = PurePath(upload.filename or "").suffix.lower()
            key = f"media/{content_id}/{uuid.uuid4().hex}{suffix}"
            url = storage.upload_fileobj(key, upload.file, upload.content_type)
            uploaded.append(Media(url=url, type=upload.content_type, key=key, content_id=content_id))
            logger.debug(f"Uploaded {upload.filename} to {key}")
    except StorageError:
        _discard_uploads(storage, uploaded)
        raise
    except Exception as e:
        logger.error(f"Unexpected upload failure for content {content_id}: {e}")
        _discard_uploads(storage, uploaded)
        raise StorageError(f"Failed to upload file: {e}")

    db.add_all(uploaded)
    try:
        db.commit()
    except Exception:
        db.rollback()
        _discard_uploads(storage, uploaded)
        raise

    logger.info(f"Stored {len(uploaded)} media records for content {content_id}")
    return [m.url for m in uploaded]


def _discard_uploads(storage: StorageClient, uploaded: List[Media]) -> None:
    for media in uploaded:
        try:
            storage.delete(media.key)
            logger.info(f"Removed orphaned upload {media.key}")
        except StorageError as e:
            logger.error(f"Could not remove orphaned upload {media.key}: {e.detail}")


def get_all_media_by_content_id(db: Session, content_id: uuid.UUID) -> List[Media]:
    return (
        db.query(Media)
        .filter(Media.content_id == content_id)
        .order_by(Media.created_at)
        .all()
    )


def delete_media_by_url(db: Session, storage: StorageClient, content_id: uuid.UUID, url: str) -> None:
    """
    Delete the media of ``content_id`` whose URL equals ``url``.

    Raises:
        ValidationError: If the URL is empty
        NotFoundError: If the content has no media with this URL
    """
    if not url or not url.strip():
        raise ValidationError("Image URL is required")

    media_to_delete = None
    for media in get_all_media_by_content_id(db, content_id):
        if media.url == url:
            media_to_delete = media
            break

    if media_to_delete is None:
        logger.warning(f"Image not found for content {content_id}: {url}")
        raise NotFoundError("Image not found")

    media_id, key = media_to_delete.id, media_to_delete.key
    db.delete(media_to_delete)
    db.commit()
    purge_objects(storage, [key])

    logger.info(f"Media {media_id} deleted successfully")


def delete_all_media(db: Session, content_id: uuid.UUID) -> List[str]:
    """
    Delete every media row of ``content_id`` and return their storage keys.

    The caller commits, then hands the keys to ``purge_objects``.
    """
    media = get_all_media_by_content_id(db, content_id)
    for m in media:
        db.delete(m)
    return [m.key for m in media]


def purge_objects(storage: StorageClient, keys: List[str]) -> None:
    """Remove objects whose rows are already deleted. Failures are logged and skipped."""
    for key in keys:
        try:
            storage.delete(key)
        except StorageError as e:
            logger.error(f"Could not remove stored object {key}: {e.detail}")
