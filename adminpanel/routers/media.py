"""Media router for uploading, listing and deleting post images."""

import logging
from typing import List
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from adminpanel.auth import get_current_user
from adminpanel.database import get_db
from adminpanel.models import User
from adminpanel.schemas import DeleteMediaRequest, MediaPublic, Message
from adminpanel.services import media as media_service
from adminpanel.storage import StorageClient, get_storage
from adminpanel.utils import parse_id

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blog", tags=["Media"])


@router.post("/{post_id}/images", status_code=status.HTTP_201_CREATED, response_model=List[str])
def upload_images(
    post_id: str,
    files: List[UploadFile] = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    """
    Upload images for a blog post or item.

    Args:
        post_id: Blog post or item ID
        files: Multipart files under the ``files`` field

    Returns:
        List[str]: URLs of the uploaded files

    Raises:
        ValidationError: If the ID is malformed or no files were sent
        StorageError: If an upload fails; nothing is persisted
    """
    content_id = parse_id(post_id, "Post ID")
    media_service.check_content_access(db, content_id, current_user)
    return media_service.upload_media(db, storage, content_id, files)


@router.get("/images/{post_id}", response_model=List[MediaPublic])
def list_images(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    content_id = parse_id(post_id, "Post ID")
    media_service.check_content_access(db, content_id, current_user)
    media = media_service.get_all_media_by_content_id(db, content_id)
    logger.info(f"Found {len(media)} media files for content {content_id}")
    return media


@router.delete("/images/{post_id}", response_model=Message)
def delete_image(
    post_id: str,
    body: DeleteMediaRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    """
    Delete one image of a post, identified by its URL.

    Raises:
        NotFoundError: If the post has no image with this URL
    """
    content_id = parse_id(post_id, "Post ID")
    media_service.check_content_access(db, content_id, current_user)
    media_service.delete_media_by_url(db, storage, content_id, body.image_url)
    return {"message": "Media deleted successfully"}
