"""Blog router for managing blog posts."""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from adminpanel.auth import get_current_user
from adminpanel.database import get_db
from adminpanel.models import User
from adminpanel.schemas import BlogCreate, BlogPublic, BlogsPublic, BlogUpdate, BlogWithImages, Message
from adminpanel.services import blog as blog_service
from adminpanel.storage import StorageClient, get_storage
from adminpanel.utils import parse_id

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blog", tags=["Blog"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=BlogPublic)
def create_blog(
    blog_data: BlogCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a blog post authored by the current user.

    Raises:
        ValidationError: If the title is empty
    """
    return blog_service.create_blog(db, current_user.id, blog_data)


@router.get("/", response_model=BlogsPublic)
def list_blogs(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's posts ordered by position, with image URLs."""
    return blog_service.get_all_blogs(db, current_user.id)


@router.get("/{blog_id}", response_model=BlogWithImages)
def get_blog(
    blog_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return blog_service.get_blog_with_images(db, parse_id(blog_id, "Blog ID"), current_user)


@router.put("/{blog_id}", response_model=BlogPublic)
def update_blog(
    blog_id: str,
    update_data: BlogUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update blog post fields that are provided.

    Raises:
        NotFoundError: If the post doesn't exist
        AuthorizationError: If the post belongs to another author
    """
    return blog_service.update_blog(db, parse_id(blog_id, "Blog ID"), current_user, update_data)


@router.delete("/{blog_id}", response_model=Message)
def delete_blog(
    blog_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage)
):
    blog_service.delete_blog(db, storage, parse_id(blog_id, "Blog ID"), current_user)
    return {"message": "Blog post deleted successfully"}
