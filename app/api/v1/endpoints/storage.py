"""
Upload de fichiers (documents, images)
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile
from supabase import Client

from app.api.deps import get_current_user
from app.db import get_supabase
from app.models import CurrentUser
from app.services.storage import DEFAULT_FOLDER, StorageService

router = APIRouter()


@router.post("/upload")
async def upload_file(
    file: UploadFile = File(...),
    folder: str = Form(DEFAULT_FOLDER),
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Stocke le fichier et renvoie son URL publique"""
    content = await file.read()
    return StorageService(db).upload(
        user.id, content, file.filename,
        content_type=file.content_type, folder=folder
    )
