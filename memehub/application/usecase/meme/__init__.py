"""Meme use cases."""

from .create_meme import CreateMemeRequest, CreateMemeUseCase
from .delete_meme import DeleteMemeRequest, DeleteMemeResponse, DeleteMemeUseCase
from .get_meme import GetMemeRequest, GetMemeUseCase
from .list_memes import ListMemesRequest, ListMemesResponse, ListMemesUseCase
from .list_user_memes import (
    ListUserMemesRequest,
    ListUserMemesResponse,
    ListUserMemesUseCase,
)
from .update_meme import UpdateMemeRequest, UpdateMemeUseCase

__all__ = [
    "CreateMemeRequest",
    "CreateMemeUseCase",
    "DeleteMemeRequest",
    "DeleteMemeResponse",
    "DeleteMemeUseCase",
    "GetMemeRequest",
    "GetMemeUseCase",
    "ListMemesRequest",
    "ListMemesResponse",
    "ListMemesUseCase",
    "ListUserMemesRequest",
    "ListUserMemesResponse",
    "ListUserMemesUseCase",
    "UpdateMemeRequest",
    "UpdateMemeUseCase",
]
