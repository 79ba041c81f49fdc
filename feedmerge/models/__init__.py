"""Data models for feedmerge."""

from .base import EPOCH
from .collection import Collection
from .raw import ArticleRaw, PodcastRaw, RawItem, VideoRaw
from .record import DEFAULT_REGION, Category, Record

__all__ = [
    "ArticleRaw",
    "Category",
    "Collection",
    "DEFAULT_REGION",
    "EPOCH",
    "PodcastRaw",
    "RawItem",
    "Record",
    "VideoRaw",
]
