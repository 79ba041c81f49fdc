"""feedmerge - merge article, podcast and video feeds into one ranked collection."""

__version__ = "1.0.0"
