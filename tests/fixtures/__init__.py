"""
测试fixtures包
"""
from .sample_data import (
    SAMPLE_BOOKS,
    SAMPLE_BOOKS_MIXED_AUTHORS,
    INVALID_BOOK_REQUESTS
)

__all__ = [
    "SAMPLE_BOOKS",
    "SAMPLE_BOOKS_MIXED_AUTHORS",
    "INVALID_BOOK_REQUESTS"
]
