"""
接口请求/响应模型
"""
from dataclasses import asdict
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.models.book import Book


class BookRequest(BaseModel):
    """创建/更新书籍请求"""
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    isbn: Optional[str] = Field(None, max_length=32)
    publisher: Optional[str] = Field(None, max_length=255)
    total_copies: int = Field(..., ge=0)

    @field_validator("title", "author")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class BookResponse(BaseModel):
    """书籍响应"""
    id: int
    title: str
    author: str
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    total_copies: int
    available_copies: int

    @classmethod
    def from_book(cls, book: Book) -> "BookResponse":
        return cls(**asdict(book))
