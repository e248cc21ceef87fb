"""
书籍模型
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Book:
    """书籍模型"""
    title: str
    author: str
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    total_copies: int = 0
    available_copies: int = 0  # 由服务层维护，调用方不直接设置
    id: Optional[int] = None  # 数据库自增主键，持久化前为None

    def __repr__(self):
        return f"Book(id={self.id}, title='{self.title}')"
