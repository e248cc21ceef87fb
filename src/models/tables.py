"""
数据库表模型
"""
from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.book import Book


class BookTable(Base):
    """书籍表"""
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, index=True)
    author = Column(String(255), nullable=False, index=True)
    isbn = Column(String(32))
    publisher = Column(String(255))
    total_copies = Column(Integer, nullable=False, default=0)
    available_copies = Column(Integer, nullable=False, default=0)

    def to_book(self) -> Book:
        """转换为领域模型"""
        return Book(
            id=self.id,
            title=self.title,
            author=self.author,
            isbn=self.isbn,
            publisher=self.publisher,
            total_copies=self.total_copies,
            available_copies=self.available_copies,
        )

    def apply(self, book: Book):
        """用领域模型的字段覆盖当前行（主键除外）"""
        self.title = book.title
        self.author = book.author
        self.isbn = book.isbn
        self.publisher = book.publisher
        self.total_copies = book.total_copies
        self.available_copies = book.available_copies
