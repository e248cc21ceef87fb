"""
书籍业务服务层
"""
import logging
from dataclasses import replace
from typing import List, Optional
from src.repositories.book_repository import BookRepository
from src.services.cache_service import CacheService, BOOKS_CACHE, BOOKS_ALL_CACHE, BOOKS_SEARCH_CACHE
from src.models.book import Book
from src.models.schemas import BookRequest
from src.exceptions import BookNotFoundError

logger = logging.getLogger(__name__)

ALL_BOOKS_KEY = "all"


def _has_text(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


class BookService:
    """书籍服务类

    所有写操作先写数据库，成功后再维护缓存：
    新增/更新/删除都会清空全量列表和搜索结果缓存，
    更新会把新值写回单本书缓存，删除会清空整个单本书缓存。
    """

    def __init__(self, book_repository: BookRepository, cache: CacheService):
        self.book_repository = book_repository
        self.cache = cache

    async def add_book(self, request: BookRequest) -> Book:
        """新增书籍，可借数量等于总数量"""
        book = Book(
            title=request.title,
            author=request.author,
            isbn=request.isbn,
            publisher=request.publisher,
            total_copies=request.total_copies,
            available_copies=request.total_copies,
        )
        saved = await self.book_repository.save(book)
        logger.info(f"新增书籍: id={saved.id}, title={saved.title}")

        await self.cache.evict_all(BOOKS_ALL_CACHE)
        await self.cache.evict_all(BOOKS_SEARCH_CACHE)
        return saved

    async def get_all_books(self) -> List[Book]:
        """获取全部书籍"""
        return await self.cache.get_or_compute(BOOKS_ALL_CACHE, ALL_BOOKS_KEY, self.book_repository.find_all)

    async def get_book_by_id(self, book_id: int) -> Book:
        """根据ID获取书籍"""
        async def load() -> Book:
            return await self._load_book(book_id)

        return await self.cache.get_or_compute(BOOKS_CACHE, book_id, load)

    async def update_book(self, book_id: int, request: BookRequest) -> Book:
        """更新书籍全部字段"""
        existing = await self._load_book(book_id)
        # 业务规则：更新时可借数量重置为总数量
        updated = replace(
            existing,
            title=request.title,
            author=request.author,
            isbn=request.isbn,
            publisher=request.publisher,
            total_copies=request.total_copies,
            available_copies=request.total_copies,
        )
        saved = await self.book_repository.save(updated)
        logger.info(f"更新书籍: id={book_id}")

        await self.cache.put(BOOKS_CACHE, book_id, saved)
        await self.cache.evict_all(BOOKS_ALL_CACHE)
        await self.cache.evict_all(BOOKS_SEARCH_CACHE)
        return saved

    async def delete_book(self, book_id: int) -> None:
        """删除书籍"""
        if not await self.book_repository.exists_by_id(book_id):
            raise BookNotFoundError(book_id)
        await self.book_repository.delete_by_id(book_id)
        logger.info(f"删除书籍: id={book_id}")

        await self.cache.evict_all(BOOKS_CACHE)
        await self.cache.evict_all(BOOKS_ALL_CACHE)
        await self.cache.evict_all(BOOKS_SEARCH_CACHE)

    async def search_books(self, title: Optional[str] = None, author: Optional[str] = None) -> List[Book]:
        """按标题/作者搜索书籍，都为空时返回全部"""
        async def search() -> List[Book]:
            has_title = _has_text(title)
            has_author = _has_text(author)

            if has_title and has_author:
                return await self.book_repository.find_by_title_and_author_containing(title, author)
            elif has_title:
                return await self.book_repository.find_by_title_containing(title)
            elif has_author:
                return await self.book_repository.find_by_author_containing(author)
            else:
                return await self.book_repository.find_all()

        # None 与空串会得到不同的键
        return await self.cache.get_or_compute(BOOKS_SEARCH_CACHE, f"{title}::{author}", search)

    async def _load_book(self, book_id: int) -> Book:
        book = await self.book_repository.find_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book
