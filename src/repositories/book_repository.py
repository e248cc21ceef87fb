"""
书籍数据访问层
"""
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, exists
from src.models.book import Book
from src.models.tables import BookTable


class BookRepository:
    """书籍仓库类"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, book: Book) -> Book:
        """保存书籍（id为空时新建，否则更新），返回持久化后的书籍"""
        row = None
        if book.id is not None:
            row = await self.session.get(BookTable, book.id)
        if row is None:
            row = BookTable()
            self.session.add(row)
        row.apply(book)
        await self.session.commit()
        await self.session.refresh(row)
        return row.to_book()

    async def find_by_id(self, book_id: int) -> Optional[Book]:
        """根据ID获取书籍"""
        row = await self.session.get(BookTable, book_id)
        return row.to_book() if row else None

    async def find_all(self) -> List[Book]:
        """获取全部书籍"""
        return await self._find(select(BookTable))

    async def exists_by_id(self, book_id: int) -> bool:
        """检查书籍是否存在"""
        result = await self.session.execute(select(exists().where(BookTable.id == book_id)))
        return bool(result.scalar())

    async def delete_by_id(self, book_id: int) -> None:
        """根据ID删除书籍"""
        await self.session.execute(delete(BookTable).where(BookTable.id == book_id))
        await self.session.commit()

    async def find_by_title_containing(self, title: str) -> List[Book]:
        """根据标题搜索书籍（忽略大小写）"""
        stmt = select(BookTable).where(BookTable.title.icontains(title, autoescape=True))
        return await self._find(stmt)

    async def find_by_author_containing(self, author: str) -> List[Book]:
        """根据作者搜索书籍（忽略大小写）"""
        stmt = select(BookTable).where(BookTable.author.icontains(author, autoescape=True))
        return await self._find(stmt)

    async def find_by_title_and_author_containing(self, title: str, author: str) -> List[Book]:
        """根据标题和作者同时搜索书籍（忽略大小写）"""
        stmt = select(BookTable).where(
            BookTable.title.icontains(title, autoescape=True),
            BookTable.author.icontains(author, autoescape=True),
        )
        return await self._find(stmt)

    async def _find(self, stmt) -> List[Book]:
        result = await self.session.execute(stmt.order_by(BookTable.id))
        return [row.to_book() for row in result.scalars().all()]
