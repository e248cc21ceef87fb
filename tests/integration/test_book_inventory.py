"""
书籍服务集成测试（真实数据库 + 内存缓存）
"""
import asyncio
import pytest
from src.repositories.book_repository import BookRepository
from src.services.book_service import BookService
from src.models.schemas import BookRequest
from src.exceptions import BookNotFoundError
from tests.fixtures.sample_data import SAMPLE_BOOKS, SAMPLE_BOOKS_MIXED_AUTHORS


@pytest.mark.integration
class TestBookInventory:
    """书籍服务集成测试类"""

    @pytest.fixture
    def book_service(self, db_session, memory_cache):
        return BookService(BookRepository(db_session), memory_cache)

    @pytest.fixture
    async def seeded(self, book_service):
        return [await book_service.add_book(BookRequest(**data)) for data in SAMPLE_BOOKS_MIXED_AUTHORS]

    @pytest.mark.asyncio
    async def test_read_your_writes(self, book_service):
        """测试新增后立即读取得到相同书籍"""
        added = await book_service.add_book(BookRequest(**SAMPLE_BOOKS[0]))

        fetched = await book_service.get_book_by_id(added.id)

        assert fetched == added
        assert fetched.available_copies == SAMPLE_BOOKS[0]["total_copies"]

    @pytest.mark.asyncio
    async def test_listing_reflects_every_write(self, book_service):
        """测试每次写操作后全量列表都是最新的"""
        assert await book_service.get_all_books() == []

        added = await book_service.add_book(BookRequest(**SAMPLE_BOOKS[0]))
        assert [book.id for book in await book_service.get_all_books()] == [added.id]

        await book_service.update_book(added.id, BookRequest(title="Renamed", author="Someone", total_copies=1))
        assert [book.title for book in await book_service.get_all_books()] == ["Renamed"]

        await book_service.delete_book(added.id)
        assert await book_service.get_all_books() == []

    @pytest.mark.asyncio
    async def test_delete_then_not_found(self, book_service, seeded):
        """测试删除后获取抛出异常且列表中不再包含"""
        target = seeded[0]
        await book_service.get_book_by_id(target.id)

        await book_service.delete_book(target.id)

        with pytest.raises(BookNotFoundError):
            await book_service.get_book_by_id(target.id)
        assert target.id not in [book.id for book in await book_service.get_all_books()]
        with pytest.raises(BookNotFoundError):
            await book_service.delete_book(target.id)

    @pytest.mark.asyncio
    async def test_update_resets_available_copies(self, book_service, seeded):
        """测试更新重置可借数量"""
        updated = await book_service.update_book(
            seeded[0].id, BookRequest(title="Clean Code", author="Martin", total_copies=10))

        assert updated.available_copies == 10
        assert (await book_service.get_book_by_id(seeded[0].id)).available_copies == 10

    @pytest.mark.asyncio
    async def test_search_examples(self, book_service, seeded):
        """测试搜索示例"""
        def titles(books):
            return [book.title for book in books]

        assert titles(await book_service.search_books("clean", "")) == ["Clean Code", "The Clean Coder"]
        assert titles(await book_service.search_books("", "martin")) == ["Clean Code", "The Clean Coder"]
        assert titles(await book_service.search_books("coder", "martin")) == ["The Clean Coder"]
        assert titles(await book_service.search_books("clean", "fowler")) == []
        assert titles(await book_service.search_books(None, None)) == titles(await book_service.get_all_books())

    @pytest.mark.asyncio
    async def test_search_not_stale_after_write(self, book_service, seeded):
        """测试新增书籍后搜索结果刷新"""
        assert len(await book_service.search_books("clean", None)) == 2

        await book_service.add_book(BookRequest(title="Clean Architecture", author="Martin", total_copies=1))

        assert len(await book_service.search_books("clean", None)) == 3

    @pytest.mark.asyncio
    async def test_concurrent_add_books(self, test_db, memory_cache):
        """测试并发新增得到不同ID且都可见"""
        async def add(data):
            async with test_db() as session:
                service = BookService(BookRepository(session), memory_cache)
                return await service.add_book(BookRequest(**data))

        added = await asyncio.gather(*(add(data) for data in SAMPLE_BOOKS))

        ids = [book.id for book in added]
        assert len(set(ids)) == len(SAMPLE_BOOKS)
        async with test_db() as session:
            service = BookService(BookRepository(session), memory_cache)
            listed = [book.id for book in await service.get_all_books()]
        assert sorted(listed) == sorted(ids)
