"""
pytest配置文件，定义全局fixtures和测试配置
"""
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Generator
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.config import Settings
from src.database import init_database, close_database
from src.main import create_app
from src.services.cache_service import MemoryCacheService


@pytest.fixture
def temp_db_path() -> Generator[str, None, None]:
    """创建临时数据库文件路径"""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as temp_file:
        temp_path = temp_file.name
    yield temp_path
    Path(temp_path).unlink(missing_ok=True)


@pytest.fixture
def test_settings(temp_db_path: str) -> Settings:
    """测试用配置：临时SQLite + 内存缓存"""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{temp_db_path}",
        cache_backend="memory",
        cache_ttl=0,
    )


@pytest.fixture
async def test_db(test_settings: Settings) -> AsyncGenerator[async_sessionmaker, None]:
    """创建测试数据库并返回会话工厂"""
    session_factory = await init_database(test_settings.database_url)
    yield session_factory
    await close_database()


@pytest.fixture
async def db_session(test_db: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """创建测试数据库会话"""
    async with test_db() as session:
        yield session


@pytest.fixture
def memory_cache() -> MemoryCacheService:
    """内存缓存实例"""
    return MemoryCacheService()


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """创建FastAPI测试客户端（使用独立的临时数据库）"""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def sample_book_data():
    """示例书籍数据"""
    return {
        "title": "代码大全",
        "author": "史蒂夫·迈克康奈尔",
        "isbn": "9787121022982",
        "publisher": "电子工业出版社",
        "total_copies": 5,
    }


def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line(
        "markers", "unit: 单元测试"
    )
    config.addinivalue_line(
        "markers", "integration: 集成测试"
    )
    config.addinivalue_line(
        "markers", "e2e: 端到端测试"
    )
