"""
数据库配置
"""
import logging
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

# 创建基础模型类
Base = declarative_base()

# 数据库引擎和会话工厂
engine: Optional[AsyncEngine] = None
SessionLocal: Optional[async_sessionmaker] = None


def _ensure_sqlite_dir(database_url: str):
    """SQLite文件数据库需要先创建所在目录"""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


async def init_database(database_url: str, echo: bool = False) -> async_sessionmaker:
    """初始化数据库"""
    global engine, SessionLocal
    # 导入表模型，确保其注册到 Base.metadata
    from src.models import tables  # noqa: F401

    _ensure_sqlite_dir(database_url)
    engine = create_async_engine(database_url, echo=echo)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False)

    # 创建所有表
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"数据库初始化完成: {engine.url.render_as_string(hide_password=True)}")
    return SessionLocal


async def close_database():
    """关闭数据库连接"""
    global engine, SessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("数据库连接已关闭")
    engine = None
    SessionLocal = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """获取数据库会话（每个请求一个）"""
    if SessionLocal is None:
        raise RuntimeError("Database is not initialized, call init_database() first")
    async with SessionLocal() as session:
        yield session
