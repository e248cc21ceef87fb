#!/usr/bin/env python3
"""
主应用入口
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .config import Settings, settings as default_settings
from .database import init_database, close_database
from .routes.book_routes import book_router
from .services.cache_service import create_cache

# 配置日志
logging.basicConfig(
    level=getattr(logging, default_settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """创建FastAPI应用"""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("应用启动中...")
        await init_database(settings.database_url, echo=settings.database_echo)
        app.state.cache = await create_cache(settings)
        logger.info("数据库和缓存就绪")
        try:
            yield
        finally:
            logger.info("应用关闭中...")
            await app.state.cache.close()
            await close_database()

    app = FastAPI(
        title=settings.app_name,
        description="图书馆藏书增删改查服务",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册路由
    app.include_router(book_router)

    @app.get("/health")
    async def health(request: Request):
        """健康检查"""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "cache": request.app.state.cache.get_stats(),
        }

    return app


app = create_app()


def run_server():
    """启动服务器"""
    uvicorn.run(
        "src.main:app",
        host=default_settings.api_host,
        port=default_settings.api_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run_server()
