#!/usr/bin/env python3
"""
启动脚本 - 图书馆藏书管理系统
使用方法: python run.py
"""

import logging
import uvicorn

from src.config import settings

# 配置详细日志
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('debug.log', encoding='utf-8')
    ]
)

# 设置特定模块的日志级别
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

if __name__ == "__main__":
    logging.info("=" * 60)
    logging.info(f"启动{settings.app_name} v{settings.app_version}")
    logging.info(f"监听地址: {settings.api_host}:{settings.api_port}")
    logging.info(f"缓存: {settings.cache_backend}")
    logging.info("=" * 60)

    uvicorn.run(
        "src.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        reload_dirs=["src"],
        log_level="debug" if settings.debug else "info"
    )
