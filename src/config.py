"""
应用配置
从环境变量（及 .env 文件）读取
"""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # 应用设置
    app_name: str = os.getenv("APP_NAME", "图书馆藏书管理系统")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    debug: bool = _env_bool("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # 数据库设置（默认SQLite，生产环境可用 postgresql+asyncpg://...）
    database_url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/library.db")
    database_echo: bool = _env_bool("DATABASE_ECHO")

    # 缓存设置
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")  # memory 或 redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "0"))  # 0 表示永不过期
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "library_cache")
    cache_max_entries: int = int(os.getenv("CACHE_MAX_ENTRIES", "1000"))  # 内存缓存每个命名空间的条目上限，0 表示不限制


settings = Settings()
