#!/usr/bin/env python3
"""
书籍管理路由
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List
import logging

from ..database import get_session
from ..exceptions import BookNotFoundError
from ..models.schemas import BookRequest, BookResponse
from ..repositories.book_repository import BookRepository
from ..services.book_service import BookService

logger = logging.getLogger(__name__)

# 创建路由
book_router = APIRouter(prefix="/api/books", tags=["books"])


def get_book_service(request: Request, session: AsyncSession = Depends(get_session)) -> BookService:
    """为当前请求组装书籍服务"""
    return BookService(BookRepository(session), request.app.state.cache)


@book_router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def add_book(payload: BookRequest, service: BookService = Depends(get_book_service)):
    """新增书籍"""
    try:
        book = await service.add_book(payload)
        return BookResponse.from_book(book)
    except Exception as e:
        logger.error(f"新增书籍失败: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@book_router.get("", response_model=List[BookResponse])
async def get_all_books(service: BookService = Depends(get_book_service)):
    """获取全部书籍"""
    try:
        books = await service.get_all_books()
        return [BookResponse.from_book(book) for book in books]
    except Exception as e:
        logger.error(f"获取书籍列表失败: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@book_router.get("/search", response_model=List[BookResponse])
async def search_books(
    title: Optional[str] = Query(None),
    author: Optional[str] = Query(None),
    service: BookService = Depends(get_book_service),
):
    """按标题和/或作者搜索书籍"""
    try:
        books = await service.search_books(title, author)
        return [BookResponse.from_book(book) for book in books]
    except Exception as e:
        logger.error(f"搜索书籍失败: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@book_router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: int, service: BookService = Depends(get_book_service)):
    """获取书籍详情"""
    try:
        book = await service.get_book_by_id(book_id)
        return BookResponse.from_book(book)
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"获取书籍详情失败: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@book_router.put("/{book_id}", response_model=BookResponse)
async def update_book(book_id: int, payload: BookRequest, service: BookService = Depends(get_book_service)):
    """更新书籍"""
    try:
        book = await service.update_book(book_id, payload)
        return BookResponse.from_book(book)
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"更新书籍失败: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@book_router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: int, service: BookService = Depends(get_book_service)):
    """删除书籍"""
    try:
        await service.delete_book(book_id)
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"删除书籍失败: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
