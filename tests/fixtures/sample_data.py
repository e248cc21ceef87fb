"""
测试用的样本数据
"""
from typing import Any, Dict, List

# 样本书籍数据（创建请求）
SAMPLE_BOOKS: List[Dict[str, Any]] = [
    {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "9780132350884",
        "publisher": "Prentice Hall",
        "total_copies": 3,
    },
    {
        "title": "The Clean Coder",
        "author": "Robert C. Martin",
        "isbn": "9780137081073",
        "publisher": "Prentice Hall",
        "total_copies": 2,
    },
    {
        "title": "Refactoring",
        "author": "Martin Fowler",
        "isbn": "9780201485677",
        "publisher": "Addison-Wesley",
        "total_copies": 4,
    },
]

# 作者名不含 "martin" 的书籍，用于区分作者搜索
SAMPLE_BOOKS_MIXED_AUTHORS: List[Dict[str, Any]] = [
    {
        "title": "Clean Code",
        "author": "Martin",
        "isbn": "9780132350884",
        "publisher": None,
        "total_copies": 3,
    },
    {
        "title": "The Clean Coder",
        "author": "Martin",
        "isbn": "9780137081073",
        "publisher": None,
        "total_copies": 2,
    },
    {
        "title": "Refactoring",
        "author": "Fowler",
        "isbn": "9780201485677",
        "publisher": None,
        "total_copies": 4,
    },
]

# 非法的请求数据
INVALID_BOOK_REQUESTS: List[Dict[str, Any]] = [
    {"author": "缺少标题", "total_copies": 1},
    {"title": "   ", "author": "空白标题", "total_copies": 1},
    {"title": "负数库存", "author": "作者", "total_copies": -1},
    {"title": "缺少数量", "author": "作者"},
]
