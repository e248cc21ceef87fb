"""
业务异常定义
"""

class LibraryException(Exception):
    """基础异常类"""
    pass

class BookNotFoundError(LibraryException):
    """书籍未找到异常"""

    def __init__(self, book_id, message: str = "Book not found"):
        super().__init__(message)
        self.book_id = book_id
        self.message = message
