from birthday_book.models.friend import Friend

__all__ = ["Friend"]
