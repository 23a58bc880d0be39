# app/api/paging.py
from app.domain.errors import ValidationFailed
from app.utils.settings import MAX_PAGE_SIZE


def check_paging(page_number: int, page_size: int) -> None:
    #jawne 400 z komunikatem zamiast cichego obciecia page_size
    if page_number < 1:
        raise ValidationFailed("Page number must be greater than 0")
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        raise ValidationFailed(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
