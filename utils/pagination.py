# utils/pagination.py
import math
from pydantic import BaseModel


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


def paginate(page: int, limit: int, total: int) -> Pagination:
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        totalPages=math.ceil(total / limit) if limit else 0,
    )


def skip_for(page: int, limit: int) -> int:
    return (page - 1) * limit
