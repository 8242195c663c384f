"""
Custom Exceptions for the Arco persona API
"""

from fastapi import HTTPException, status


class VariantTableNotFoundError(HTTPException):
    """Requested variant table does not exist."""

    def __init__(self, table: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Variant table {table} not found"
        )
