from .soft_delete import SoftDeletes, supports_soft_delete, install_soft_delete_filter

__all__ = [
    "SoftDeletes",
    "supports_soft_delete",
    "install_soft_delete_filter",
]
