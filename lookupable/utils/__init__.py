from .comparison import as_identifier, loose_equals, is_member, is_numeric

__all__ = [
    "as_identifier",
    "loose_equals",
    "is_member",
    "is_numeric",
]
