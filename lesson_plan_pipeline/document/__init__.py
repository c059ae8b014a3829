from .builder import build_document
from .inline import parse_inline, plain_text
from .models import (
    BlankLine,
    Block,
    BulletItem,
    Document,
    Heading,
    InlineRun,
    Paragraph,
    Table,
    TableCell,
    TableRow,
)

__all__ = [
    "build_document",
    "parse_inline",
    "plain_text",
    "BlankLine",
    "Block",
    "BulletItem",
    "Document",
    "Heading",
    "InlineRun",
    "Paragraph",
    "Table",
    "TableCell",
    "TableRow",
]
