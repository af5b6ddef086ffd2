"""Lossless conversion between the Document Model and plain dictionaries."""
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from docx_viewer.model.content import (
    Alignment,
    DataType,
    Element,
    Heading,
    HeadingSource,
    ImageReference,
    ListGroup,
    ListItem,
    MarkerKind,
    Paragraph,
    TableCell,
    TableData,
    TableMetadata,
    TableRow,
    TextFormatting,
)
from docx_viewer.model.document_model import Document, DocumentMetadata


def formatting_to_dict(formatting: TextFormatting) -> Dict[str, Any]:
    return {
        "bold": formatting.bold,
        "italic": formatting.italic,
        "underline": formatting.underline,
        "color": formatting.color,
    }


def formatting_from_dict(data: Mapping[str, Any]) -> TextFormatting:
    return TextFormatting(
        bold=bool(data["bold"]),
        italic=bool(data["italic"]),
        underline=bool(data["underline"]),
        color=data["color"],
    )


def element_to_dict(element: Element) -> Dict[str, Any]:
    """Tagged dictionary for one element; nullable fields are always present."""
    if isinstance(element, Heading):
        return {
            "kind": "heading",
            "level": element.level,
            "text": element.text,
            "number": element.number,
            "source": element.source.value,
            "formatting": formatting_to_dict(element.formatting),
        }
    if isinstance(element, Paragraph):
        return {
            "kind": "paragraph",
            "text": element.text,
            "formatting": formatting_to_dict(element.formatting),
        }
    if isinstance(element, ListGroup):
        return {
            "kind": "list",
            "native": element.native,
            "items": [
                {"text": item.text, "level": item.level, "marker": item.marker.value}
                for item in element.items
            ],
            "formatting": formatting_to_dict(element.formatting),
        }
    if isinstance(element, TableData):
        metadata = element.metadata
        return {
            "kind": "table",
            "rows": [
                [{"text": cell.text, "data_type": cell.data_type.value} for cell in row.cells]
                for row in element.rows
            ],
            "metadata": {
                "column_count": metadata.column_count,
                "row_count": metadata.row_count,
                "has_header": metadata.has_header,
                "alignments": [value.value for value in metadata.alignments],
                "widths": list(metadata.widths),
                "column_types": [value.value for value in metadata.column_types],
            },
            "formatting": formatting_to_dict(element.formatting),
        }
    if isinstance(element, ImageReference):
        return {
            "kind": "image",
            "identifier": element.identifier,
            "caption": element.caption,
            "width_emu": element.width_emu,
            "height_emu": element.height_emu,
            "formatting": formatting_to_dict(element.formatting),
        }
    raise TypeError(f"Unsupported element: {type(element).__name__}")


def _heading_from_dict(data: Mapping[str, Any]) -> Heading:
    return Heading(
        level=int(data["level"]),
        text=data["text"],
        number=data["number"],
        source=HeadingSource(data["source"]),
        formatting=formatting_from_dict(data["formatting"]),
    )


def _paragraph_from_dict(data: Mapping[str, Any]) -> Paragraph:
    return Paragraph(text=data["text"], formatting=formatting_from_dict(data["formatting"]))


def _list_from_dict(data: Mapping[str, Any]) -> ListGroup:
    return ListGroup(
        items=tuple(
            ListItem(text=item["text"], level=int(item["level"]), marker=MarkerKind(item["marker"]))
            for item in data["items"]
        ),
        native=bool(data["native"]),
        formatting=formatting_from_dict(data["formatting"]),
    )


def _table_from_dict(data: Mapping[str, Any]) -> TableData:
    metadata = data["metadata"]
    return TableData(
        rows=tuple(
            TableRow(tuple(TableCell(cell["text"], DataType(cell["data_type"])) for cell in row))
            for row in data["rows"]
        ),
        metadata=TableMetadata(
            column_count=int(metadata["column_count"]),
            row_count=int(metadata["row_count"]),
            has_header=bool(metadata["has_header"]),
            alignments=tuple(Alignment(value) for value in metadata["alignments"]),
            widths=tuple(int(value) for value in metadata["widths"]),
            column_types=tuple(DataType(value) for value in metadata["column_types"]),
        ),
        formatting=formatting_from_dict(data["formatting"]),
    )


def _image_from_dict(data: Mapping[str, Any]) -> ImageReference:
    return ImageReference(
        identifier=data["identifier"],
        caption=data["caption"],
        width_emu=data["width_emu"],
        height_emu=data["height_emu"],
        formatting=formatting_from_dict(data["formatting"]),
    )


_ELEMENT_READERS: Dict[str, Callable[[Mapping[str, Any]], Element]] = {
    "heading": _heading_from_dict,
    "paragraph": _paragraph_from_dict,
    "list": _list_from_dict,
    "table": _table_from_dict,
    "image": _image_from_dict,
}


def element_from_dict(data: Mapping[str, Any]) -> Element:
    kind = data.get("kind")
    reader = _ELEMENT_READERS.get(kind)
    if reader is None:
        raise ValueError(f"Unknown element kind: {kind!r}")
    return reader(data)


def document_to_dict(document: Document) -> Dict[str, Any]:
    metadata = document.metadata
    return {
        "title": document.title,
        "metadata": {
            "file_path": metadata.file_path,
            "file_size": metadata.file_size,
            "word_count": metadata.word_count,
            "page_count": metadata.page_count,
            "author": metadata.author,
            "created": metadata.created,
            "modified": metadata.modified,
        },
        "elements": [element_to_dict(element) for element in document.elements],
    }


def document_from_dict(data: Mapping[str, Any]) -> Document:
    metadata = data["metadata"]
    return Document(
        title=data["title"],
        metadata=DocumentMetadata(
            file_path=metadata["file_path"],
            file_size=int(metadata["file_size"]),
            word_count=int(metadata["word_count"]),
            page_count=int(metadata["page_count"]),
            author=metadata["author"],
            created=metadata["created"],
            modified=metadata["modified"],
        ),
        elements=tuple(element_from_dict(element) for element in data["elements"]),
    )
