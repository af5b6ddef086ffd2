"""Entry-point for the docx viewer pipeline."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from docx_viewer.model.document_model import Document
from docx_viewer.parser.core_properties import CorePropertiesParser
from docx_viewer.parser.docx_loader import DocxPackage
from docx_viewer.parser.document_parser import DocumentParser
from docx_viewer.parser.numbering_parser import NumberingParser
from docx_viewer.parser.styles_parser import StylesParser
from docx_viewer.renderer.display_renderer import DisplayRenderer
from docx_viewer.renderer.exporter import ExportFormat, export_document, write_export
from docx_viewer.search.outline import generate_outline
from docx_viewer.search.search_engine import search_document
from docx_viewer.structure.builder import DocumentBuilder
from docx_viewer.utils.logger import get_logger
from docx_viewer.utils.settings import DEFAULT_SETTINGS, EngineSettings

LOGGER = get_logger(__name__)


def build_document(docx_path: Path, settings: Optional[EngineSettings] = None) -> Document:
    """Load a DOCX package, parse WordprocessingML, and build the normalized document."""
    settings = settings or DEFAULT_SETTINGS
    docx_path = Path(docx_path)
    if not docx_path.exists():
        raise FileNotFoundError(f"DOCX file not found: {docx_path}")

    package = DocxPackage.load(docx_path, settings.max_package_bytes)
    styles = StylesParser(package.get_styles_xml()).parse()
    numbering = NumberingParser(package.get_numbering_xml()).parse()
    properties = CorePropertiesParser(package.get_core_properties_xml()).parse()
    tree = DocumentParser(package, styles, numbering, properties).parse()
    return DocumentBuilder(settings).build(
        tree,
        title=properties.title or docx_path.stem,
        file_path=str(docx_path),
        file_size=docx_path.stat().st_size,
    )


def main(
    docx_file: str,
    export: Optional[str] = None,
    output: Optional[str] = None,
    search: Optional[str] = None,
    outline: bool = False,
    case_sensitive: bool = False,
) -> None:
    """Build the document, then print or write the requested view."""
    docx_path = Path(docx_file).resolve()
    LOGGER.info("Building document for %s", docx_path.name)
    document = build_document(docx_path)

    if search is not None:
        for result in search_document(document, search, case_sensitive):
            print(f"[{result.element_index}] {result.context}")
        return

    if outline:
        for entry in generate_outline(document):
            print(f"{'  ' * (entry.level - 1)}{entry.title}")
        return

    if export is None:
        for line in DisplayRenderer().render(document):
            print(line)
        return

    export_format = ExportFormat(export)
    if output is None:
        print(export_document(document, export_format), end="")
    else:
        write_export(document, export_format, Path(output).resolve())


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="View DOCX files as structured text or export them")
    parser.add_argument("docx_file", help="Path to the input .docx file")
    parser.add_argument("--export", choices=[value.value for value in ExportFormat], help="Export format")
    parser.add_argument("--output", help="File to write the export to (default: stdout)")
    parser.add_argument("--search", help="Print matches for a search query")
    parser.add_argument("--outline", action="store_true", help="Print the heading outline")
    parser.add_argument("--case-sensitive", action="store_true", help="Match case when searching")

    args = parser.parse_args(argv)
    main(
        args.docx_file,
        export=args.export,
        output=args.output,
        search=args.search,
        outline=args.outline,
        case_sensitive=args.case_sensitive,
    )


if __name__ == "__main__":  # pragma: no cover
    run()
