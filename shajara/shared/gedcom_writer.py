"""
GEDCOM writer for exporting a Shajara tree to GEDCOM format
"""

import re
from datetime import date
from pathlib import Path

from .family_grouping import group_relationships_into_families
from .gedcom_formatter import GEDCOMFileWriter, GEDCOMFormatter
from .logging_config import get_project_logger
from .models import ExportOptions, GedcomExportResult, Person, Relationship, Tree


logger = get_project_logger(__name__)

FILENAME_UNSAFE_PATTERN = re.compile(r'[^A-Za-z0-9\u0600-\u06FF_]')


def build_export_filename(tree_name: str, today: date = None) -> str:
    """'{tree name}_{YYYY-MM-DD}.ged' with anything but ASCII alphanumerics, Arabic and '_' replaced"""
    today = today or date.today()
    safe_name = FILENAME_UNSAFE_PATTERN.sub('_', tree_name or '') or 'family_tree'
    return f"{safe_name}_{today.isoformat()}.ged"


class GEDCOMWriter:
    """Write a tree's persons and relationships to GEDCOM format"""

    def __init__(self, options: ExportOptions = None):
        self.options = options or ExportOptions()
        self.formatter = GEDCOMFormatter(self.options)
        self.file_writer = GEDCOMFileWriter()

    def export(self, tree: Tree, persons: list[Person],
               relationships: list[Relationship]) -> GedcomExportResult:
        """Build the GEDCOM document in memory"""
        families = group_relationships_into_families(relationships, persons)
        lines = self.formatter.format_gedcom(persons, families)

        result = GedcomExportResult(
            content='\n'.join(lines),
            filename=build_export_filename(tree.name),
            stats={
                'persons_exported': len(persons),
                'families_exported': len(families),
                'relationships_exported': len(relationships),
            },
        )

        logger.info(
            f"GEDCOM export for tree {tree.id or tree.name}: {len(persons)} persons, "
            f"{len(families)} families, {len(lines)} lines"
        )
        return result

    def write_gedcom(self, tree: Tree, persons: list[Person], relationships: list[Relationship],
                     output_dir: str | Path = ".") -> tuple[Path, GedcomExportResult]:
        """Export and write the document into output_dir under its generated filename"""
        result = self.export(tree, persons, relationships)
        output_path = Path(output_dir) / result.filename
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file_writer.write_gedcom_file(result.content, output_path)
        logger.info(f"Wrote GEDCOM file {output_path}")
        return output_path, result


def export_to_gedcom(tree: Tree, persons: list[Person], relationships: list[Relationship],
                     options: ExportOptions = None) -> GedcomExportResult:
    """Export a tree to GEDCOM 5.5 text; never raises on incomplete person data"""
    return GEDCOMWriter(options).export(tree, persons, relationships)
