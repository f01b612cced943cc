"""
GEDCOM service for both CLI and web interface
"""

import json
from collections.abc import Mapping
from pathlib import Path

from shajara.services.exceptions import NotFoundError, ValidationError, handle_service_exceptions
from shajara.shared import (
    ExportOptions,
    GEDCOMFileWriter,
    GEDCOMWriter,
    GedcomExportResult,
    GedcomParseResult,
    Person,
    Relationship,
    Tree,
    parse_gedcom,
)
from shajara.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
ALLOWED_EXTENSIONS = ('.ged', '.gedcom')


class GedcomService:
    """Service for importing and exporting GEDCOM documents"""

    def __init__(self, max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
                 submitter_name: str = None, submitter_email: str = None):
        self.max_upload_bytes = max_upload_bytes
        self.submitter_name = submitter_name
        self.submitter_email = submitter_email
        self.file_writer = GEDCOMFileWriter()

    @classmethod
    def from_config(cls, config: Mapping) -> 'GedcomService':
        """Build a service from a Flask config mapping"""
        return cls(
            max_upload_bytes=int(config.get('GEDCOM_MAX_UPLOAD_BYTES', DEFAULT_MAX_UPLOAD_BYTES)),
            submitter_name=config.get('GEDCOM_SUBMITTER_NAME'),
            submitter_email=config.get('GEDCOM_SUBMITTER_EMAIL'),
        )

    def validate_upload(self, filename: str, size: int) -> None:
        """Check the file extension and size limit of an upload"""
        if not filename:
            raise ValidationError("No file provided")
        if not filename.lower().endswith(ALLOWED_EXTENSIONS):
            raise ValidationError(f"Invalid file type: {filename}. Only .ged and .gedcom files are accepted")
        if size > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes / (1024 * 1024)
            raise ValidationError(f"File too large: {size} bytes (limit {limit_mb:g} MB)")

    @handle_service_exceptions(logger)
    def import_gedcom_content(self, content: str | bytes, tree_id: str) -> GedcomParseResult:
        """Parse GEDCOM text (or UTF-8 bytes) into persons and relationships for a tree"""
        if not tree_id or not str(tree_id).strip():
            raise ValidationError("tree_id is required")

        if isinstance(content, bytes):
            content = content.decode('utf-8-sig')

        result = parse_gedcom(content, str(tree_id).strip())
        if result.errors:
            logger.warning(f"GEDCOM import skipped {len(result.errors)} malformed line(s)")
        return result

    @handle_service_exceptions(logger)
    def import_gedcom_upload(self, filename: str, data: bytes, tree_id: str) -> GedcomParseResult:
        """Validate and import an uploaded GEDCOM file"""
        self.validate_upload(filename, len(data))
        logger.info(f"Importing uploaded GEDCOM file {filename} ({len(data)} bytes)")
        return self.import_gedcom_content(data, tree_id)

    @handle_service_exceptions(logger)
    def import_gedcom_file(self, input_file: str | Path, tree_id: str) -> GedcomParseResult:
        """Validate and import a GEDCOM file from disk"""
        input_path = Path(input_file)
        if not input_path.is_file():
            raise NotFoundError(f"GEDCOM file not found: {input_path}")

        self.validate_upload(input_path.name, input_path.stat().st_size)
        logger.info(f"Importing GEDCOM file {input_path}")
        return self.import_gedcom_content(self.file_writer.read_gedcom_file(input_path), tree_id)

    def _prepare_export(self, payload: dict) -> tuple[GEDCOMWriter, Tree, list[Person], list[Relationship]]:
        """
        Validate a tree payload and build the writer and model objects for it.

        The payload mirrors the JSON API body: 'tree', 'persons',
        'relationships' and optional 'options'.
        """
        if not isinstance(payload, dict):
            raise ValidationError("Export payload must be a JSON object")

        persons_data = payload.get('persons') or []
        relationships_data = payload.get('relationships') or []
        if not isinstance(persons_data, list) or not isinstance(relationships_data, list):
            raise ValidationError("'persons' and 'relationships' must be lists")

        tree_data = payload.get('tree') or {}
        options_data = payload.get('options') or {}
        if not isinstance(tree_data, dict) or not isinstance(options_data, dict):
            raise ValidationError("'tree' and 'options' must be objects")

        tree = Tree.from_dict(tree_data)
        persons = [Person.from_dict(item) for item in persons_data]
        relationships = [Relationship.from_dict(item) for item in relationships_data]

        options = ExportOptions.from_dict(options_data)
        options.submitter_name = options.submitter_name or self.submitter_name
        options.submitter_email = options.submitter_email or self.submitter_email

        return GEDCOMWriter(options), tree, persons, relationships

    @handle_service_exceptions(logger)
    def export_tree(self, payload: dict) -> GedcomExportResult:
        """Export a tree payload to GEDCOM text"""
        writer, tree, persons, relationships = self._prepare_export(payload)
        return writer.export(tree, persons, relationships)

    @handle_service_exceptions(logger)
    def export_tree_file(self, input_file: str | Path, output_dir: str | Path = ".",
                         options: dict = None) -> dict:
        """Export a JSON tree dump to a .ged file in output_dir"""
        input_path = Path(input_file)
        if not input_path.is_file():
            raise NotFoundError(f"Input file not found: {input_path}")

        with open(input_path, encoding='utf-8') as f:
            payload = json.load(f)

        if options and isinstance(payload, dict):
            payload['options'] = {**(payload.get('options') or {}), **options}

        writer, tree, persons, relationships = self._prepare_export(payload)
        output_path, result = writer.write_gedcom(tree, persons, relationships, output_dir)

        return {
            "output_file": str(output_path),
            "stats": result.stats,
        }

