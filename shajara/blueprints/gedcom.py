"""
GEDCOM API blueprint - import and export of family trees in GEDCOM 5.5
"""
from flask import Blueprint, current_app, request

from shajara.services.exceptions import ValidationError
from shajara.services.gedcom_service import GedcomService
from shajara.shared.api_response_formatter import APIResponseFormatter
from shajara.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

gedcom_bp = Blueprint('gedcom', __name__, url_prefix='/api/gedcom')


def _service() -> GedcomService:
    return GedcomService.from_config(current_app.config)


@gedcom_bp.route('/import', methods=['POST'])
def import_gedcom():
    """Import an uploaded .ged file into persons and relationships for a tree"""
    uploaded = request.files.get('file')
    if uploaded is None or not uploaded.filename:
        raise ValidationError("No file provided")

    tree_id = request.form.get('tree_id', '').strip()
    if not tree_id:
        raise ValidationError("tree_id is required")

    result = _service().import_gedcom_upload(uploaded.filename, uploaded.read(), tree_id)
    logger.info(f"Imported {uploaded.filename} into tree {tree_id}")
    return APIResponseFormatter.import_result(result)


@gedcom_bp.route('/export', methods=['POST'])
def export_gedcom():
    """Export a tree posted as JSON and return it as a .ged download"""
    payload = request.get_json(silent=True)
    invalid = APIResponseFormatter.validate_json_request(payload, ['persons'])
    if invalid:
        return invalid

    result = _service().export_tree(payload)
    return APIResponseFormatter.gedcom_attachment(result)
