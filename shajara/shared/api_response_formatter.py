"""
API response formatting utilities for consistent GEDCOM API responses
"""

from typing import Any
from urllib.parse import quote

from flask import Response, jsonify

from .models import GedcomExportResult, GedcomParseResult


GEDCOM_MIMETYPE = 'application/x-gedcom'


class APIResponseFormatter:
    """Utility class for formatting consistent API responses"""

    @staticmethod
    def success(data: Any = None, message: str = "", status_code: int = 200) -> tuple:
        """Format a successful API response"""
        response = {
            'success': True,
            'message': message
        }

        if data is not None:
            if isinstance(data, dict):
                response.update(data)
            else:
                response['data'] = data

        return jsonify(response), status_code

    @staticmethod
    def error(error_message: str, status_code: int = 400, details: dict | None = None) -> tuple:
        """Format an error API response"""
        response = {
            'success': False,
            'error': error_message
        }

        if details:
            response['details'] = details

        return jsonify(response), status_code

    @staticmethod
    def import_result(result: GedcomParseResult) -> tuple:
        """Import summary plus the mapped persons and relationships"""
        data = result.to_dict()
        data['persons_found'] = len(result.persons)
        data['families_found'] = len(result.families)
        message = f"Imported {len(result.persons)} persons and {len(result.relationships)} relationships"
        return APIResponseFormatter.success(data, message=message)

    @staticmethod
    def gedcom_attachment(result: GedcomExportResult) -> Response:
        """Serve an exported document as a .ged download"""
        response = Response(result.content, mimetype=GEDCOM_MIMETYPE)
        response.headers['Content-Disposition'] = f"attachment; filename*=UTF-8''{quote(result.filename)}"
        response.headers['X-Persons-Exported'] = str(result.stats.get('persons_exported', 0))
        response.headers['X-Families-Exported'] = str(result.stats.get('families_exported', 0))
        return response

    @staticmethod
    def validate_json_request(request_data: dict, required_fields: list) -> tuple | None:
        """Validate JSON request data and return error response if invalid"""
        if not request_data:
            return APIResponseFormatter.error('No data provided')

        missing_fields = [field for field in required_fields if field not in request_data]
        if missing_fields:
            return APIResponseFormatter.error(
                f"Missing required fields: {', '.join(missing_fields)}"
            )

        return None
