"""
Shared GEDCOM utilities for Arabic family tree interchange
"""

from .arabic_utils import ArabicNameParser
from .date_utils import GedcomDateParser
from .family_grouping import group_relationships_into_families
from .gedcom_formatter import GEDCOMFileWriter, GEDCOMFormatter
from .gedcom_import import GedcomImportMapper, parse_gedcom
from .gedcom_parser import GEDCOMParser
from .gedcom_writer import GEDCOMWriter, build_export_filename, export_to_gedcom
from .hijri_calendar import DualDate, gregorian_to_hijri
from .models import (
    ExportOptions,
    FamilyGroup,
    GedcomExportResult,
    GedcomParseResult,
    Person,
    Relationship,
    Tree,
)


__all__ = [
    'GEDCOMParser', 'GEDCOMWriter', 'GEDCOMFormatter', 'GEDCOMFileWriter',
    'GedcomImportMapper', 'parse_gedcom', 'export_to_gedcom', 'build_export_filename',
    'group_relationships_into_families', 'ArabicNameParser', 'GedcomDateParser',
    'DualDate', 'gregorian_to_hijri',
    'ExportOptions', 'FamilyGroup', 'GedcomExportResult', 'GedcomParseResult',
    'Person', 'Relationship', 'Tree',
]
