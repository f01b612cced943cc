"""
Service layer for GEDCOM import and export
"""
