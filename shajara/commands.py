"""
Flask CLI commands for Shajara GEDCOM tools
"""

import json
import sys
from pathlib import Path

import click
from flask import current_app

from shajara.services.gedcom_service import GedcomService
from shajara.shared.service_utils import execute_with_progress


def register_commands(app):
    """Register all CLI commands with the Flask app"""

    @app.cli.command('import-gedcom')
    @click.argument('gedcom_file', type=click.Path(dir_okay=False))
    @click.option('--tree-id', required=True, help='Tree the imported persons belong to')
    @click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write persons and relationships to this JSON file')
    @click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
    def import_gedcom(gedcom_file, tree_id, output, verbose):
        """Import a GEDCOM 5.5 file into Shajara persons and relationships."""
        click.echo("📥 Starting GEDCOM import...")

        def progress_callback(data):
            if verbose:
                click.echo(f"Status: {data.get('status')} - {data.get('message', '')}")

        service = GedcomService.from_config(current_app.config)
        result = execute_with_progress(
            "GEDCOM import",
            service.import_gedcom_file,
            progress_callback if verbose else None,
            input_file=gedcom_file,
            tree_id=tree_id,
        )

        if not result['success']:
            click.echo(f"❌ GEDCOM import failed: {result['error']}")
            sys.exit(1)

        parse_result = result['results']
        stats = parse_result.stats
        click.echo("✅ GEDCOM import completed!")
        click.echo("📊 Summary:")
        click.echo(f"  - Lines: {stats['total_lines']}")
        click.echo(f"  - Persons: {stats['persons_created']}")
        click.echo(f"  - Families: {stats['families_found']}")
        click.echo(f"  - Relationships: {stats['relationships_created']}")
        click.echo(f"  - Errors: {len(parse_result.errors)}")
        click.echo(f"  - Warnings: {len(parse_result.warnings)}")

        if verbose:
            for error in parse_result.errors:
                click.echo(f"  ⚠️ {error}")
            for warning in parse_result.warnings:
                click.echo(f"  ℹ️ {warning}")

        if output:
            with open(output, 'w', encoding='utf-8') as f:
                json.dump(parse_result.to_dict(), f, ensure_ascii=False, indent=2)
            click.echo(f"📁 Output file: {output}")

    @app.cli.command('export-gedcom')
    @click.argument('input_json', type=click.Path(dir_okay=False))
    @click.option('--output-dir', default='.', type=click.Path(file_okay=False), help='Directory for the .ged file')
    @click.option('--include-notes', is_flag=True, help='Export person notes')
    @click.option('--include-photos', is_flag=True, help='Export photo URLs as OBJE records')
    @click.option('--include-hijri-dates', is_flag=True, help='Export Hijri mirrors of birth and death dates')
    @click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
    def export_gedcom(input_json, output_dir, include_notes, include_photos, include_hijri_dates, verbose):
        """Export a JSON tree dump (tree, persons, relationships) to a GEDCOM file."""
        click.echo("📜 Starting GEDCOM export...")

        def progress_callback(data):
            if verbose:
                click.echo(f"Status: {data.get('status')} - {data.get('message', '')}")

        options = {
            name: True
            for name, enabled in (('include_notes', include_notes),
                                  ('include_photos', include_photos),
                                  ('include_hijri_dates', include_hijri_dates))
            if enabled
        }

        service = GedcomService.from_config(current_app.config)
        result = execute_with_progress(
            "GEDCOM export",
            service.export_tree_file,
            progress_callback if verbose else None,
            input_file=input_json,
            output_dir=Path(output_dir),
            options=options,
        )

        if not result['success']:
            click.echo(f"❌ GEDCOM export failed: {result['error']}")
            sys.exit(1)

        click.echo("✅ GEDCOM export completed successfully!")
        click.echo(f"📁 Output file: {result['results']['output_file']}")
        if verbose:
            click.echo(f"Results: {result['results']['stats']}")
