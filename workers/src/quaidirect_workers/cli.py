#!/usr/bin/env python3
"""
CLI tool for QuaiDirect contact imports

This provides a command-line interface for:
- Previewing a contact file import (format, stats, per-row errors)
- Re-exporting a contact file as normalized CSV
- Checking single email, phone, SIRET or GPS values
"""

import asyncio
import argparse
import json
import sys
from pathlib import Path
from typing import List

from .config import configure_logging
from .exceptions import ContactImportError
from .models.contact import CONTACT_GROUPS, ParsedContact
from .parsers import export_contacts_to_csv
from .utils.deduplication import select_importable
from .utils.validation import (
    format_french_phone,
    format_siret,
    validate_email,
    validate_french_phone,
    validate_gps_coordinates,
    validate_siret,
)
from .validation.import_pipeline import ContactImportPipeline


async def _load_contacts(pipeline: ContactImportPipeline, path: Path) -> List[ParsedContact]:
    report = await pipeline.import_file(path.name, path)
    return report.contacts


async def import_contacts(args):
    """Preview the import of a contact file"""
    
    file_path = Path(args.file)
    if not file_path.exists():
        print(f"Error: File {file_path} does not exist")
        return 1
    
    pipeline = ContactImportPipeline(canonical_phones=args.canonical_phones or None)
    
    existing = []
    if args.existing:
        existing = await _load_contacts(pipeline, Path(args.existing))
    
    report = await pipeline.import_file(file_path.name, file_path, existing)
    stats = report.stats
    
    print(f"Importing file: {file_path.name}")
    print(f"Detected Format: {report.format.value}")
    if report.separator:
        print(f"Separator: {report.separator!r}")
    print("-" * 50)
    print(f"Total: {stats.total}")
    print(f"Valid: {stats.valid}")
    print(f"Invalid: {stats.invalid}")
    print(f"Duplicates: {stats.duplicates}")
    print(f"Importable: {stats.importable}")
    
    if args.verbose:
        print("\nContacts:")
        for index, contact in enumerate(report.contacts, start=1):
            status = "✓" if contact.is_importable else "✗"
            name = " ".join(filter(None, [contact.first_name, contact.last_name]))
            print(f"  {index:>4} {status} {contact.email or '-'} {contact.phone or '-'} {name}")
            for error in contact.errors:
                print(f"         {error}")
            if contact.is_duplicate:
                print("         Doublon")
    
    if args.output:
        result = report.to_dict()
        result["importable"] = [
            contact.to_dict()
            for contact in select_importable(report.contacts, args.group, args.custom_group)
        ]
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        print(f"\nResults saved to: {args.output}")
    
    return 0


async def export_contacts(args):
    """Re-export a contact file as CSV"""
    
    file_path = Path(args.file)
    if not file_path.exists():
        print(f"Error: File {file_path} does not exist")
        return 1
    
    contacts = await _load_contacts(ContactImportPipeline(), file_path)
    csv_text = export_contacts_to_csv(contacts)
    
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(csv_text)
        print(f"Exported {len(contacts)} contacts to: {args.output}")
    else:
        print(csv_text)
    
    return 0


def check_value(args):
    """Run a single field validator"""
    
    if args.field == 'gps':
        if len(args.values) != 2:
            print("Error: gps expects LAT LNG")
            return 1
        try:
            lat, lng = (float(value) for value in args.values)
        except ValueError:
            print("Error: coordinates must be numbers")
            return 1
        result = validate_gps_coordinates(lat, lng)
        formatted = f"{lat}, {lng}"
    else:
        value = " ".join(args.values)
        if args.field == 'email':
            result = validate_email(value)
            formatted = value.strip()
        elif args.field == 'phone':
            result = validate_french_phone(value)
            formatted = format_french_phone(value)
        else:
            result = validate_siret(value)
            formatted = format_siret(value)
    
    if result.is_valid:
        print(f"✓ {formatted}")
        return 0
    
    print(f"✗ {result.error}")
    return 1


def setup_parser():
    """Setup command line argument parser"""
    
    parser = argparse.ArgumentParser(
        description="QuaiDirect contact import CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s import contacts.csv --existing current.csv --verbose
  %(prog)s import carnet.vcf --group custom --custom-group "Marché du samedi" -o report.json
  %(prog)s export contacts.xlsx -o contacts.csv
  %(prog)s check phone "06 12 34 56 78"
  %(prog)s check gps 43.29 5.37
        """
    )
    parser.add_argument('--log-level', default=None, help='Log level (default: WARNING)')
    
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    
    # Import command
    import_parser = subparsers.add_parser('import', help='Preview a contact file import')
    import_parser.add_argument('file', help='Contact file (CSV, VCF, JSON, XLSX, XLS)')
    import_parser.add_argument('--existing', '-e', help='File with existing contacts to check duplicates against')
    import_parser.add_argument('--group', '-g', choices=sorted(CONTACT_GROUPS),
                               help='Group assigned to importable contacts')
    import_parser.add_argument('--custom-group', help='Group name when --group is custom')
    import_parser.add_argument('--canonical-phones', action='store_true',
                               help='Compare phones in E.164 form when detecting duplicates')
    import_parser.add_argument('--output', '-o', help='Output file for results (JSON)')
    import_parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    
    # Export command
    export_parser = subparsers.add_parser('export', help='Re-export a contact file as CSV')
    export_parser.add_argument('file', help='Contact file (CSV, VCF, JSON, XLSX, XLS)')
    export_parser.add_argument('--output', '-o', help='Output CSV file (default: stdout)')
    
    # Check command
    check_parser = subparsers.add_parser('check', help='Validate a single value')
    check_parser.add_argument('field', choices=['email', 'phone', 'siret', 'gps'])
    check_parser.add_argument('values', nargs='+', help='Value to check (LAT LNG for gps)')
    
    return parser


async def main(argv=None):
    """Main CLI function"""
    
    parser = setup_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return 1
    
    configure_logging(level=args.log_level or "WARNING", fmt="console")
    
    try:
        if args.command == 'import':
            return await import_contacts(args)
        elif args.command == 'export':
            return await export_contacts(args)
        elif args.command == 'check':
            return check_value(args)
        else:
            print(f"Unknown command: {args.command}")
            return 1
            
    except ContactImportError as e:
        print(f"Error: {e.message}")
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 1


def run():
    """Console script entry point"""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
