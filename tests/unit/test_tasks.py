"""
Tests for the Celery contact import task, called in-process.
"""

from quaidirect_workers.tasks.contact_import_tasks import import_contacts_file
from tests.conftest import CSV_HEADER, make_stored_contact


class TestImportContactsFile:
    def test_completed_report(self, tmp_path, sample_csv):
        path = tmp_path / "upload-123.csv"
        path.write_text(sample_csv, encoding="utf-8")

        result = import_contacts_file(str(path), filename="mes-clients.csv")

        assert result["status"] == "completed"
        assert result["filename"] == "mes-clients.csv"
        assert result["format"] == "csv"
        assert result["stats"]["total"] == 3
        assert len(result["contacts"]) == 3

    def test_filename_defaults_to_stored_name(self, tmp_path, sample_vcf):
        path = tmp_path / "carnet.vcf"
        path.write_text(sample_vcf, encoding="utf-8")

        result = import_contacts_file(str(path))

        assert result["filename"] == "carnet.vcf"
        assert result["format"] == "vcf"

    def test_existing_contacts_flag_duplicates(self, tmp_path):
        path = tmp_path / "contacts.csv"
        path.write_text(f"{CSV_HEADER}\n,06 12 34 56 78,,,\n", encoding="utf-8")
        existing = [make_stored_contact(email=None, phone="+33612345678")]

        assert import_contacts_file(str(path), existing)["stats"]["duplicates"] == 0
        assert import_contacts_file(str(path), existing, canonical_phones=True)["stats"]["duplicates"] == 1

    def test_structural_failure_is_reported(self, tmp_path):
        path = tmp_path / "contacts.json"
        path.write_text("{oops", encoding="utf-8")

        result = import_contacts_file(str(path))

        assert result == {
            "status": "failed",
            "filename": "contacts.json",
            "error": "Format JSON invalide",
            "error_type": "file_format_error",
        }

    def test_missing_file_is_reported(self, tmp_path):
        result = import_contacts_file(str(tmp_path / "gone.csv"))

        assert result["status"] == "failed"
        assert result["error_type"] == "file_read_error"

    def test_empty_file_is_reported(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_bytes(b"")

        result = import_contacts_file(str(path))

        assert result["error"] == "Le fichier est vide"
