"""Celery tasks for QuaiDirect workers"""

from .contact_import_tasks import import_contacts_file

__all__ = ["import_contacts_file"]
