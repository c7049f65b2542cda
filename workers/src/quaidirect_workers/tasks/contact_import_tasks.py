"""
Celery tasks for contact imports

Uploads are stored by the web tier; the task receives the stored path and
the fisherman's existing contacts, and returns the import report as JSON.
"""
import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
from celery import Task

from ..queue.celery_app import celery_app
from ..exceptions import ContactImportError
from ..validation.import_pipeline import ContactImportPipeline, contact_import_pipeline

logger = structlog.get_logger(__name__)


class BaseImportTask(Task):
    """Base class for import tasks with common logging"""
    
    def on_failure(self, exc, task_id, args, kwargs, einfo):
        logger.error(
            "Task failed",
            task_id=task_id,
            task_name=self.name,
            exception=str(exc)
        )
    
    def on_success(self, retval, task_id, args, kwargs):
        logger.info(
            "Task completed successfully",
            task_id=task_id,
            task_name=self.name
        )


@celery_app.task(bind=True, base=BaseImportTask, name="quaidirect_workers.tasks.import_contacts_file")
def import_contacts_file(
    self,
    file_path: str,
    existing_contacts: Optional[List[Dict[str, Any]]] = None,
    filename: Optional[str] = None,
    canonical_phones: Optional[bool] = None
) -> Dict[str, Any]:
    """
    Parse a stored contact file and flag duplicates
    
    Structural failures (unreadable, malformed, empty or oversized files)
    are reported in the result rather than retried: the same input would
    fail the same way.
    
    Args:
        file_path: Location of the uploaded file
        existing_contacts: Stored contacts, each with at least email and phone
        filename: Original upload name; defaults to the stored file name
        canonical_phones: Override the E.164 duplicate comparison setting
    """
    filename = filename or Path(file_path).name
    pipeline = contact_import_pipeline
    if canonical_phones is not None:
        pipeline = ContactImportPipeline(canonical_phones=canonical_phones)
    
    logger.info("Processing contact import", task_id=self.request.id, filename=filename)
    
    try:
        report = asyncio.run(
            pipeline.import_file(filename, file_path, existing_contacts or [])
        )
    except ContactImportError as e:
        logger.warning(
            "Contact import failed",
            filename=filename,
            category=e.category.value,
            error=e.message
        )
        return {
            "status": "failed",
            "filename": filename,
            "error": e.message,
            "error_type": e.category.value
        }
    
    result = report.to_dict()
    result["status"] = "completed"
    return result
