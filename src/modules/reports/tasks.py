"""Asynchronous report tasks."""

import structlog
from celery import shared_task

from modules.categories.repositories.django_repository import CategoryDjangoRepository
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.reports.services import ReportService

logger = structlog.get_logger(__name__)


@shared_task(name="reports.inventory_snapshot")
def inventory_snapshot():
    """Compute the inventory summary and log it as a point-in-time snapshot."""
    service = ReportService(
        product_repository=ProductDjangoRepository(),
        category_repository=CategoryDjangoRepository(),
    )
    summary = service.inventory_summary().model_dump(mode="json")
    logger.info("report.inventory_snapshot", **summary)
    return summary
