"""API routes."""

from revenue_split.api.routes.employees import router as employees_router
from revenue_split.api.routes.expenses import router as expenses_router
from revenue_split.api.routes.health import router as health_router
from revenue_split.api.routes.periods import router as periods_router
from revenue_split.api.routes.reports import router as reports_router
from revenue_split.api.routes.revenue import router as revenue_router

__all__ = [
    "employees_router",
    "expenses_router",
    "health_router",
    "periods_router",
    "reports_router",
    "revenue_router",
]
