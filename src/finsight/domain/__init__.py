"""Domain layer for finsight application.

Services are resolved lazily: the database layer imports domain entities,
and the services import the database layer.
"""

_SERVICES = {
    "CategoryService": "finsight.domain.category",
    "ChatService": "finsight.domain.chat",
    "DashboardService": "finsight.domain.dashboard",
    "HoldingService": "finsight.domain.holdings",
    "InsightService": "finsight.domain.insight_service",
    "ReportService": "finsight.domain.reporting",
    "TransactionService": "finsight.domain.transaction",
    "UserService": "finsight.domain.user",
}

__all__ = sorted(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
