"""Domain layer for finrecon application."""

__all__ = [
    "TransactionService",
    "BudgetService",
    "ReportService",
    "JSONImportService",
]


# Services depend on finrecon.database, which imports domain entities;
# resolve them on first access so either package can be imported first.
def __getattr__(name):
    if name == "TransactionService":
        from finrecon.domain.transaction import TransactionService
        return TransactionService
    if name == "BudgetService":
        from finrecon.domain.budget import BudgetService
        return BudgetService
    if name == "ReportService":
        from finrecon.domain.reporting import ReportService
        return ReportService
    if name == "JSONImportService":
        from finrecon.domain.json_import import JSONImportService
        return JSONImportService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
