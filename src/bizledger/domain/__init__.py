"""Domain layer for bizledger application."""

__all__ = [
    "LedgerService",
    "BankAccountService",
    "CompanyService",
    "UserService",
    "ProjectService",
    "TaskService",
]


# Services import the database package, which imports domain.entities;
# resolve them lazily so either package can be imported first
def __getattr__(name):
    if name == "LedgerService":
        from bizledger.domain.ledger import LedgerService
        return LedgerService
    if name == "BankAccountService":
        from bizledger.domain.bank_account import BankAccountService
        return BankAccountService
    if name in ("CompanyService", "UserService"):
        from bizledger.domain import company
        return getattr(company, name)
    if name in ("ProjectService", "TaskService"):
        from bizledger.domain import project
        return getattr(project, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
