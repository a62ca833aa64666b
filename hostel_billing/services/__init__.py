"""
Service layer root package.

Each subpackage implements billing use-cases on top of:

- SQLAlchemy models (hostel_billing.models.*)
- Repositories (hostel_billing.repositories.*)
- Pydantic schemas (hostel_billing.schemas.*)
- Common service infrastructure (hostel_billing.services.common.*)

Session-scoped services (fee configuration, proration, ledger) work inside
the caller's session. Services that change state own a unit of work:

    class SomeService:
        def __init__(self, session_factory: Callable[[], Session]) -> None:
            self._session_factory = session_factory

        def some_use_case(...):
            with UnitOfWork(self._session_factory) as uow:
                repo = uow.get_repo(SomeRepository)
                ...
"""

from hostel_billing.services.common import UnitOfWork

__all__ = ["UnitOfWork"]
