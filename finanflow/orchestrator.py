"""
Main Orchestrator for FinanFlow

Ties the components together behind one facade, FinanceApp, which is
what a UI (or a script) talks to:

1. Ledger: save (create/update) from form input, delete, toggle status
2. Team: add/remove commission receivers
3. Commissions: calculator sessions, history, audit queries
4. Dashboard: summary, monthly series, cost breakdown, due alerts
5. Advisor: Gemini executive report
6. Reports: CSV and printable HTML

DESIGN DECISION: The orchestrator enforces the boundaries:
- Form input is validated before any mutation
- Derived views always come from the current snapshot
- Storage or advisor outages degrade features, never crash the app
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional

from finanflow.agents import (
    ADVICE_FAILED_MESSAGE,
    NO_TRANSACTIONS_MESSAGE,
    FinancialAdvisorAgent,
)
from finanflow.aggregation import DEFAULT_ALERT_WINDOW_DAYS, LedgerProjections
from finanflow.commissions import CommissionSession, sales_for_commission
from finanflow.config import get_settings, validate_all_settings
from finanflow.config.settings import StorageSettings
from finanflow.ledger import LedgerStore, ReceiverRegistry, demo_transactions
from finanflow.models import (
    CommissionReceiver,
    DashboardView,
    ReceiverForm,
    Transaction,
    TransactionForm,
    ValidationResult,
)
from finanflow.observability import configure_logging, get_logger
from finanflow.reports import export_filename, to_csv, to_html_report
from finanflow.services.storage import (
    GoogleSheetsStorage,
    InMemoryStorage,
    JsonFileStorage,
    RecordStorageInterface,
)
from finanflow.validation import TransactionValidator


logger = get_logger(__name__)


class FinanceApp:
    """
    Facade over the ledger, the team registry and the derived views.

    Every method completes fully before returning; there is no
    background work besides the advisor's single async request.
    """

    def __init__(
        self,
        store: LedgerStore,
        registry: ReceiverRegistry,
        advisor: Optional[FinancialAdvisorAgent] = None,
        validator: Optional[TransactionValidator] = None,
        alert_window_days: int = DEFAULT_ALERT_WINDOW_DAYS,
        company_name: str = "Dica de Tattoo",
    ):
        self.store = store
        self.registry = registry
        self.projections = LedgerProjections(store, alert_window_days)
        self._advisor = advisor
        self._validator = validator or TransactionValidator()
        self._company_name = company_name

    # -------------------------------------------------------------------------
    # Ledger
    # -------------------------------------------------------------------------

    def save_transaction(
        self,
        form: TransactionForm,
        transaction_id: Optional[str] = None,
    ) -> tuple[ValidationResult, Optional[Transaction]]:
        """
        Create (no id) or update (with id) a transaction from form input.

        Returns:
            (validation_result, saved_transaction). The transaction is None
            when validation failed or the id to update no longer exists.
        """
        result, data = self._validator.validate_transaction(form)
        if data is None:
            logger.info("transaction_form_rejected", errors=result.error_count)
            return result, None

        if transaction_id is None:
            return result, self.store.create(data)

        existing = self.store.get(transaction_id)
        if existing is None:
            return result, None

        # The form does not carry commission links; keep the stored ones
        updated = Transaction(
            **data.model_dump(exclude={"receiver_id", "source_sale_ids"}),
            id=transaction_id,
            receiver_id=existing.receiver_id,
            source_sale_ids=existing.source_sale_ids,
        )
        self.store.update(updated)
        return result, updated

    def form_for(self, transaction: Transaction) -> TransactionForm:
        """Pre-filled form for editing an existing transaction."""
        return TransactionForm(
            description=transaction.description,
            amount=str(transaction.amount),
            type=transaction.type.value,
            category=transaction.category,
            subcategory=transaction.subcategory,
            date=transaction.booking_date.isoformat(),
            due_date=transaction.due_date.isoformat(),
            status=transaction.status.value,
            commission_paid=transaction.commission_paid,
        )

    def delete_transaction(self, transaction_id: str) -> bool:
        return self.store.delete(transaction_id)

    def toggle_status(self, transaction_id: str) -> bool:
        return self.store.toggle_status(transaction_id)

    def transactions(self) -> tuple[Transaction, ...]:
        """Main statement: everything except commission expenses, newest first."""
        return self.projections.listing()

    # -------------------------------------------------------------------------
    # Team
    # -------------------------------------------------------------------------

    def add_receiver(
        self,
        form: ReceiverForm,
    ) -> tuple[ValidationResult, Optional[CommissionReceiver]]:
        result, receiver = self._validator.validate_receiver(form)
        if receiver is None:
            return result, None
        return result, self.registry.add(receiver)

    def remove_receiver(self, receiver_id: str) -> bool:
        """Remove a team member. Their commission expenses stay in the ledger."""
        return self.registry.remove(receiver_id)

    # -------------------------------------------------------------------------
    # Commissions
    # -------------------------------------------------------------------------

    def new_commission_session(self) -> CommissionSession:
        return CommissionSession(self.store, self.registry)

    def commission_history(self) -> tuple[Transaction, ...]:
        return self.projections.commission_history()

    def delete_commission(self, expense_id: str) -> bool:
        """Plain ledger delete; source sales keep commission_paid=True."""
        return self.store.delete(expense_id)

    def sales_for_commission(self, expense_id: str) -> list[Transaction]:
        expense = self.store.get(expense_id)
        if expense is None:
            return []
        return sales_for_commission(self.store.snapshot(), expense)

    # -------------------------------------------------------------------------
    # Dashboard
    # -------------------------------------------------------------------------

    def dashboard(self, today: Optional[date] = None) -> DashboardView:
        return DashboardView(
            summary=self.projections.summary(),
            monthly=list(self.projections.monthly()),
            categories=list(self.projections.categories()),
            alerts=list(self.projections.alerts(today)),
        )

    # -------------------------------------------------------------------------
    # Advisor
    # -------------------------------------------------------------------------

    async def get_financial_advice(self) -> str:
        transactions = self.store.snapshot()
        if not transactions:
            return NO_TRANSACTIONS_MESSAGE
        if self._advisor is None:
            logger.warning("advisor_not_configured")
            return ADVICE_FAILED_MESSAGE
        return await self._advisor.get_financial_advice(transactions)

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def export_csv(self, today: Optional[date] = None) -> tuple[str, str]:
        """Returns (suggested_filename, csv_text)."""
        return export_filename(today), to_csv(self.store.snapshot())

    def export_html(self, generated_at: Optional[datetime] = None) -> str:
        return to_html_report(
            self.store.snapshot(),
            generated_at=generated_at,
            company_name=self._company_name,
        )


def create_storage(settings: StorageSettings) -> RecordStorageInterface:
    """Instantiate the configured storage backend."""
    if settings.backend == "memory":
        return InMemoryStorage()
    if settings.backend == "sheets":
        return GoogleSheetsStorage()
    return JsonFileStorage(Path(settings.data_dir))


def create_app_components(
    use_storage: bool = True,
    use_advisor: bool = True,
    today: Optional[date] = None,
) -> FinanceApp:
    """
    Factory function to create the application.

    Args:
        use_storage: Whether to use the configured durable storage.
                    Set to False for an in-memory session.
        use_advisor: Whether to set up the Gemini advisor.
        today: Booking date for demo data (defaults to today).

    Returns:
        A loaded FinanceApp
    """
    settings = get_settings()
    app_settings = settings.app
    configure_logging(app_settings.log_level, app_settings.log_json)

    checks = validate_all_settings()
    for name in ("google_sheets", "gemini"):
        if not checks[name]:
            logger.info("settings_not_configured", concern=name, error=checks[f"{name}_error"])

    if checks["storage"]:
        storage_settings = settings.storage
    else:
        # Unusable storage settings: default slot names, in memory
        logger.warning("storage_settings_invalid", error=checks["storage_error"])
        storage_settings = StorageSettings.model_construct()
        use_storage = False

    storage: RecordStorageInterface
    if use_storage:
        try:
            storage = create_storage(storage_settings)
        except Exception as e:
            # Storage not configured - continue in memory
            logger.warning("storage_not_configured", error=str(e))
            storage = InMemoryStorage()
    else:
        storage = InMemoryStorage()

    store = LedgerStore(storage, slot=storage_settings.transactions_slot)
    registry = ReceiverRegistry(storage, slot=storage_settings.receivers_slot)

    loaded = store.load()
    if loaded is None and app_settings.seed_demo_data:
        for data in demo_transactions(today or date.today()):
            store.create(data)
    registry.load()

    advisor = None
    if use_advisor:
        try:
            advisor = FinancialAdvisorAgent(company_name=app_settings.company_name)
        except Exception as e:
            logger.warning("advisor_not_configured", error=str(e))

    logger.info(
        "app_started",
        environment=app_settings.app_environment,
        storage=type(storage).__name__,
        transactions=len(store),
        receivers=len(registry),
        advisor=advisor is not None,
    )

    return FinanceApp(
        store=store,
        registry=registry,
        advisor=advisor,
        alert_window_days=app_settings.alert_window_days,
        company_name=app_settings.company_name,
    )
