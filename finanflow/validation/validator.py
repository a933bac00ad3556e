"""
Form Input Validation

DESIGN DECISION: Validation happens at the boundary, before anything
touches the ledger. A form with errors is rejected with user-facing
messages and produces no mutation.

Checks:
- Required fields (description, amount, booking date, due date)
- Formats (amount, dates, type, status)
- Taxonomy membership (warning only: stored category/subcategory
  values are free strings, older records may hold anything)
- Commission rates (negative is an error, above 100% a warning)

IMPORTANT: Validation NEVER silently fixes issues. An amount with more
than two decimals is rejected, not rounded.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from finanflow.commissions.engine import parse_rate
from finanflow.models.taxonomy import CATEGORIES_CONFIG, RECEIVER_ROLES, is_known_pair
from finanflow.models.transaction import (
    CommissionReceiver,
    PaymentStatus,
    TransactionData,
    TransactionType,
)
from finanflow.models.validation import (
    ReceiverForm,
    TransactionForm,
    ValidationIssue,
    ValidationResult,
)


MAX_DESCRIPTION_LENGTH = 300


def _error(field: str, issue_type: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, issue_type=issue_type, message=message, severity="error")


def _warning(field: str, issue_type: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, issue_type=issue_type, message=message, severity="warning")


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def _parse_choice(enum_cls, value: Any):
    """Enum member from a member or its (case-insensitive) value."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class TransactionValidator:
    """Validates transaction and team-member form input."""

    def validate_transaction(
        self,
        form: TransactionForm,
    ) -> tuple[ValidationResult, Optional[TransactionData]]:
        """
        Validate a transaction form.

        Returns:
            (result, data) where data is None whenever result has errors
        """
        issues: list[ValidationIssue] = []

        description = form.description.strip()
        if not description:
            issues.append(_error("description", "missing", "Informe a descrição."))
        elif len(description) > MAX_DESCRIPTION_LENGTH:
            issues.append(_error(
                "description",
                "too_long",
                f"A descrição deve ter no máximo {MAX_DESCRIPTION_LENGTH} caracteres.",
            ))

        amount = self._check_amount(form.amount, issues)

        booking_date = self._check_date("date", form.date, "Data de lançamento", issues)
        due_date = self._check_date("due_date", form.due_date, "Data de vencimento", issues)

        tx_type = _parse_choice(TransactionType, form.type)
        if tx_type is None:
            issues.append(_error("type", "invalid_value", "Tipo deve ser Receita ou Despesa."))

        status = _parse_choice(PaymentStatus, form.status)
        if status is None:
            issues.append(_error("status", "invalid_value", "Status deve ser Pago ou Pendente."))

        category = form.category.strip()
        subcategory = form.subcategory.strip()
        if not category:
            issues.append(_error("category", "missing", "Selecione uma categoria."))
        elif category not in CATEGORIES_CONFIG:
            issues.append(_warning(
                "category",
                "unknown_category",
                f"A categoria '{category}' não está na lista configurada.",
            ))
        elif not is_known_pair(category, subcategory):
            issues.append(_warning(
                "subcategory",
                "unknown_subcategory",
                f"A subcategoria '{subcategory}' não pertence a '{category}'.",
            ))

        result = ValidationResult(issues=issues)
        if result.has_errors:
            return result, None

        data = TransactionData(
            description=description,
            amount=amount,
            type=tx_type,
            category=category,
            subcategory=subcategory,
            booking_date=booking_date,
            due_date=due_date,
            status=status,
            commission_paid=form.commission_paid,
        )
        return result, data

    def validate_receiver(
        self,
        form: ReceiverForm,
    ) -> tuple[ValidationResult, Optional[CommissionReceiver]]:
        """
        Validate a new team member.

        Returns:
            (result, receiver) where receiver is None whenever result has errors
        """
        issues: list[ValidationIssue] = []

        name = form.name.strip()
        if not name:
            issues.append(_error("name", "missing", "Informe o nome."))

        rate = None
        if _is_blank(form.default_rate):
            issues.append(_error("default_rate", "missing", "Informe a taxa de comissão."))
        else:
            rate = parse_rate(form.default_rate)
            if rate is None:
                issues.append(_error("default_rate", "invalid_format", "Taxa de comissão inválida."))
            elif rate < 0:
                issues.append(_error(
                    "default_rate",
                    "invalid_value",
                    "A taxa de comissão não pode ser negativa.",
                ))
            elif rate > Decimal(100):
                issues.append(_warning(
                    "default_rate",
                    "suspicious_value",
                    "A taxa de comissão costuma ficar entre 0% e 100%.",
                ))

        role = form.role.strip() or RECEIVER_ROLES[0]
        if role not in RECEIVER_ROLES:
            issues.append(_warning(
                "role",
                "unknown_role",
                "Função fora da lista sugerida (" + ", ".join(RECEIVER_ROLES) + ").",
            ))

        result = ValidationResult(issues=issues)
        if result.has_errors:
            return result, None

        receiver = CommissionReceiver(
            name=name,
            role=role,
            default_rate=rate,
        )
        return result, receiver

    def _check_amount(self, value: Any, issues: list[ValidationIssue]) -> Optional[Decimal]:
        if _is_blank(value):
            issues.append(_error("amount", "missing", "Informe o valor."))
            return None

        try:
            if isinstance(value, float):
                amount = Decimal(str(value))
            else:
                amount = Decimal(str(value).strip().replace(",", "."))
        except InvalidOperation:
            issues.append(_error("amount", "invalid_format", "Valor inválido."))
            return None

        if not amount.is_finite():
            issues.append(_error("amount", "invalid_format", "Valor inválido."))
            return None
        if amount < 0:
            issues.append(_error("amount", "invalid_value", "O valor não pode ser negativo."))
            return None
        if amount.as_tuple().exponent < -2:
            issues.append(_error("amount", "invalid_format", "Use no máximo duas casas decimais."))
            return None
        return amount

    def _check_date(
        self,
        field: str,
        value: Any,
        label: str,
        issues: list[ValidationIssue],
    ) -> Optional[date]:
        if _is_blank(value):
            issues.append(_error(field, "missing", f"{label} é obrigatória."))
            return None

        parsed = _parse_date(value)
        if parsed is None:
            issues.append(_error(field, "invalid_format", f"{label} inválida."))
        return parsed
