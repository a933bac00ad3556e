"""Validation result models shared by the form validators."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="User-facing description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating form input.

    A result with errors means the input was rejected and no state
    was mutated.
    """

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def user_message(self) -> Optional[str]:
        """First error message, for a single-line rejection notice."""
        for issue in self.issues:
            if issue.severity == "error":
                return issue.message
        return None


class TransactionForm(BaseModel):
    """
    Raw transaction form input, before validation.

    Everything is loose (strings, or already-typed values) so that a
    half-filled form can still be described and rejected with a message.
    """

    description: str = ""
    amount: Any = None
    type: Any = "EXPENSE"
    category: str = ""
    subcategory: str = ""
    date: Any = None
    due_date: Any = None
    status: Any = "PENDING"
    commission_paid: bool = False


class ReceiverForm(BaseModel):
    """Raw 'new team member' form input."""

    name: str = ""
    role: str = "Vendedor"
    default_rate: Any = "10"
