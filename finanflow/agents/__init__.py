"""AI Agents package."""

from finanflow.agents.advisor import (
    ADVICE_FAILED_MESSAGE,
    EMPTY_RESPONSE_MESSAGE,
    NO_TRANSACTIONS_MESSAGE,
    FinancialAdvisorAgent,
    build_prompt,
    build_summary_table,
)

__all__ = [
    "ADVICE_FAILED_MESSAGE",
    "EMPTY_RESPONSE_MESSAGE",
    "NO_TRANSACTIONS_MESSAGE",
    "FinancialAdvisorAgent",
    "build_prompt",
    "build_summary_table",
]
