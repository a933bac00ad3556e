"""
Financial Advisor Agent

Asks Gemini for an executive report ("virtual CFO") on the ledger.

BOUNDARIES:
- The model only sees an aggregated summary table, never raw records
- With an empty ledger there is no external call at all
- Any failure becomes a canned message; the caller never sees an exception
- No retry: one request per user action
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Optional

import google.generativeai as genai

from finanflow.config import get_settings
from finanflow.config.settings import GeminiSettings
from finanflow.models.summary import ZERO
from finanflow.models.transaction import Transaction
from finanflow.observability import get_logger


NO_TRANSACTIONS_MESSAGE = (
    "Adicione transações para receber uma análise financeira da sua Escola de Tattoo."
)
EMPTY_RESPONSE_MESSAGE = "Não foi possível gerar a análise no momento."
ADVICE_FAILED_MESSAGE = (
    "Ocorreu um erro ao tentar conectar com o consultor IA. "
    "Verifique sua conexão ou tente novamente mais tarde."
)

SYSTEM_INSTRUCTION = (
    "Você é um especialista em finanças para lançamentos digitais e escolas online."
)

PROMPT_TEMPLATE = """Atue como o CFO (Diretor Financeiro) da empresa "{company}", uma Escola de Tatuagem Online.

Contexto da empresa:
- Negócio 100% digital (infoproduto/cursos).
- Custos principais envolvem: Tráfego Pago (Ads), Equipe (Social Media, Designer, Editor, Vendedores) e Ferramentas.
- Não há estoque físico.

Analise os dados financeiros abaixo:
{summary}

Forneça um relatório executivo em Markdown contendo:
1. **Saúde do Fluxo de Caixa**: Análise da relação entre CAC (custos de marketing/vendas) e Receita.
2. **Análise de Custos de Equipe/Criativos**: Estamos gastando muito com edição/design em relação ao faturamento?
3. **Sugestões de Otimização**: Onde podemos cortar custos sem perder qualidade de venda? (Ex: ferramentas, otimização de tráfego).
4. **Alertas**: Alguma categoria está consumindo mais de 30% da receita?

Mantenha um tom profissional, direto e focado em alta performance de infoprodutos."""


def build_summary_table(transactions: Iterable[Transaction]) -> str:
    """
    One line per (type, category, subcategory) with the summed amount.

    Lines keep first-seen order, e.g.
    "- INCOME - Receitas (Venda de Cursos): R$ 15000.00"
    """
    totals: dict[str, Decimal] = {}
    for t in transactions:
        key = f"{t.type.value} - {t.category} ({t.subcategory})"
        totals[key] = totals.get(key, ZERO) + t.amount

    return "\n".join(f"- {key}: R$ {value:.2f}" for key, value in totals.items())


def build_prompt(transactions: Iterable[Transaction], company: str = "Dica de Tattoo") -> str:
    return PROMPT_TEMPLATE.format(
        company=company,
        summary=build_summary_table(transactions),
    )


class FinancialAdvisorAgent:
    """
    Gemini-backed advisory text generation.

    The model can be injected (anything with an async
    `generate_content_async(prompt)` returning an object with `.text`),
    which is how tests run without network access.
    """

    def __init__(
        self,
        model=None,
        settings: Optional[GeminiSettings] = None,
        company_name: str = "Dica de Tattoo",
    ):
        self._company_name = company_name
        self._logger = get_logger(__name__)
        if model is not None:
            self._model = model
        else:
            self._settings = settings or get_settings().gemini
            self._configure_genai()

    def _configure_genai(self):
        """Configure Google Generative AI."""
        genai.configure(api_key=self._settings.api_key)
        self._model = genai.GenerativeModel(
            model_name=self._settings.model_name,
            system_instruction=SYSTEM_INSTRUCTION,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
            }
        )

    async def get_financial_advice(self, transactions: Sequence[Transaction]) -> str:
        """
        Generate the executive report.

        Returns the model's text, or one of the canned messages.
        """
        if not transactions:
            return NO_TRANSACTIONS_MESSAGE

        prompt = build_prompt(transactions, self._company_name)

        try:
            response = await self._model.generate_content_async(prompt)
            text = (response.text or "").strip()
        except Exception as e:
            self._logger.error("advisor_request_failed", error=str(e))
            return ADVICE_FAILED_MESSAGE

        if not text:
            self._logger.warning("advisor_empty_response")
            return EMPTY_RESPONSE_MESSAGE

        self._logger.info(
            "advisor_report_generated",
            transactions=len(transactions),
            characters=len(text),
        )
        return text
