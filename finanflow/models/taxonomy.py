"""
Category Taxonomy for Dica de Tattoo (online school)

Static mapping of category -> ordered list of allowed subcategories.
The transaction form restricts input to these values, but the
Transaction model itself stores category/subcategory as plain strings.
"""

CATEGORIES_CONFIG: dict[str, list[str]] = {
    "Receitas": [
        "Venda de Cursos",
        "Matrículas",
        "Mentorias",
        "Outros",
    ],
    "Marketing & Tráfego": [
        "Facebook/Instagram Ads",
        "Google/YouTube Ads",
        "TikTok Ads",
        "Influenciadores",
        "Ferramentas de Marketing",
    ],
    "Equipe Criativa & Suporte": [
        "Gestor de Tráfego",
        "Social Media",
        "Designer Gráfico",
        "Editor de Vídeo",
        "Suporte ao Aluno",
    ],
    "Comercial": [
        "Comissão de Vendedores",
        "Salário Vendedores",
        "Ferramentas de CRM",
    ],
    "Infraestrutura Digital": [
        "Plataforma de Curso (Area de Membros)",
        "Hospedagem de Vídeo",
        "Servidores/Site",
        "Automação/E-mail Mkt",
    ],
    "Administrativo": [
        "Impostos",
        "Taxas Bancárias/Gateway",
        "Contabilidade",
        "Prolabore",
        "Outros",
    ],
}

MAIN_CATEGORIES: list[str] = list(CATEGORIES_CONFIG)

# Category holding sales revenue
SALES_CATEGORY = "Receitas"

# Tags carried by every generated commission expense
COMMISSION_CATEGORY = "Comercial"
COMMISSION_SUBCATEGORY = "Comissão de Vendedores"

# Used by the form when a category has no configured subcategories
FALLBACK_SUBCATEGORY = "Geral"

# Suggested, not enforced
RECEIVER_ROLES: tuple[str, ...] = ("Vendedor", "Gestor", "Líder", "Parceiro")


def subcategories_for(category: str) -> list[str]:
    """Subcategories offered for a category, or the generic fallback."""
    return list(CATEGORIES_CONFIG.get(category) or [FALLBACK_SUBCATEGORY])


def is_known_pair(category: str, subcategory: str) -> bool:
    """Check whether a category/subcategory pair exists in the taxonomy."""
    return subcategory in CATEGORIES_CONFIG.get(category, [])
