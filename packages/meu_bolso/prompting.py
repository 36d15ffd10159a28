"""Prompt construction for the financial advice request.

This module builds:
- The system instructions that set the advisor persona.
- The user content: one summary line per transaction followed by the three
  requested sections and a Markdown formatting request.

Both are available in English and Brazilian Portuguese.
"""

from __future__ import annotations

from collections.abc import Iterable

from .locales import get_locale
from .models import Transaction

_SYSTEM = {
    "en": (
        "You are an experienced, friendly personal finance advisor focused on helping "
        "people organize their finances."
    ),
    "pt-BR": (
        "Você é um consultor financeiro pessoal experiente, amigável e focado em ajudar "
        "brasileiros a organizar suas finanças."
    ),
}

_TEMPLATE = {
    "en": (
        'Analyze the following financial data from the "Meu Bolso" user:\n'
        "\n"
        "{summary}\n"
        "\n"
        "Please provide:\n"
        "1. A brief analysis of the spending pattern.\n"
        "2. Three practical, actionable tips to save money based specifically on these expenses.\n"
        "3. A short motivational comment.\n"
        "\n"
        "Use Markdown formatting (bold, lists) for readability. Be friendly and direct."
    ),
    "pt-BR": (
        'Analise os seguintes dados financeiros do usuário "Meu Bolso":\n'
        "\n"
        "{summary}\n"
        "\n"
        "Por favor, forneça:\n"
        "1. Uma breve análise do padrão de gastos.\n"
        "2. Três dicas práticas e acionáveis para economizar dinheiro baseadas "
        "especificamente nestes gastos.\n"
        "3. Um comentário motivacional curto.\n"
        "\n"
        "Responda em português do Brasil. Use formatação Markdown (negrito, listas) para "
        "facilitar a leitura. Seja amigável e direto."
    ),
}

_LINE = {
    "en": "- {date}: {kind} of {amount} in {category} ({description})",
    "pt-BR": "- {date}: {kind} de R$ {amount} em {category} ({description})",
}


def build_system_instructions(locale: str | None = None) -> str:
    return _SYSTEM[get_locale(locale).code]


def summarize_transactions(snapshot: Iterable[Transaction], locale: str | None = None) -> str:
    """Return one line per transaction in snapshot order."""

    loc = get_locale(locale)
    line = _LINE[loc.code]
    return "\n".join(
        line.format(
            date=t.date.isoformat(),
            kind=loc.kind_label(t.kind),
            amount=f"{t.amount:.2f}",
            category=t.category,
            description=t.description,
        )
        for t in snapshot
    )


def build_user_content(snapshot: Iterable[Transaction], locale: str | None = None) -> str:
    loc = get_locale(locale)
    return _TEMPLATE[loc.code].format(summary=summarize_transactions(snapshot, loc.code))
