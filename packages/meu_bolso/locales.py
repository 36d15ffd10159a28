"""Display labels and number formatting per supported locale.

Only two locales exist: ``en`` (default) and ``pt-BR``. Formatting is done
by hand instead of through the ``locale`` module so output does not depend
on the host's installed locales.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .models import TransactionKind


@dataclass(frozen=True, slots=True)
class Locale:
    code: str
    export_header: tuple[str, str, str, str, str]
    kind_labels: dict[str, str]
    month_labels: tuple[str, ...]
    decimal_sep: str
    group_sep: str
    balance_title: str
    by_category_title: str
    months_title: str
    month_column: str
    no_expenses: str
    transactions_title: str

    def kind_label(self, kind: TransactionKind) -> str:
        return self.kind_labels[kind]

    def month_label(self, month: int) -> str:
        return self.month_labels[month - 1]

    def format_amount(self, value: Decimal) -> str:
        """Render ``value`` with two decimals and thousands grouping."""

        text = format(value.quantize(Decimal("0.01")), ",.2f")
        if (self.group_sep, self.decimal_sep) == (",", "."):
            return text
        # Swap separators through a placeholder to avoid clobbering.
        return text.replace(",", "\0").replace(".", self.decimal_sep).replace("\0", self.group_sep)


LOCALES: dict[str, Locale] = {
    "en": Locale(
        code="en",
        export_header=("Date", "Description", "Category", "Type", "Amount"),
        kind_labels={"income": "Income", "expense": "Expense"},
        month_labels=(
            "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
            "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
        ),
        decimal_sep=".",
        group_sep=",",
        balance_title="Balance",
        by_category_title="Expenses by category",
        months_title="Last {months} months",
        month_column="Month",
        no_expenses="No expenses recorded.",
        transactions_title="Transactions",
    ),
    "pt-BR": Locale(
        code="pt-BR",
        export_header=("Data", "Descrição", "Categoria", "Tipo", "Valor"),
        kind_labels={"income": "Receita", "expense": "Despesa"},
        month_labels=(
            "JAN", "FEV", "MAR", "ABR", "MAI", "JUN",
            "JUL", "AGO", "SET", "OUT", "NOV", "DEZ",
        ),
        decimal_sep=",",
        group_sep=".",
        balance_title="Saldo Total",
        by_category_title="Despesas por Categoria",
        months_title="Fluxo Mensal (Últimos {months} meses)",
        month_column="Mês",
        no_expenses="Nenhuma despesa registrada.",
        transactions_title="Transações",
    ),
}

DEFAULT_LOCALE = "en"


def get_locale(code: str | None) -> Locale:
    """Return the locale for ``code`` (case-insensitive); ``None`` means default."""

    if code is None:
        return LOCALES[DEFAULT_LOCALE]
    for key, loc in LOCALES.items():
        if key.lower() == code.strip().lower():
            return loc
    raise ValueError(f"Unsupported locale {code!r}; expected one of: {', '.join(LOCALES)}")
