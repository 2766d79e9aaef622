"""Domain constants: column candidates, fallbacks, and keyword tables."""

from datetime import date

from .models.events import KeywordRule

BROKER_UBS = "UBS"
BROKER_SAXO = "Saxo"

SPREADSHEET_EPOCH = date(1899, 12, 30)

TRADING_DAYS_PER_YEAR = 252
DEFAULT_RISK_FREE_RATE_PCT = 3.0
DRAWDOWN_EPSILON_PCT = 0.01
POSITION_KEY_LENGTH = 20
ALL_ACCOUNTS = "ALL"

# Logical field -> header candidates, French, English and German side by side.
TRANSACTION_COLUMNS: dict[str, tuple[str, ...]] = {
    "date": (
        "Date",
        "Date de valeur",
        "Booking date",
        "Date comptable",
        "Datum",
        "Trade date",
    ),
    "desc": ("Description", "Libellé", "Text", "Bezeichnung", "Event"),
    "amount": (
        "Montant",
        "Amount",
        "Betrag",
        "CHF",
        "EUR",
        "Montant en CHF",
        "Booked amount",
    ),
    "currency": ("Devise", "Currency", "Währung"),
    "type": ("Type", "Category", "Catégorie", "Typ"),
    "symbol": ("Titre", "Security", "ISIN", "Valeur", "Wertpapier", "Symbol"),
    "account": ("Compte", "Account", "Konto", "Numéro de compte"),
}

TRANSACTION_FALLBACKS: dict[str, str] = {
    "date": "Date",
    "desc": "Description",
    "amount": "Montant",
    "currency": "Devise",
    "type": "Type",
    "symbol": "Titre",
    "account": "Compte",
}

VALUATION_COLUMNS: tuple[str, ...] = (
    "Valeur",
    "Value",
    "Valorisation",
    "Market value",
    "Montant",
    "Wert",
    "Cours actuel",
)

PERFORMANCE_COLUMNS: dict[str, tuple[str, ...]] = {
    "date": ("Date", "Datum", "Day"),
    "twr": (
        "Accumulated time-weighted",
        "Accumulated TWR",
        "Rendement pondéré cumulé",
        "TWR cumulé",
        "Kumulierte zeitgewichtete",
        "TWR",
    ),
    "value": (
        "Account value",
        "Valeur du compte",
        "Kontowert",
        "Total value",
        "Value",
    ),
    "daily": (
        "Daily return",
        "Rendement quotidien",
        "Tagesrendite",
        "Return %",
    ),
}

PERFORMANCE_FALLBACKS: dict[str, str] = {
    "date": "Date",
    "twr": "Accumulated time-weighted return %",
    "value": "Account value",
    "daily": "Daily return %",
}

TRANSACTION_SHEET_KEYWORDS = ("transaction", "mouvement", "opérat")
POSITION_SHEET_KEYWORDS = ("position", "portefeuille", "portfolio")
PERFORMANCE_SHEET_KEYWORDS = ("performance",)
MASTER_SHEET_PREFIX = "client "

# Tested in order; the first matching rule wins.
CLASSIFICATION_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "transfer",
        (
            "virement",
            "dépôt",
            "versement",
            "retrait",
            "credit transfer",
            "wire",
            "deposit",
            "withdrawal",
            "einzahlung",
            "auszahlung",
            "gutschrift",
            "überweisung",
        ),
    ),
    KeywordRule(
        "dividend",
        ("dividende", "dividend", "coupon", "ausschüttung"),
    ),
    KeywordRule("interest", ("intérêt", "interest", "zins")),
    KeywordRule(
        "custody",
        (
            "frais de gest",
            "droits de garde",
            "custody",
            "management fee",
            "depotgebühr",
            "verwaltungsgebühr",
        ),
    ),
    KeywordRule(
        "commission",
        (
            "commission",
            "courtage",
            "brokerage",
            "frais",
            "kommission",
            "gebühr",
        ),
        excludes=("timbr",),
    ),
    KeywordRule(
        "tax",
        (
            "taxe",
            "impôt",
            "tax",
            "timbr",
            "droit de timbre",
            "stamp duty",
            "steuer",
            "stempel",
        ),
    ),
)

TRADE_RULE = KeywordRule(
    "trade",
    ("achat", "vente", "buy", "sell", "kauf", "verkauf"),
)


__all__ = [
    "BROKER_UBS",
    "BROKER_SAXO",
    "SPREADSHEET_EPOCH",
    "TRADING_DAYS_PER_YEAR",
    "DEFAULT_RISK_FREE_RATE_PCT",
    "DRAWDOWN_EPSILON_PCT",
    "POSITION_KEY_LENGTH",
    "ALL_ACCOUNTS",
    "TRANSACTION_COLUMNS",
    "TRANSACTION_FALLBACKS",
    "VALUATION_COLUMNS",
    "PERFORMANCE_COLUMNS",
    "PERFORMANCE_FALLBACKS",
    "TRANSACTION_SHEET_KEYWORDS",
    "POSITION_SHEET_KEYWORDS",
    "PERFORMANCE_SHEET_KEYWORDS",
    "MASTER_SHEET_PREFIX",
    "CLASSIFICATION_RULES",
    "TRADE_RULE",
]
