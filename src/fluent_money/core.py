"""
core.py — MoneyValue, valore monetario mutabile con API fluente

================================================================================
DESIGN PRINCIPLES
================================================================================

1. RAPPRESENTAZIONE INTERNA
   Un float. Scelta consapevole: l'obiettivo è la matematica veloce e leggibile,
   non la precisione arbitraria. Chi ha bisogno di Decimal usa altro.

2. API FLUENTE
   Ogni setter e ogni operazione muta l'istanza e restituisce la STESSA istanza.
   L'identità è preservata lungo tutta la catena:

       value = MoneyValue.create(100)
       assert value.add_tax().add_discount(5) is value

3. ISTANZA PER CALCOLO
   create() restituisce sempre un oggetto nuovo. Nessuno stato globale,
   nessuna istanza condivisa tra chiamate diverse.

4. FALLBACK SILENZIOSI (contrattuali, non accidentali)
   - Input numerico malformato       -> 0        (vedi normalize())
   - Divisione per zero              -> amount = 0
   - Posizione locale non valida     -> "prefix"
   Nessuna eccezione. Ogni fallback viene loggato a livello DEBUG.

5. ERRORI DI PROGRAMMAZIONE
   Configurazioni impossibili (decimali negativi, codice locale non stringa,
   scorporo con aliquota -100%) sollevano ValueError/TypeError.

================================================================================
FORMATO DI OUTPUT
================================================================================

    MoneyValue.create(1234.5).get()                        -> "1.234,50"
    MoneyValue.create(1234.5).set_locale_active(True).get() -> "TRL1.234,50"

Separatore migliaia "." e decimale "," fissi. Il codice locale è attaccato
senza spazi, prima o dopo il numero a seconda di locale_position.

================================================================================
"""

from __future__ import annotations
from enum import Enum
from typing import Any
import logging

from .normalize import format_amount, normalize


logger = logging.getLogger(__name__)


# ==============================================================================
# DEFAULTS
# ==============================================================================

DEFAULT_TAX_RATE = 18
DEFAULT_DECIMALS = 2
DEFAULT_LOCALE_CODE = "TRL"


# ==============================================================================
# LOCALE POSITION
# ==============================================================================

class LocalePosition(str, Enum):
    """
    Dove attaccare il codice locale rispetto alla stringa numerica.

    - PREFIX: "TRL1.234,50"
    - SUFFIX: "1.234,50TRL"
    """
    PREFIX = "prefix"
    SUFFIX = "suffix"

    @classmethod
    def coerce(cls, value: Any) -> LocalePosition:
        """Converte value in LocalePosition. Valori sconosciuti diventano PREFIX."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.debug("Invalid locale position %r, falling back to prefix", value)
            return cls.PREFIX


DEFAULT_LOCALE_POSITION = LocalePosition.PREFIX


def _check_decimals(decimals: Any) -> int:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise TypeError(
            f"decimals deve essere int, non {type(decimals).__name__}"
        )
    if decimals < 0:
        raise ValueError(f"decimals deve essere >= 0, ricevuto: {decimals}")
    return decimals


def _check_locale_code(code: Any) -> str:
    if not isinstance(code, str):
        raise TypeError(
            f"locale_code deve essere str, non {type(code).__name__}"
        )
    return code


def _check_locale_active(active: Any) -> bool:
    if not isinstance(active, bool):
        raise TypeError(
            f"locale_active deve essere bool, non {type(active).__name__}"
        )
    return active


# ==============================================================================
# MONEY VALUE
# ==============================================================================

class MoneyValue:
    """
    Importo monetario mutabile con configurazione di formattazione e tasse.

    INVARIANTI:
    1. decimals >= 0
    2. locale_position è sempre PREFIX o SUFFIX
    3. tax_amount riflette SOLO l'ultima add_tax()/remove_tax() (non cumulativo)
    4. amount e tax_amount sono sempre finiti (divide(0) azzera; input non
       finiti e risultati in overflow valgono 0, come in normalize())

    USAGE:
        total = (
            MoneyValue.create("1,000")
            .sum(250, "49.90")
            .add_discount(10)
            .add_tax()
            .set_locale_active(True)
            .set_locale_position("suffix")
        )
        total.all()   # {"amount": "1.380,49TRL", "tax": 210.58...}
    """

    __slots__ = (
        "_amount",
        "_tax_rate",
        "_decimals",
        "_tax_amount",
        "_locale_code",
        "_locale_active",
        "_locale_position",
    )

    def __init__(
        self,
        amount: Any = 0.0,
        *,
        tax_rate: Any = DEFAULT_TAX_RATE,
        decimals: int = DEFAULT_DECIMALS,
        locale_code: str = DEFAULT_LOCALE_CODE,
        locale_active: bool = False,
        locale_position: Any = DEFAULT_LOCALE_POSITION,
    ):
        self._amount = normalize(amount)
        self._tax_rate = normalize(tax_rate)
        self._decimals = _check_decimals(decimals)
        self._tax_amount = 0.0
        self._locale_code = _check_locale_code(locale_code)
        self._locale_active = _check_locale_active(locale_active)
        self._locale_position = LocalePosition.coerce(locale_position)

    # -------------------------------------------------------------------------
    # Costruttori
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, amount: Any = 0.0, **options: Any) -> MoneyValue:
        """
        Crea un nuovo MoneyValue con l'importo dato e la configurazione di default.

        Ogni chiamata restituisce un'istanza indipendente: due catene di
        calcolo non condividono mai stato.

        Options (keyword): tax_rate, decimals, locale_code, locale_active,
        locale_position.
        """
        return cls(amount, **options)

    def copy(self) -> MoneyValue:
        """
        Clona importo, ultima tassa e configurazione.

        Utile per biforcare un calcolo: le due istanze evolvono separatamente.
        """
        clone = MoneyValue(
            self._amount,
            tax_rate=self._tax_rate,
            decimals=self._decimals,
            locale_code=self._locale_code,
            locale_active=self._locale_active,
            locale_position=self._locale_position,
        )
        clone._tax_amount = self._tax_amount
        return clone

    # Ogni scrittura passa da normalize(): un overflow (inf/NaN) diventa 0.
    def _set_amount(self, value: float) -> None:
        self._amount = normalize(value)

    def _set_tax_amount(self, value: float) -> None:
        self._tax_amount = normalize(value)

    # -------------------------------------------------------------------------
    # Configurazione (fluente)
    # -------------------------------------------------------------------------

    def set_decimals(self, decimals: int) -> MoneyValue:
        """
        Numero di cifre decimali usate da get().

        Raises:
            TypeError: se decimals non è un int
            ValueError: se decimals < 0
        """
        self._decimals = _check_decimals(decimals)
        return self

    def set_tax_rate(self, rate: Any) -> MoneyValue:
        """Aliquota di default (in percentuale) per add_tax()/remove_tax() senza argomenti."""
        self._tax_rate = normalize(rate)
        return self

    def set_locale_active(self, active: bool) -> MoneyValue:
        """
        Attiva/disattiva il codice locale in get().

        Raises:
            TypeError: se active non è un bool ("false" non viene convertito)
        """
        self._locale_active = _check_locale_active(active)
        return self

    def set_locale_code(self, code: str) -> MoneyValue:
        self._locale_code = _check_locale_code(code)
        return self

    def set_locale_position(self, position: Any) -> MoneyValue:
        """
        "prefix" o "suffix" (o LocalePosition).

        Qualsiasi altro valore viene silenziosamente ricondotto a "prefix".
        """
        self._locale_position = LocalePosition.coerce(position)
        return self

    # -------------------------------------------------------------------------
    # Operazioni aritmetiche
    # -------------------------------------------------------------------------

    def sum(self, *numbers: Any) -> MoneyValue:
        """Somma ogni argomento, nell'ordine dato. Accetta anche "1,234.50"."""
        for number in numbers:
            self._set_amount(self._amount + normalize(number))
        return self

    def subtract(self, *numbers: Any) -> MoneyValue:
        """Sottrae ogni argomento, nell'ordine dato."""
        for number in numbers:
            self._set_amount(self._amount - normalize(number))
        return self

    def multiply(self, factor: Any) -> MoneyValue:
        self._set_amount(self._amount * normalize(factor))
        return self

    def divide(self, factor: Any) -> MoneyValue:
        """
        Divide l'importo per factor.

        Divisione per zero (o per input malformato, che vale 0): l'importo
        diventa 0. Nessuna eccezione, nessun inf/NaN.
        """
        divisor = normalize(factor)
        if divisor == 0:
            logger.debug("Division by zero (%r), amount reset to 0", factor)
            self._set_amount(0.0)
        else:
            self._set_amount(self._amount / divisor)
        return self

    # -------------------------------------------------------------------------
    # Operazioni fiscali
    # -------------------------------------------------------------------------

    def _effective_rate(self, percent: Any) -> float:
        return normalize(self._tax_rate if percent is None else percent)

    def add_tax(self, percent: Any = None) -> MoneyValue:
        """
        Aggiunge la tassa all'importo.

        Formula:  tax_amount = amount * (p / 100)
                  amount     = amount + tax_amount
        dove p = percent, o tax_rate se percent è None.
        """
        rate = self._effective_rate(percent)
        self._set_tax_amount(normalize(self._amount) * (rate / 100))
        self._set_amount(self._amount + self._tax_amount)
        return self

    def remove_tax(self, percent: Any = None) -> MoneyValue:
        """
        Scorpora la tassa: l'importo corrente è considerato tasse incluse.

        Formula:  tax_amount = amount - amount / (1 + p / 100)
                  amount     = amount - tax_amount

        Raises:
            ValueError: se l'aliquota effettiva è -100 (fattore lordo nullo)
        """
        rate = self._effective_rate(percent)
        gross_factor = 1 + (rate / 100)
        if gross_factor == 0:
            raise ValueError(f"Impossibile scorporare un'aliquota del {rate}%")
        self._set_tax_amount(self._amount - normalize(self._amount) / gross_factor)
        self._set_amount(self._amount - self._tax_amount)
        return self

    def add_discount(self, value: Any, is_fixed: bool = False) -> MoneyValue:
        """
        Applica uno sconto.

        Args:
            value: percentuale (es. 10 per 10%) o importo fisso
            is_fixed: True per uno sconto a importo fisso

        NOTA: gli sconti non toccano tax_amount.
        """
        if is_fixed:
            return self._add_fixed_discount(value)
        return self._add_percent_discount(value)

    def _add_percent_discount(self, percent: Any) -> MoneyValue:
        self._set_amount(self._amount - normalize(self._amount) * (normalize(percent) / 100))
        return self

    def _add_fixed_discount(self, amount: Any) -> MoneyValue:
        self._set_amount(self._amount - normalize(amount))
        return self

    # -------------------------------------------------------------------------
    # Proprietà e output
    # -------------------------------------------------------------------------

    @property
    def amount(self) -> float:
        """
        Importo grezzo come float.

        Per il display usare get(). Per i calcoli continuare la catena.
        """
        return self._amount

    @property
    def tax_rate(self) -> float:
        return self._tax_rate

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def locale_code(self) -> str:
        return self._locale_code

    @property
    def locale_active(self) -> bool:
        return self._locale_active

    @property
    def locale_position(self) -> LocalePosition:
        return self._locale_position

    @property
    def locale_prefix(self) -> str | None:
        """Codice locale se la posizione è PREFIX, altrimenti None."""
        if self._locale_position is LocalePosition.PREFIX:
            return self._locale_code
        return None

    @property
    def locale_suffix(self) -> str | None:
        """Codice locale se la posizione è SUFFIX, altrimenti None."""
        if self._locale_position is LocalePosition.SUFFIX:
            return self._locale_code
        return None

    def get(self) -> str:
        """
        Importo formattato: "1.234,50", con codice locale se attivo.
        """
        rendered = format_amount(normalize(self._amount), self._decimals)
        if not self._locale_active:
            return rendered
        return f"{self.locale_prefix or ''}{rendered}{self.locale_suffix or ''}"

    def get_tax(self) -> float:
        """Ultima tassa calcolata da add_tax()/remove_tax(). 0 se mai chiamate."""
        return self._tax_amount

    def all(self) -> dict[str, Any]:
        """
        Importo formattato e ultima tassa insieme.

        Formato: {"amount": str, "tax": float}
        """
        return {
            "amount": self.get(),
            "tax": self.get_tax(),
        }

    def __str__(self) -> str:
        return self.get()

    def __repr__(self) -> str:
        return (
            f"MoneyValue(amount={self._amount!r}, decimals={self._decimals}, "
            f"locale_code={self._locale_code!r}, "
            f"locale_position={self._locale_position.value!r})"
        )
