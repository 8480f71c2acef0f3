"""ISO 4217 currency codes.

The code table covers active ISO 4217 alphabetic codes, including funds and
precious-metal codes.
"""

from __future__ import annotations

from dataclasses import dataclass

ISO_4217_CODES = frozenset(
    """
    AED AFN ALL AMD ANG AOA ARS AUD AWG AZN BAM BBD BDT BGN BHD BIF BMD BND
    BOB BOV BRL BSD BTN BWP BYN BZD CAD CDF CHE CHF CHW CLF CLP CNY COP COU
    CRC CUC CUP CVE CZK DJF DKK DOP DZD EGP ERN ETB EUR FJD FKP GBP GEL GHS
    GIP GMD GNF GTQ GYD HKD HNL HTG HUF IDR ILS INR IQD IRR ISK JMD JOD JPY
    KES KGS KHR KMF KPW KRW KWD KYD KZT LAK LBP LKR LRD LSL LYD MAD MDL MGA
    MKD MMK MNT MOP MRU MUR MVR MWK MXN MXV MYR MZN NAD NGN NIO NOK NPR NZD
    OMR PAB PEN PGK PHP PKR PLN PYG QAR RON RSD RUB RWF SAR SBD SCR SDG SEK
    SGD SHP SLE SLL SOS SRD SSP STN SVC SYP SZL THB TJS TMT TND TOP TRY TTD
    TWD TZS UAH UGX USD USN UYI UYU UYW UZS VED VES VND VUV WST XAF XAG XAU
    XBA XBB XBC XBD XCD XCG XDR XOF XPD XPF XPT XSU XTS XUA XXX YER ZAR ZMW
    ZWG ZWL
    """.split()
)


@dataclass(frozen=True)
class Currency:
    """An ISO 4217 currency, identified by its three-letter code."""

    code: str

    def __post_init__(self) -> None:
        if self.code not in ISO_4217_CODES:
            msg = f"Unknown ISO 4217 currency code: {self.code!r}"
            raise ValueError(msg)

    @classmethod
    def of(cls, code: str) -> Currency:
        """Parse a currency code, tolerating surrounding whitespace and case."""
        return cls(code.strip().upper())

    def __str__(self) -> str:
        return self.code
