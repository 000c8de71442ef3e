"""
FeedIdentifier — идентификатор ценового фида

32-байтовый непрозрачный ключ, который разбирается из hex-строки и
используется только для побайтового сравнения с ожидаемым фидом.
"""

import string
from typing import Final

from pydantic import BaseModel, Field, field_validator

from priceguard.core.errors import InvalidFeedIdentifier

# Длина идентификатора в байтах
FEED_ID_LENGTH: Final[int] = 32

_HEX_DIGITS: Final[frozenset[str]] = frozenset(string.hexdigits)


class FeedIdentifier(BaseModel):
    """
    Идентификатор фида оракула (32 байта).

    Равенство — побайтовое. Текстовое представление: 0x + 64 hex-символа.
    """

    value: bytes = Field(..., description="Сырые 32 байта идентификатора")

    model_config = {"frozen": True}

    @field_validator("value")
    @classmethod
    def validate_length(cls, v: bytes) -> bytes:
        if len(v) != FEED_ID_LENGTH:
            raise InvalidFeedIdentifier(
                f"feed id must be {FEED_ID_LENGTH} bytes, got {len(v)}"
            )
        return v

    @classmethod
    def from_hex(cls, text: str) -> "FeedIdentifier":
        """
        Разбор идентификатора из hex-строки.

        Префикс 0x/0X необязателен; после него ровно 64 hex-символа.

        Raises:
            InvalidFeedIdentifier: Если строка некорректна
        """
        if not isinstance(text, str):
            raise InvalidFeedIdentifier(f"feed id must be a hex string, got {type(text).__name__}")

        digits = text[2:] if text[:2] in ("0x", "0X") else text

        if len(digits) != FEED_ID_LENGTH * 2:
            raise InvalidFeedIdentifier(
                f"feed id must have {FEED_ID_LENGTH * 2} hex digits, got {len(digits)}: {text!r}"
            )
        if not set(digits) <= _HEX_DIGITS:
            raise InvalidFeedIdentifier(f"feed id contains non-hex characters: {text!r}")

        return cls(value=bytes.fromhex(digits))

    def to_hex(self) -> str:
        return "0x" + self.value.hex()

    def __str__(self) -> str:
        return self.to_hex()


# =============================================================================
# ИЗВЕСТНЫЕ ФИДЫ (Pyth, USD-котировки)
# =============================================================================

_KNOWN_FEED_HEX: Final[dict[str, str]] = {
    # Криптовалюты
    "BTC_USD": "0xe62df6c8b4a85fe1a67db44dc12de5db330f7ac66b72dc658afedf0f4a415b43",
    "ETH_USD": "0xff61491a931112ddf1bd8147cd1b641375f79f5825126d665480874634fd0ace",
    "SOL_USD": "0xef0d8b6fda2ceba41da15d4095d1da392a0d2f8ed0c6c7bc0f4cfac8c280b56d",
    "BNB_USD": "0x2f95862b045670cd22bee3114c39763a4a08beeb663b145d283c31d7d1101c4f",
    "AVAX_USD": "0x93da3352f9f1d105fdfe4971cfa80e9dd777bfc5d0f683ebb6e1294b92137bb7",
    # Стейблкоины
    "USDC_USD": "0xeaa020c61cc479712813461ce153894a96a6c00b21ed0cfc2798d1f9a9e9c94a",
    "USDT_USD": "0x2b89b9dc8fdf9f34709a5b106b472f0f39bb6ca9ce04b0fd7f2e971688e2e53b",
    # Экосистема Solana
    "JTO_USD": "0xb43660a5f790c69354b0729a5ef9d50d68f1df92107540210b9cccba1f947cc2",
    "JUP_USD": "0x0a0408d619e9380abad35060f9192039ed5042fa6f82301d0e48bb52be830996",
    "BONK_USD": "0x72b021217ca3fe68922a19aaf990109cb9d84e9ad004b4d2025ad6f529314419",
    "WIF_USD": "0x4ca4beeca86f0d164160323817a4e42b10010a724c2217c6ee41b54cd4cc61fc",
    "RAY_USD": "0x91568baa8beb53db23eb3fb7f22c6e8bd303d103919e19733f2bb642d3e7987a",
    # DeFi
    "LINK_USD": "0x8ac0c70fff57e9aefdf5edf44b51d62c2d433653cbb2cf5cc06bb115af04d221",
    "UNI_USD": "0x78d185a741d07edb3412b09008b7c5cfb9bbbd7d568bf00ba737b456ba171501",
    "AAVE_USD": "0x2b9ab1e972a281585084148ba1389800799bd4be63b957507db1349314e47445",
    # Сырьё
    "XAU_USD": "0x765d2ba906dbc32ca17cc11f5310a89e9ee1f6420508c63861f2f8ba4ee34bb2",
    "XAG_USD": "0xf2fb02c32b055c805e7238d628e5e9dadef274376114eb1f012337cabe93871e",
}

KNOWN_FEEDS: Final[dict[str, FeedIdentifier]] = {
    symbol: FeedIdentifier.from_hex(hex_id) for symbol, hex_id in _KNOWN_FEED_HEX.items()
}


def feed_id_for(symbol: str) -> FeedIdentifier:
    """
    Идентификатор известного фида по символу (например, "SOL_USD").

    Raises:
        KeyError: Если символ неизвестен
    """
    try:
        return KNOWN_FEEDS[symbol.upper()]
    except KeyError:
        raise KeyError(f"Unknown feed symbol: {symbol}") from None
