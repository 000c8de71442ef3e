"""
ValidationPolicy — политика валидации цены оракула

Immutable Pydantic модель. Необязательные поля (min_price, max_price,
expected_feed_id) равны None, когда соответствующая проверка пропускается.

Пресеты:
- strict:  30 s, 100 bps (1%), min_price = 0 — для операций с крупными суммами
- default: 60 s, 200 bps (2%)
- lenient: 120 s, 500 bps (5%) — для некритичных операций
"""

from typing import Final, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from priceguard.core.domain.feed_id import FeedIdentifier
from priceguard.core.math.numerical_safeguards import I64_MAX, I64_MIN, U64_MAX

# =============================================================================
# ПОРОГИ ПРЕСЕТОВ
# =============================================================================

DEFAULT_MAX_AGE_SECONDS: Final[int] = 60
DEFAULT_MAX_CONFIDENCE_BPS: Final[int] = 200

STRICT_MAX_AGE_SECONDS: Final[int] = 30
STRICT_MAX_CONFIDENCE_BPS: Final[int] = 100

LENIENT_MAX_AGE_SECONDS: Final[int] = 120
LENIENT_MAX_CONFIDENCE_BPS: Final[int] = 500


class ValidationPolicy(BaseModel):
    """Пороги валидации одного сэмпла."""

    max_age_seconds: int = Field(
        DEFAULT_MAX_AGE_SECONDS, ge=0, le=U64_MAX, description="Максимальный возраст (секунды)"
    )
    max_confidence_ratio: int = Field(
        DEFAULT_MAX_CONFIDENCE_BPS,
        ge=0,
        le=U64_MAX,
        description="Максимальное отношение confidence/price (basis points)",
    )
    min_price: Optional[int] = Field(None, ge=I64_MIN, le=I64_MAX, description="Нижний clamp цены")
    max_price: Optional[int] = Field(None, ge=I64_MIN, le=I64_MAX, description="Верхний clamp цены")
    expected_feed_id: Optional[FeedIdentifier] = Field(
        None, description="Ожидаемый идентификатор фида (hex на входе)"
    )

    model_config = {"frozen": True}

    @field_validator("expected_feed_id", mode="before")
    @classmethod
    def parse_feed_id(cls, v):
        """Hex-строка разбирается в FeedIdentifier (InvalidFeedIdentifier при ошибке)"""
        if isinstance(v, str):
            return FeedIdentifier.from_hex(v)
        return v

    @model_validator(mode="after")
    def validate_price_range(self) -> "ValidationPolicy":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError(
                f"min_price {self.min_price} must be <= max_price {self.max_price}"
            )
        return self

    # -------------------------------------------------------------------------
    # ПРЕСЕТЫ
    # -------------------------------------------------------------------------

    @classmethod
    def strict(cls) -> "ValidationPolicy":
        return cls(
            max_age_seconds=STRICT_MAX_AGE_SECONDS,
            max_confidence_ratio=STRICT_MAX_CONFIDENCE_BPS,
            min_price=0,
        )

    @classmethod
    def default(cls) -> "ValidationPolicy":
        return cls(
            max_age_seconds=DEFAULT_MAX_AGE_SECONDS,
            max_confidence_ratio=DEFAULT_MAX_CONFIDENCE_BPS,
        )

    @classmethod
    def lenient(cls) -> "ValidationPolicy":
        return cls(
            max_age_seconds=LENIENT_MAX_AGE_SECONDS,
            max_confidence_ratio=LENIENT_MAX_CONFIDENCE_BPS,
        )

    @classmethod
    def preset(cls, name: str) -> "ValidationPolicy":
        """
        Пресет по имени: "strict", "default" или "lenient".

        Raises:
            ValueError: Если имя пресета неизвестно
        """
        factories = {
            "strict": cls.strict,
            "default": cls.default,
            "lenient": cls.lenient,
        }
        try:
            factory = factories[name.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown policy preset {name!r}, expected one of {sorted(factories)}"
            ) from None
        return factory()

    def with_feed_id(self, feed_id: Union[str, FeedIdentifier]) -> "ValidationPolicy":
        """
        Копия политики с ожидаемым идентификатором фида.

        Raises:
            InvalidFeedIdentifier: Если hex-строка некорректна
        """
        if isinstance(feed_id, str):
            feed_id = FeedIdentifier.from_hex(feed_id)
        return self.model_copy(update={"expected_feed_id": feed_id})
