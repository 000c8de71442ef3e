"""
JSON Schema Contract Validators

Модуль для валидации входящих данных оракула согласно JSON Schema контрактам
и разбора их в доменные модели. Использует библиотеку jsonschema.

Схемы (priceguard/core/contracts/schema/):
- price_update.json: запись фида в ответе оракула (формат Hermes "parsed")

Получение данных по сети сюда не входит: модуль принимает уже
декодированный JSON от клиента оракула.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, NamedTuple, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from priceguard.core.domain.feed_id import FeedIdentifier
from priceguard.core.domain.price import PriceSample


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'price_update')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема сама по себе невалидна
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class PriceUpdateValidator(ContractValidator):
    """Валидатор для price_update контракта."""

    def __init__(self):
        super().__init__("price_update")


# =============================================================================
# РАЗБОР В ДОМЕННЫЕ МОДЕЛИ
# =============================================================================


class PriceUpdate(NamedTuple):
    """Запись фида: идентификатор, spot-сэмпл и (опционально) EMA-сэмпл."""

    feed_id: FeedIdentifier
    price: PriceSample
    ema_price: Optional[PriceSample]


def _sample_from_contract(data: Dict[str, Any]) -> PriceSample:
    return PriceSample(
        price=int(data["price"]),
        confidence=int(data["conf"]),
        exponent=data["expo"],
        publish_time=data["publish_time"],
    )


def validate_price_update(data: Dict[str, Any]) -> None:
    """
    Валидация записи price_update.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PriceUpdateValidator().validate(data)


def parse_price_update(data: Dict[str, Any]) -> PriceUpdate:
    """
    Валидация и разбор записи price_update в доменные модели.

    Args:
        data: Декодированный JSON одной записи фида

    Returns:
        PriceUpdate с идентификатором и сэмплами

    Raises:
        ValidationError: Если данные не соответствуют схеме
        InvalidFeedIdentifier: Если идентификатор некорректен
        pydantic.ValidationError: Если числа вне разрядностей сэмпла
    """
    validate_price_update(data)

    ema = data.get("ema_price")
    return PriceUpdate(
        feed_id=FeedIdentifier.from_hex(data["id"]),
        price=_sample_from_contract(data["price"]),
        ema_price=_sample_from_contract(ema) if ema is not None else None,
    )
