# scaffel/parsers/product.py
"""Product descriptor parsing and validation."""

import logging
from typing import Any, get_args

from scaffel.planning.schemas import ProductInput, ProductType

logger = logging.getLogger(__name__)

VALID_TYPES: tuple[str, ...] = get_args(ProductType)
MAX_NAME_LENGTH = 255


class ProductParser:
    """Normalizes raw product input into a ProductInput."""

    def parse(self, data: dict[str, Any]) -> ProductInput:
        """
        Build a ProductInput, defaulting unknown or missing types to "saas".

        A missing name becomes an empty string so ``validate`` can report it.
        """
        return ProductInput(
            name=(data.get("name") or "").strip(),
            description=data.get("description"),
            type=self.parse_type(data.get("type")),
            domain=data.get("domain"),
        )

    def parse_type(self, value: str | None) -> str:
        if value and value.strip().lower() in VALID_TYPES:
            return value.strip().lower()
        if value:
            logger.warning(f"Unknown product type '{value}', using 'saas'")
        return "saas"

    def validate(self, product: ProductInput) -> tuple[bool, list[str]]:
        errors: list[str] = []

        if not product.name.strip():
            errors.append("Product name is required")

        if len(product.name) > MAX_NAME_LENGTH:
            errors.append(f"Product name must be {MAX_NAME_LENGTH} characters or less")

        return not errors, errors
