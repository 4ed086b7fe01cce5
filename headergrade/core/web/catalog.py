# core/web/catalog.py

import hashlib
import json
import os
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from headergrade.core.errors import CatalogError
from headergrade.core.logging.logger import setup_logger
from headergrade.core.web.models import Category, HeaderRule, Importance
from headergrade.core.web.rules import DEFAULT_RULES

logger = setup_logger(__name__)

REQUIRED_FIELDS = ("name", "key", "importance", "description", "link")


class RuleCatalog:
    """
    Read-only, ordered rule tables keyed by category.

    The catalog is built once and shared; rules are frozen dataclasses and the
    per-category sequences are tuples, so nothing can mutate it after
    construction.
    """

    def __init__(self, rules: Mapping[Category, Iterable[HeaderRule]]):
        tables: dict[Category, tuple[HeaderRule, ...]] = {}
        for category in Category:
            category_rules = tuple(rules.get(category, ()))
            seen_keys = set()
            for rule in category_rules:
                if rule.category is not category:
                    raise CatalogError(
                        f"Rule {rule.name} is filed under {category.value} "
                        f"but declares category {rule.category.value}"
                    )
                if rule.key in seen_keys:
                    raise CatalogError(
                        f"Duplicate key {rule.key} in {category.value} rules"
                    )
                seen_keys.add(rule.key)
            tables[category] = category_rules
        self._tables = MappingProxyType(tables)

    def rules_for(self, category: Category) -> tuple[HeaderRule, ...]:
        return self._tables[category]

    def __getitem__(self, category: Category) -> tuple[HeaderRule, ...]:
        return self.rules_for(category)

    def categories(self) -> tuple[Category, ...]:
        return tuple(c for c, rules in self._tables.items() if rules)

    def find_rule(self, category: Category, key: str) -> HeaderRule | None:
        key = key.lower()
        for rule in self._tables[category]:
            if rule.key == key:
                return rule
        return None

    def fingerprint(self) -> str:
        """Digest of every rule in catalog order. Changes whenever any rule does."""
        definitions = [
            rule.to_dict() for category in Category for rule in self._tables[category]
        ]
        encoded = json.dumps(definitions, sort_keys=True).encode("utf-8")
        return hashlib.sha256(encoded).hexdigest()

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._tables.values())

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{category.value}={len(rules)}" for category, rules in self._tables.items()
        )
        return f"RuleCatalog({counts})"


def build_rule(category: Category, definition: Mapping[str, Any]) -> HeaderRule:
    """
    Build a HeaderRule from a plain definition mapping.

    Args:
        category: Category the rule belongs to
        definition: Mapping with name, key, importance, description, link and
            an optional recommendation

    Returns:
        The constructed rule

    Raises:
        CatalogError: If a required field is missing or the importance is unknown
    """
    missing = [f for f in REQUIRED_FIELDS if not definition.get(f)]
    if missing:
        raise CatalogError(
            f"Rule definition in {category.value} is missing: {', '.join(missing)}"
        )

    try:
        importance = Importance(str(definition["importance"]).lower())
    except ValueError:
        raise CatalogError(
            f"Unknown importance '{definition['importance']}' for {definition['name']}"
        ) from None

    return HeaderRule(
        name=definition["name"],
        key=str(definition["key"]).strip().lower(),
        importance=importance,
        description=definition["description"],
        recommendation=definition.get("recommendation"),
        link=definition["link"],
        category=category,
    )


def catalog_from_definitions(
    definitions: Mapping[str, Iterable[Mapping[str, Any]]],
) -> RuleCatalog:
    rules: dict[Category, list[HeaderRule]] = {}
    for category_name, category_definitions in definitions.items():
        try:
            category = Category(category_name.lower())
        except ValueError:
            raise CatalogError(f"Unknown category '{category_name}'") from None
        rules[category] = [build_rule(category, d) for d in category_definitions]
    return RuleCatalog(rules)


def default_catalog() -> RuleCatalog:
    """Build the built-in catalog."""
    return catalog_from_definitions(DEFAULT_RULES)


def load_catalog(file_path: str) -> RuleCatalog:
    """
    Load a rule catalog from a JSON file.

    The file holds an object keyed by category name ("security",
    "performance", "maintainability", "cloudflare"), each an ordered list of
    rule definitions. Categories left out of the file fall back to the
    built-in rules.
    """
    file_path = os.path.abspath(os.path.normpath(file_path))
    if not os.path.isfile(file_path):
        raise CatalogError(f"Rules file does not exist: {file_path}")

    try:
        with open(file_path, encoding="utf-8") as file:
            definitions = json.load(file)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Rules file {file_path} is not valid JSON: {e}") from e

    if not isinstance(definitions, dict):
        raise CatalogError("Rules file must contain a JSON object keyed by category")

    merged = {**DEFAULT_RULES, **{k.lower(): v for k, v in definitions.items()}}
    catalog = catalog_from_definitions(merged)
    logger.info(f"Loaded rule catalog from {file_path}: {catalog!r}")
    return catalog
