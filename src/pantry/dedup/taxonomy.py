"""
Read-only product taxonomy.

A Taxonomy holds the two lookup tables the brand and category matchers
share: generic term -> brand names, and broad category -> generic terms.
It is built once per detector and never mutated afterwards, so several
detectors can run side by side with different tables.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from pantry.core.config import TaxonomyConfig
from pantry.utils.exceptions import TaxonomyError


def _freeze(table: Mapping[str, Iterable[str]]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({key: tuple(values) for key, values in table.items()})


class Taxonomy:
    """Immutable generic/brand and category/member tables."""

    __slots__ = ("_generic_to_brands", "_category_members")

    def __init__(
        self,
        generic_to_brands: Mapping[str, Iterable[str]],
        category_members: Mapping[str, Iterable[str]],
    ):
        self._generic_to_brands = _freeze(generic_to_brands)
        self._category_members = _freeze(category_members)

    @classmethod
    def from_config(cls, config: TaxonomyConfig) -> "Taxonomy":
        return cls(config.generic_to_brands, config.category_members)

    @classmethod
    def default(cls) -> "Taxonomy":
        return cls.from_config(TaxonomyConfig())

    @property
    def generic_to_brands(self) -> Mapping[str, Tuple[str, ...]]:
        return self._generic_to_brands

    @property
    def category_members(self) -> Mapping[str, Tuple[str, ...]]:
        return self._category_members

    def brand_entries(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        """Iterate (generic term, brands) pairs in table order."""
        return iter(self._generic_to_brands.items())

    def category_entries(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        """Iterate (category, members) pairs in table order."""
        return iter(self._category_members.items())

    def brands_for(self, generic_term: str) -> Tuple[str, ...]:
        return self._generic_to_brands.get(generic_term, ())

    def __repr__(self) -> str:
        return (
            f"Taxonomy(generics={len(self._generic_to_brands)}, "
            f"categories={len(self._category_members)})"
        )


def validate_tables(
    generic_to_brands: Any, category_members: Any
) -> Dict[str, Dict[str, list]]:
    """Check raw tables before a Taxonomy is built from them.

    Args:
        generic_to_brands: Candidate generic term -> brands mapping
        category_members: Candidate category -> members mapping

    Returns:
        Both tables, validated and lower-cased

    Raises:
        TaxonomyError: If either table is not a mapping of strings to
            lists of strings
    """
    tables = {"generic_to_brands": generic_to_brands, "category_members": category_members}
    for table_name, table in tables.items():
        if not isinstance(table, Mapping):
            raise TaxonomyError(f"{table_name} must be a mapping", table=table_name)
        for key, values in table.items():
            if not isinstance(key, str) or not key.strip():
                raise TaxonomyError(f"{table_name} has an invalid key: {key!r}", table=table_name)
            if isinstance(values, str) or not isinstance(values, (list, tuple)):
                raise TaxonomyError(
                    f"{table_name}[{key!r}] must be a list of names", table=table_name
                )
            for value in values:
                if not isinstance(value, str):
                    raise TaxonomyError(
                        f"{table_name}[{key!r}] contains a non-string entry: {value!r}",
                        table=table_name,
                    )

    config = TaxonomyConfig(
        generic_to_brands=generic_to_brands, category_members=category_members
    )
    return {
        "generic_to_brands": config.generic_to_brands,
        "category_members": config.category_members,
    }


def load_taxonomy(config: Optional[TaxonomyConfig] = None) -> Taxonomy:
    """Build a Taxonomy from configuration, or the built-in tables."""
    if config is None:
        return Taxonomy.default()
    return Taxonomy.from_config(config)
