"""Monster catalog loading.

The catalog is a JSON list of monster templates. A custom catalog can be
configured through StorageSettings.catalog_path; otherwise the catalog
bundled with the package is used. A missing or malformed catalog is fatal.
"""

from __future__ import annotations

from collections import Counter
from importlib import resources
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from battle_arena.core.config import get_settings
from battle_arena.core.exceptions import CatalogError
from battle_arena.core.logging import get_logger
from battle_arena.models.character import Monster

logger = get_logger(__name__)

_CATALOG_ADAPTER = TypeAdapter(list[Monster])

BUNDLED_CATALOG = "monsters.json"


def _read_catalog_text(path: Path | None) -> tuple[str, str]:
    if path is None:
        source = resources.files("battle_arena.data").joinpath(BUNDLED_CATALOG)
        try:
            return source.read_text(encoding="utf-8"), f"<bundled:{BUNDLED_CATALOG}>"
        except OSError as exc:
            raise CatalogError(
                "Bundled monster catalog is missing",
                source_file=BUNDLED_CATALOG,
            ) from exc

    try:
        return path.read_text(encoding="utf-8"), str(path)
    except OSError as exc:
        raise CatalogError(
            f"Cannot read monster catalog: {exc.strerror or exc}",
            source_file=str(path),
        ) from exc


def parse_catalog(text: str, *, source: str = "<string>") -> list[Monster]:
    """Parse and validate catalog JSON.

    Args:
        text: JSON list of monster objects.
        source: Name of the source, for error context.

    Returns:
        The monster templates in file order.

    Raises:
        CatalogError: If the JSON is invalid or a stage has several bosses.
    """
    try:
        monsters = _CATALOG_ADAPTER.validate_json(text)
    except PydanticValidationError as exc:
        raise CatalogError(
            "Monster catalog is malformed",
            source_file=source,
            details={"errors": exc.error_count()},
        ) from exc

    boss_counts = Counter(m.stage for m in monsters if m.is_boss)
    duplicated = sorted(int(stage) for stage, count in boss_counts.items() if count > 1)
    if duplicated:
        raise CatalogError(
            "Each stage may have only one boss",
            source_file=source,
            details={"stages": duplicated},
        )

    if not monsters:
        logger.warning("Monster catalog is empty", source=source)

    return monsters


def load_catalog(path: str | Path | None = None) -> list[Monster]:
    """Load the monster catalog.

    Args:
        path: Catalog JSON file. When None, the configured
            StorageSettings.catalog_path is used, and the bundled catalog
            when that is unset too.

    Returns:
        The monster templates in file order.

    Raises:
        CatalogError: If the catalog cannot be read or parsed.

    Example:
        >>> monsters = load_catalog()
        >>> any(m.is_boss for m in monsters)
        True
    """
    if path is None:
        path = get_settings().storage.catalog_path
    text, source = _read_catalog_text(Path(path) if path is not None else None)
    monsters = parse_catalog(text, source=source)
    logger.info("Monster catalog loaded", source=source, monsters=len(monsters))
    return monsters


__all__ = [
    "BUNDLED_CATALOG",
    "parse_catalog",
    "load_catalog",
]
