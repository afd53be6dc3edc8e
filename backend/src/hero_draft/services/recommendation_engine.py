"""Recommendation engine wiring the catalog cache to both scorers."""
import logging
import threading
from pathlib import Path
from typing import Optional

from hero_draft.config import Settings, get_settings
from hero_draft.models.catalog import ItemRecord
from hero_draft.models.recommendations import (
    BuildSuggestion,
    DraftSimulation,
    PartnerRecommendation,
)
from hero_draft.repositories.catalog_repository import (
    CatalogCache,
    CatalogSource,
    CsvCatalogSource,
    DuckDBCatalogSource,
)
from hero_draft.services.item_recommendation_service import ItemRecommendationService
from hero_draft.services.partner_recommendation_service import (
    DEFAULT_PARTNER_LIMIT,
    PartnerRecommendationService,
)
from hero_draft.services.rule_index import RuleIndex, build_rule_index

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).parents[4]


class RecommendationEngine:
    """Item and partner recommendations over a cached catalog.

    Services are built lazily from the cache on first use and discarded by
    ``reload()``, so an administrative data edit only needs one explicit
    reload call to take effect.
    """

    def __init__(self, cache: CatalogCache):
        self.cache = cache
        self._item_service: Optional[ItemRecommendationService] = None
        self._partner_service: Optional[PartnerRecommendationService] = None
        self._rule_index: Optional[RuleIndex] = None
        # Guards service construction against a concurrent reload.
        # Reentrant because partner_service builds rule_index.
        self._lock = threading.RLock()

    @property
    def rule_index(self) -> RuleIndex:
        with self._lock:
            if self._rule_index is None:
                self._rule_index = build_rule_index(self.cache.load_rules())
            return self._rule_index

    @property
    def item_service(self) -> ItemRecommendationService:
        with self._lock:
            if self._item_service is None:
                self._item_service = ItemRecommendationService(self.cache.load_items())
            return self._item_service

    @property
    def partner_service(self) -> PartnerRecommendationService:
        with self._lock:
            if self._partner_service is None:
                self._partner_service = PartnerRecommendationService(
                    self.cache.load_heroes(), self.rule_index
                )
            return self._partner_service

    def suggest_build(self, role: str, damage_type: str, phase: str = "early") -> BuildSuggestion:
        return self.item_service.suggest_build(role, damage_type, phase)

    def budget_items(self, damage_type: str, max_price: float = 1500, limit: int = 5) -> list[ItemRecord]:
        return self.item_service.budget_items(damage_type, max_price=max_price, limit=limit)

    def recommend_partners(self, hero_name: str, limit: int = DEFAULT_PARTNER_LIMIT) -> list[PartnerRecommendation]:
        return self.partner_service.recommend_partners(hero_name, limit=limit)

    def simulate_draft(self, hero_name: str, limit: int = DEFAULT_PARTNER_LIMIT) -> DraftSimulation:
        return self.partner_service.simulate_draft(hero_name, limit=limit)

    def rules(self) -> dict:
        return self.rule_index.to_dict()

    def reload(self) -> dict[str, int]:
        """Re-read the catalog, then drop derived services. Returns row counts.

        Services are cleared only after the cache holds the new tables, so
        nothing built during the reload survives it.
        """
        with self._lock:
            counts = self.cache.reload()
            self._item_service = None
            self._partner_service = None
            self._rule_index = None
        logger.info(f"Catalog reloaded: {counts}")
        return counts


def _resolve(path: str) -> Path:
    """Resolve a configured path; relative paths are taken from the repo root."""
    resolved = Path(path)
    if resolved.is_absolute():
        return resolved
    return REPO_ROOT / resolved


def build_catalog_source(settings: Settings) -> CatalogSource:
    """Pick the catalog source named by settings.catalog_backend."""
    if settings.catalog_backend == "duckdb":
        return DuckDBCatalogSource(_resolve(settings.database_path))
    return CsvCatalogSource(_resolve(settings.csv_dir))


def create_engine(settings: Optional[Settings] = None) -> RecommendationEngine:
    """Build a fresh engine with its own cache."""
    settings = settings or get_settings()
    return RecommendationEngine(CatalogCache(build_catalog_source(settings)))
