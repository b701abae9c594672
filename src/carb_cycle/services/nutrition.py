"""Food lookups against USDA FoodData Central."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from carb_cycle.adapters.fdc_client import FdcClient
from carb_cycle.domain.nutrition import FoodSearchPage, FoodSearchResult, MacroProfile
from carb_cycle.planning.allocation import round_to_tenth

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}

RATE_LIMITED_STATUS = "429"

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from carb_cycle.services.cache import Cache


@dataclass
class NutritionService:
    """Service for nutrition lookups with caching."""

    fdc_client: FdcClient
    cache: "Cache"
    search_ttl_seconds: int = 3600
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, page_size: int = 10) -> FoodSearchPage:
        """Search FDC foods, dropping matches without any macro data."""
        cleaned = query.strip()
        cache_key = f"fdc:search:{cleaned.lower()}:{page_size}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodSearchPage):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(cleaned, page_size=page_size),
            action="search",
        )
        results = [
            result
            for result in (_to_search_result(food) for food in payload.get("foods", []))
            if _has_nutrition(result.macros)
        ]
        page = FoodSearchPage(
            query=cleaned,
            total_hits=int(payload.get("totalHits", 0) or 0),
            results=results,
        )
        self.cache.set(cache_key, page, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info(
                "Nutrition search FDC: query=%s results=%s", cleaned, len(results)
            )
        return page

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry; rate limits are not retried."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                status_code = status_code_from_exception(exc)
                _logger.warning(
                    "Nutrition %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code,
                    exc,
                )
                if attempt > self.retry_attempts or status_code == RATE_LIMITED_STATUS:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _to_search_result(food: dict[str, object]) -> FoodSearchResult:
    return FoodSearchResult(
        fdc_id=food["fdcId"],
        food_name=food.get("description", ""),
        brand_name=food.get("brandName"),
        data_type=food.get("dataType"),
        macros=extract_macros(food.get("foodNutrients", [])),
    )


def _has_nutrition(macros: MacroProfile) -> bool:
    return any(
        value > 0
        for value in (macros.protein_g, macros.fat_g, macros.carbs_g, macros.calories)
    )


def extract_macros(food_nutrients: list[dict[str, object]]) -> MacroProfile:
    """Extract calories, protein, fat and carbs per 100 g from search nutrients."""
    values: dict[str, float] = {name: 0.0 for name in _NUTRIENT_IDS}
    for nutrient in food_nutrients:
        nutrient_id = nutrient.get("nutrientId")
        amount = nutrient.get("value")
        if amount is None:
            continue
        for name, expected_id in _NUTRIENT_IDS.items():
            if nutrient_id == expected_id:
                values[name] = round_to_tenth(float(amount))

    return MacroProfile(
        calories=values["calories"],
        protein_g=values["protein"],
        fat_g=values["fat"],
        carbs_g=values["carbs"],
    )
