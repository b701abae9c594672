"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from carb_cycle.adapters.fdc_client import HttpxFdcClient
from carb_cycle.adapters.supabase_body_metrics_repository import (
    SupabaseBodyMetricsRepository,
)
from carb_cycle.adapters.supabase_exercise_repository import (
    SupabaseExerciseRepository,
)
from carb_cycle.adapters.supabase_intake_repository import SupabaseIntakeRepository
from carb_cycle.adapters.supabase_plan_repository import SupabasePlanRepository
from carb_cycle.adapters.supabase_summary_repository import SupabaseSummaryRepository
from carb_cycle.adapters.supabase_user_repository import SupabaseUserRepository
from carb_cycle.config import Settings
from carb_cycle.services.body_metrics import BodyMetricsService
from carb_cycle.services.cache import InMemoryCache
from carb_cycle.services.exercise import ExerciseService
from carb_cycle.services.intake import IntakeService
from carb_cycle.services.nutrition import NutritionService
from carb_cycle.services.plans import PlanService
from carb_cycle.services.restrictions import DietRestrictionService
from carb_cycle.services.summary import CycleSummaryService
from carb_cycle.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    body_metrics_service: BodyMetricsService
    plan_service: PlanService
    intake_service: IntakeService
    restriction_service: DietRestrictionService
    exercise_service: ExerciseService
    summary_service: CycleSummaryService
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    metrics_repository = SupabaseBodyMetricsRepository(supabase_client)
    plan_repository = SupabasePlanRepository(supabase_client)
    intake_repository = SupabaseIntakeRepository(supabase_client)
    exercise_repository = SupabaseExerciseRepository(supabase_client)
    summary_repository = SupabaseSummaryRepository(supabase_client)

    user_service = UserService(user_repository, metrics_repository)
    plan_service = PlanService(
        repository=plan_repository,
        intake_repository=intake_repository,
        user_service=user_service,
        metrics_repository=metrics_repository,
        default_cycle_days=resolved_settings.default_cycle_days,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        debug=resolved_settings.environment == "local",
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        body_metrics_service=BodyMetricsService(metrics_repository, user_service),
        plan_service=plan_service,
        intake_service=IntakeService(plan_service, intake_repository),
        restriction_service=DietRestrictionService(plan_service, intake_repository),
        exercise_service=ExerciseService(plan_service, exercise_repository),
        summary_service=CycleSummaryService(
            repository=summary_repository,
            plan_repository=plan_repository,
            intake_repository=intake_repository,
            metrics_repository=metrics_repository,
            user_service=user_service,
        ),
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
