"""FastAPI dependency injection functions."""
from functools import lru_cache

from clinic_desk import config
from clinic_desk.front_desk import FrontDesk, create_front_desk


@lru_cache(maxsize=1)
def get_front_desk() -> FrontDesk:
    """
    Get the process-wide front desk (cached singleton).

    Tests replace it through ``app.dependency_overrides``.
    """
    return create_front_desk(seed_demo=config.SEED_DEMO_DATA)
