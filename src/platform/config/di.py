"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema.domain.value_object.exclusivity_window import ExclusivityWindow
from src.service.cinema.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from src.service.cinema.driven_adapter.repo.catalog_command_repo_impl import (
    CatalogCommandRepoImpl,
)
from src.service.cinema.driven_adapter.repo.hall_query_repo_impl import HallQueryRepoImpl
from src.service.cinema.driven_adapter.repo.showtime_query_repo_impl import (
    ShowtimeQueryRepoImpl,
)
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine, see orm_db_setting)
    database = providers.Singleton(Database)

    # Unit of Work: a new instance per use case, a new session per `async with`
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Query repositories (stateless - use session_factory per call)
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    hall_query_repo = providers.Singleton(
        HallQueryRepoImpl, session_factory=database.provided.session
    )
    showtime_query_repo = providers.Singleton(
        ShowtimeQueryRepoImpl, session_factory=database.provided.session
    )
    catalog_command_repo = providers.Singleton(
        CatalogCommandRepoImpl, session_factory=database.provided.session
    )

    # Scheduling rule
    exclusivity_window = providers.Singleton(
        ExclusivityWindow, minutes=config_service.provided.SHOWTIME_EXCLUSIVITY_WINDOW_MINUTES
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def cleanup() -> None:
    container.reset_singletons()
