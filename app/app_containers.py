from dependency_injector import containers, providers
from app.core.settings import settings
from app.v1_0.v1_containers import APIContainer
from app.storage.database import async_session
from app.storage.read_model import init_read_model_database

class ApplicationContainer(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
                "app.v1_0.routers.product_router",
                "app.v1_0.routers.user_router",
                "app.v1_0.routers.cart_router",
                "app.v1_0.routers.sale_router",
            ]
    )
    db_session = providers.Object(async_session)

    # un cliente Mongo por proceso; init/shutdown en el lifespan
    read_model_database = providers.Resource(
        init_read_model_database,
        url=settings.MONGO_URL.get_secret_value(),
        database=settings.MONGO_DB,
    )

    api_container = providers.Container(
        APIContainer,
        read_model_database=read_model_database,
    )
