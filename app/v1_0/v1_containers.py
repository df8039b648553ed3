from dependency_injector import containers, providers
from app.core.settings import settings
from app.v1_0.repositories import (
    ProductRepository,
    UserRepository,
    CartRepository,
    SaleRepository,
    SaleReadModelRepository,
    )
from app.v1_0.services import (
    ProductService,
    UserService,
    CartService,
    SaleService,
    )

class APIContainer(containers.DeclarativeContainer):
    # base de datos del read model; la provee ApplicationContainer
    read_model_database = providers.Dependency()

    product_repository = providers.Singleton(ProductRepository)
    user_repository = providers.Singleton(UserRepository)
    cart_repository = providers.Singleton(CartRepository)
    sale_repository = providers.Singleton(SaleRepository)
    sale_read_model_repository = providers.Singleton(
        SaleReadModelRepository,
        database = read_model_database,
        collection_name = settings.MONGO_SALES_COLLECTION
    )

    product_service = providers.Singleton(
        ProductService,
        product_repository = product_repository,
        default_page_size = settings.DEFAULT_PAGE_SIZE,
        max_page_size = settings.MAX_PAGE_SIZE
    )
    user_service = providers.Singleton(
        UserService,
        user_repository = user_repository,
        default_page_size = settings.DEFAULT_PAGE_SIZE,
        max_page_size = settings.MAX_PAGE_SIZE
    )
    cart_service = providers.Singleton(
        CartService,
        cart_repository = cart_repository,
        user_repository = user_repository,
        product_repository = product_repository,
        default_page_size = settings.DEFAULT_PAGE_SIZE,
        max_page_size = settings.MAX_PAGE_SIZE
    )
    sale_service = providers.Singleton(
        SaleService,
        sale_repository = sale_repository,
        sale_read_model_repository = sale_read_model_repository,
        default_page_size = settings.DEFAULT_PAGE_SIZE,
        max_page_size = settings.MAX_PAGE_SIZE
    )
