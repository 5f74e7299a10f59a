from fastapi import APIRouter, Depends, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_async_session
from app.models.product import ProductCreate, ProductRead, empty_product
from app.services.product_service import ProductsService, get_products_service
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.put("/update")
async def update_product(
    product: ProductCreate,
    id: str = Query(...),
    db: AsyncSession = Depends(get_async_session),
    products_service: ProductsService = Depends(get_products_service),
):
    """
    Update the product with the given id.

    Responds with the submitted payload: 200 when the product was updated,
    404 when no product has that id. Any failure yields 400 with an empty
    product.
    """
    try:
        updated_product = await products_service.update(db, id, product)
        # updating a product that is not in the database
        if updated_product is None:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=jsonable_encoder(product)
            )
        return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(product))
    except Exception as e:
        logger.error("error updating product", product_id=id, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(empty_product())
        )


@router.post("/create", response_class=PlainTextResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    db: AsyncSession = Depends(get_async_session),
    products_service: ProductsService = Depends(get_products_service),
):
    """
    Add a product row to the database.

    Example body:
        {"id": "2222", "price": "300", "name": "user", "purchased": false}
    """
    try:
        logger.info("adding product", product_id=product.id)
        await products_service.create(db, product)
    except Exception as e:
        logger.error("error creating product", product_id=product.id, error=str(e))
        return PlainTextResponse("could not save product", status_code=status.HTTP_400_BAD_REQUEST)
    return PlainTextResponse("product created", status_code=status.HTTP_201_CREATED)


@router.get("")
async def get_products(
    db: AsyncSession = Depends(get_async_session),
    products_service: ProductsService = Depends(get_products_service),
):
    """Fetch every product; 404 with an empty list when there are none."""
    products = await products_service.products(db)
    if not products:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=[])

    body = [ProductRead.model_validate(p.model_dump()) for p in products]
    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(body))
