from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.dao.product_dao import product_dao, ProductDAO
from app.models.product import Product, ProductCreate, utcnow
import uuid
import structlog

logger = structlog.get_logger()


class ProductAlreadyExistsError(ValueError):
    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id} already exists")


class ProductsService:
    def __init__(self, dao: ProductDAO = product_dao):
        self.product_dao = dao

    async def create(self, db: AsyncSession, product: ProductCreate) -> Product:
        product_data = product.model_dump()
        if not product_data.get("id"):
            product_data["id"] = uuid.uuid4().hex
        product_data["created_at"] = utcnow()

        existing = await self.product_dao.get_by_id(db, product_data["id"])
        if existing:
            logger.warning("Product id already taken", product_id=product_data["id"])
            raise ProductAlreadyExistsError(product_data["id"])

        try:
            created = await self.product_dao.create(db, obj_in=product_data)
        except IntegrityError as e:
            logger.error("Product insert violated a constraint", product_id=product_data["id"], error=str(e))
            raise ProductAlreadyExistsError(product_data["id"]) from e

        logger.info("Product created successfully", product_id=created.id)
        return created

    async def update(self, db: AsyncSession, product_id: str, product: ProductCreate) -> Optional[Product]:
        """
        Apply the payload to the stored product with the given id.

        Returns None when no product matches. The id inside the payload is
        ignored; the stored primary key never changes.
        """
        existing = await self.product_dao.get_by_id(db, product_id)
        if not existing:
            logger.warning("Product not found for update", product_id=product_id)
            return None

        update_data = product.model_dump(exclude={"id"})
        update_data["updated_at"] = utcnow()
        updated = await self.product_dao.update(db, db_obj=existing, obj_in=update_data)
        logger.info("Product updated successfully", product_id=product_id)
        return updated

    async def products(self, db: AsyncSession) -> Optional[List[Product]]:
        products = await self.product_dao.get_all_ordered(db)
        logger.info("Retrieved products", count=len(products))
        if not products:
            return None
        return products


products_service = ProductsService()


def get_products_service() -> ProductsService:
    """FastAPI dependency returning the products service"""
    return products_service
