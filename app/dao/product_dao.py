from typing import List
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.dao.base_dao import BaseDAO
from app.models.product import Product
import structlog

logger = structlog.get_logger()


class ProductDAO(BaseDAO[Product]):
    def __init__(self):
        super().__init__(Product)

    async def get_all_ordered(self, db: AsyncSession) -> List[Product]:
        """Every product, oldest first."""
        try:
            result = await db.execute(
                select(Product).order_by(Product.created_at, Product.id)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error getting products", error=str(e))
            raise


product_dao = ProductDAO()
