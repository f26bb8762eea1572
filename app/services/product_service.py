from sqlalchemy.orm import Session
from sqlalchemy import not_
from sqlalchemy.exc import SQLAlchemyError
from contextlib import contextmanager
from typing import List
import logging

from app.exceptions import ProductNotFoundError, StorageError
from app.models.product import Product
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """
    Service class for Product CRUD operations.

    Every public method is a single storage operation. Lookups that find no
    row raise ProductNotFoundError; any database failure rolls the session
    back and is re-raised as StorageError.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage(self, operation: str):
        """Translate database failures raised inside the block."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Database error during {operation}: {e}")
            raise StorageError(operation) from e

    def _get_or_raise(self, product_id: int) -> Product:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    def get_all(self) -> List[Product]:
        """
        Get every product.

        Returns:
            All products ordered by ID, newest first
        """
        with self._storage("list"):
            return self.db.query(Product).order_by(Product.id.desc()).all()

    def get_by_id(self, product_id: int) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        with self._storage("get"):
            return self._get_or_raise(product_id)

    def create(self, product_data: ProductCreate) -> Product:
        """
        Create a new product.

        Args:
            product_data: Product creation data

        Returns:
            Created product instance, with its assigned ID
        """
        with self._storage("create"):
            product = Product(
                name=product_data.name,
                price=product_data.price,
                availability=product_data.availability,
            )
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)

        logger.info(f"Product #{product.id} created")
        return product

    def update(self, product_id: int, product_data: ProductUpdate) -> Product:
        """
        Replace name, price and availability of an existing product.

        Concurrent updates of the same product are last-writer-wins.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        with self._storage("update"):
            product = self._get_or_raise(product_id)

            for field, value in product_data.model_dump().items():
                setattr(product, field, value)

            self.db.commit()
            self.db.refresh(product)

        logger.info(f"Product #{product_id} updated")
        return product

    def toggle_availability(self, product_id: int) -> Product:
        """
        Flip the availability of a product.

        The flip is a single UPDATE evaluated by the database, so two
        concurrent toggles never read the same stale value.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        with self._storage("toggle availability"):
            rowcount = (
                self.db.query(Product)
                .filter(Product.id == product_id)
                .update(
                    {Product.availability: not_(Product.availability)},
                    synchronize_session=False,
                )
            )

            if rowcount == 0:
                self.db.rollback()
                raise ProductNotFoundError(product_id)

            self.db.commit()
            product = self._get_or_raise(product_id)

        logger.info(f"Product #{product_id} availability set to {product.availability}")
        return product

    def delete(self, product_id: int) -> None:
        """
        Delete a product.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        with self._storage("delete"):
            product = self._get_or_raise(product_id)
            self.db.delete(product)
            self.db.commit()

        logger.info(f"Product #{product_id} deleted")
