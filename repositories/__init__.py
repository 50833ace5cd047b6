from repositories.order_repository import OrderRepository, SqlAlchemyOrderRepository

__all__ = ["OrderRepository", "SqlAlchemyOrderRepository"]
