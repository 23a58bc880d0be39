# app/repos/order_repo.py
from sqlalchemy.orm import Session, selectinload

from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel
from app.repos.generic_repo import GenericRepo


class OrderRepo(GenericRepo[OrderModel]):
    model = OrderModel

    def __init__(self, db: Session):
        super().__init__(db)

    def _load_options(self) -> list:
        #pozycje + produkty, bo OrderOut pokazuje nazwe produktu
        return [selectinload(OrderModel.items).selectinload(OrderItemModel.product)]

    def get_with_items(self, order_id: int) -> OrderModel | None:
        return self.get(order_id)

    def get_by_order_number(self, order_number: str) -> OrderModel | None:
        return self.single_or_default(OrderModel.order_number == order_number)

    def get_for_user(self, user_id: int, page_number: int, page_size: int) -> tuple[list[OrderModel], int]:
        #najnowsze najpierw
        return self.paginate(
            page_number,
            page_size,
            OrderModel.user_id == user_id,
            order_by=OrderModel.order_date.desc(),
        )

    def remove_with_items(self, order: OrderModel) -> None:
        """Soft delete zamowienia razem z jego pozycjami."""
        for item in order.items:
            if not item.is_deleted:
                item.soft_delete()
        self.remove(order)
